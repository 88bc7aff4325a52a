"""Logging setup: pretty console output, JSON output and a discarding logger."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any, Mapping, TextIO

from termcolor import colored

ENV_LOCAL = "local"
ENV_DEV = "dev"
ENV_PROD = "prod"

_LOGGER_NAME = "gwexchanger"
_DISCARD_LOGGER_NAME = "gwexchanger.discard"

_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
}

_LEVEL_COLORS = {
    logging.DEBUG: "magenta",
    logging.INFO: "blue",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
}

_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


def err_attr(err: BaseException) -> dict[str, str]:
    """Return an error as a structured field, for use as ``extra=``."""
    return {"error": str(err)}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}


def _level_name(levelno: int, fallback: str) -> str:
    return _LEVEL_NAMES.get(levelno, fallback)


class DiscardHandler(logging.Handler):
    """A handler that drops every record, counting how many it dropped."""

    def __init__(self) -> None:
        super().__init__(level=logging.CRITICAL + 1)
        self.dropped = 0

    def emit(self, record: logging.LogRecord) -> None:
        self.dropped += 1


def new_discard_logger() -> logging.Logger:
    """Return a logger that ignores everything logged to it."""
    logger = logging.getLogger(_DISCARD_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(DiscardHandler())
    logger.setLevel(logging.CRITICAL + 1)
    logger.propagate = False
    return logger


class PrettyFormatter(logging.Formatter):
    """Formats records as a coloured line followed by indented JSON fields."""

    def __init__(self, attrs: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._attrs = dict(attrs or {})

    def format(self, record: logging.LogRecord) -> str:
        level = _level_name(record.levelno, record.levelname) + ":"
        color = _LEVEL_COLORS.get(record.levelno)
        if color:
            level = colored(level, color)

        fields = _extra_fields(record)
        fields.update(self._attrs)
        body = (
            json.dumps(fields, indent=2, sort_keys=True, default=str, ensure_ascii=False)
            if fields
            else ""
        )

        ts = datetime.fromtimestamp(record.created)
        # The established layout repeats the seconds in the minutes position.
        time_str = f"[{ts.hour:02d}:{ts.second:02d}:{ts.second:02d}.{ts.microsecond // 1000:03d}]"
        msg = colored(record.getMessage(), "cyan")
        return " ".join([time_str, level, msg, colored(body, "white")])


class _JsonFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created)
            .astimezone()
            .isoformat(timespec="milliseconds"),
            "level": _level_name(record.levelno, record.levelname),
            "msg": record.getMessage(),
        }
        entry.update(_extra_fields(record))
        return json.dumps(entry, default=str, ensure_ascii=False)


def new_pretty_handler(stream: TextIO | None = None) -> logging.Handler:
    """Return a debug-level handler writing pretty records to ``stream``."""
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(PrettyFormatter())
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logger(env: str, stream: TextIO | None = None) -> logging.Logger:
    """Configure and return the application logger for the given environment."""
    out = stream if stream is not None else sys.stdout
    if env == ENV_LOCAL:
        handler = new_pretty_handler(out)
        level = logging.DEBUG
    elif env == ENV_DEV:
        handler = logging.StreamHandler(out)
        handler.setFormatter(_JsonFormatter())
        level = logging.DEBUG
    elif env == ENV_PROD:
        handler = logging.StreamHandler(out)
        handler.setFormatter(_JsonFormatter())
        level = logging.INFO
    else:
        raise ValueError("unknown env")

    logger = logging.getLogger(_LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger