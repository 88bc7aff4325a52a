import io
import json
import logging
import re
from datetime import datetime

import pytest

from gwexchanger.logs import (
    DiscardHandler,
    PrettyFormatter,
    err_attr,
    new_discard_logger,
    new_pretty_handler,
    setup_logger,
)

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text):
    return _ANSI.sub("", text)


def _record(msg, levelno, **extra):
    data = {
        "msg": msg,
        "levelno": levelno,
        "levelname": logging.getLevelName(levelno),
        "created": datetime(2024, 1, 2, 13, 45, 30, 125000).timestamp(),
    }
    data.update(extra)
    return logging.makeLogRecord(data)


def test_err_attr():
    assert err_attr(ValueError("boom")) == {"error": "boom"}


def test_discard_logger_is_disabled():
    logger = new_discard_logger()
    assert not logger.isEnabledFor(logging.CRITICAL)
    assert any(isinstance(h, DiscardHandler) for h in logger.handlers)


def test_discard_logger_single_handler_after_repeat():
    new_discard_logger()
    logger = new_discard_logger()
    assert len(logger.handlers) == 1


def test_pretty_formatter_without_fields():
    line = _plain(PrettyFormatter().format(_record("hello", logging.INFO)))
    assert line.rstrip() == "[13:30:30.125] INFO: hello"


def test_pretty_formatter_warn_level_name():
    line = _plain(PrettyFormatter().format(_record("careful", logging.WARNING)))
    assert "WARN: careful" in line


def test_pretty_formatter_fields_as_json():
    rec = _record("starting", logging.DEBUG, op="grpcapp.Run", port=44044)
    line = _plain(PrettyFormatter().format(rec))
    head, _, body = line.partition("starting ")
    assert head.endswith("DEBUG: ")
    assert json.loads(body) == {"op": "grpcapp.Run", "port": 44044}


def test_pretty_formatter_attrs_merged():
    rec = _record("x", logging.ERROR, a=1)
    line = _plain(PrettyFormatter(attrs={"b": 2}).format(rec))
    body = line.partition("x ")[2]
    assert json.loads(body) == {"a": 1, "b": 2}


def test_new_pretty_handler_writes_stream():
    stream = io.StringIO()
    handler = new_pretty_handler(stream)
    handler.handle(_record("written", logging.INFO))
    assert "written" in _plain(stream.getvalue())


def test_setup_logger_dev_json():
    stream = io.StringIO()
    logger = setup_logger("dev", stream)
    logger.debug("config", extra={"env": "dev"})
    entry = json.loads(stream.getvalue().strip())
    assert entry["level"] == "DEBUG"
    assert entry["msg"] == "config"
    assert entry["env"] == "dev"


def test_setup_logger_prod_hides_debug():
    stream = io.StringIO()
    logger = setup_logger("prod", stream)
    logger.debug("hidden")
    logger.info("shown")
    lines = stream.getvalue().strip().splitlines()
    assert [json.loads(x)["msg"] for x in lines] == ["shown"]


def test_setup_logger_local_pretty():
    stream = io.StringIO()
    logger = setup_logger("local", stream)
    logger.debug("starting gw-exchanger")
    assert "DEBUG: starting gw-exchanger" in _plain(stream.getvalue())


def test_setup_logger_unknown_env():
    with pytest.raises(ValueError, match="unknown env"):
        setup_logger("staging", io.StringIO())