"""Application configuration loaded from a YAML file."""

from __future__ import annotations

import argparse
import os
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Mapping, Sequence

import yaml

DEFAULT_ENV = "local"
DEFAULT_TOKEN_TTL = "1h"
DEFAULT_GRPC_PORT = 44044
DEFAULT_GRPC_TIMEOUT = "10h"


class ConfigError(ValueError):
    """Raised when the configuration cannot be found or is invalid."""


_UNIT_NS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_DURATION_PART = re.compile(r"(\d*(?:\.\d*)?)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: Any) -> timedelta:
    """Parse a duration such as ``1h30m`` or ``250ms``; integers are nanoseconds."""
    if isinstance(text, timedelta):
        return text
    if isinstance(text, bool):
        raise ConfigError(f"invalid duration {text!r}")
    if isinstance(text, int):
        return timedelta(microseconds=text / 1000)
    if not isinstance(text, str):
        raise ConfigError(f"invalid duration {text!r}")

    s = text
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not s:
        raise ConfigError(f"invalid duration {text!r}")

    total_ns = 0.0
    pos = 0
    while pos < len(s):
        match = _DURATION_PART.match(s, pos)
        if match is None or match.group(1) in ("", "."):
            raise ConfigError(f"invalid duration {text!r}")
        total_ns += float(match.group(1)) * _UNIT_NS[match.group(2)]
        pos = match.end()
    return timedelta(microseconds=sign * total_ns / 1000)


@dataclass(frozen=True)
class GRPCConfig:
    """Settings of the gRPC listener."""

    port: int = DEFAULT_GRPC_PORT
    timeout: timedelta = field(default_factory=lambda: parse_duration(DEFAULT_GRPC_TIMEOUT))


@dataclass(frozen=True, kw_only=True)
class Config:
    """Top-level application settings."""

    env: str = DEFAULT_ENV
    storage_path: str
    token_ttl: timedelta = field(default_factory=lambda: parse_duration(DEFAULT_TOKEN_TTL))
    grpc: GRPCConfig = field(default_factory=GRPCConfig)


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"field {name!r} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"field {name!r} must be an integer") from exc


def read_config(path: str | os.PathLike[str]) -> Config:
    """Read a configuration file, applying defaults to missing fields."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as exc:
        raise ConfigError(f"config file error: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"config file parsing error: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError("config file must hold a mapping")

    grpc_data = data.get("grpc") or {}
    if not isinstance(grpc_data, Mapping):
        raise ConfigError("field 'grpc' must be a mapping")

    storage_path = data.get("storage_path") or ""
    if not storage_path:
        raise ConfigError('field "StoragePath" is required but the value is not provided')

    return Config(
        env=str(data.get("env") or DEFAULT_ENV),
        storage_path=str(storage_path),
        token_ttl=parse_duration(data.get("token_ttl") or DEFAULT_TOKEN_TTL),
        grpc=GRPCConfig(
            port=_as_int(grpc_data.get("port") or DEFAULT_GRPC_PORT, "grpc.port"),
            timeout=parse_duration(grpc_data.get("timeout") or DEFAULT_GRPC_TIMEOUT),
        ),
    )


def fetch_config_path(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Return the config path from ``-config``, else ``CONFIG_PATH``, else ``""``."""
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument("-config", "--config", dest="config", default="",
                        help="path to config file")
    args = parser.parse_args(argv)
    if args.config:
        return args.config
    env = os.environ if environ is None else environ
    return env.get("CONFIG_PATH", "")


def must_load(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Locate and load the configuration, raising ConfigError on any problem."""
    path = fetch_config_path(argv, environ)
    if not path:
        raise ConfigError("config path is empty")
    if not os.path.exists(path):
        raise ConfigError("config file not found")
    return read_config(path)