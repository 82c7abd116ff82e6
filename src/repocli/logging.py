"""Structured logging for repocli.

Everything goes to stderr: stdout belongs to the wrapped CLI and downstream
automation parses it.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from .errors import redact

DEBUG_ENV = "REPOCLI_DEBUG"
JSON_ENV = "REPOCLI_LOG_JSON"


def env_flag(name: str, environ: dict[str, str] | None = None) -> bool:
    value = (environ if environ is not None else os.environ).get(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        reserved = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
            "message",
            "asctime",
        }
        for k, v in record.__dict__.items():
            if k not in reserved and not k.startswith("_") and k not in entry:
                entry[k] = v
        return json.dumps(entry, default=str)


class StructuredLogger:
    def __init__(
        self,
        name: str = "repocli",
        json_logging: bool = False,
        level: str = "WARNING",
        stream: TextIO | None = None,
    ) -> None:
        self._logger = logging.getLogger(name)
        self._logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
        for h in list(self._logger.handlers):
            self._logger.removeHandler(h)
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(
            JSONFormatter() if json_logging else logging.Formatter("[%(levelname)s] %(message)s")
        )
        self._logger.addHandler(handler)
        self._logger.propagate = False

    @property
    def debug_enabled(self) -> bool:
        return self._logger.isEnabledFor(logging.DEBUG)

    def log_dispatch(self, handler: str, verb: str, subcommand: str) -> None:
        self._logger.debug(
            "dispatch %s %s -> %s",
            verb,
            subcommand,
            handler,
            extra={"operation": "dispatch", "handler": handler},
        )

    def log_native_invocation(self, described: str, **kw: Any) -> None:
        # Echo of the fully translated command line; described is already redacted.
        self._logger.debug(described, extra={"operation": "native_exec", **kw})

    def log_error(self, message: str, error: str | None = None, **kw: Any) -> None:
        extra = dict(kw)
        if error:
            extra["error"] = redact(error)
        self._logger.error(redact(message), extra=extra)

    def debug(self, message: str, **kw: Any) -> None:
        self._logger.debug(message, extra=kw)

    def info(self, message: str, **kw: Any) -> None:
        self._logger.info(message, extra=kw)

    def warning(self, message: str, **kw: Any) -> None:
        self._logger.warning(message, extra=kw)


_GLOBAL: StructuredLogger | None = None


def get_logger() -> StructuredLogger:
    global _GLOBAL  # noqa: PLW0603
    if _GLOBAL is None:
        _GLOBAL = StructuredLogger()
    return _GLOBAL


def configure_logging(
    *,
    debug: bool | None = None,
    json_logging: bool | None = None,
    stream: TextIO | None = None,
) -> StructuredLogger:
    """(Re)build the process logger from explicit values or the environment."""
    global _GLOBAL  # noqa: PLW0603
    if debug is None:
        debug = env_flag(DEBUG_ENV)
    if json_logging is None:
        json_logging = env_flag(JSON_ENV)
    _GLOBAL = StructuredLogger(
        json_logging=json_logging,
        level="DEBUG" if debug else "WARNING",
        stream=stream,
    )
    return _GLOBAL


__all__ = ["StructuredLogger", "configure_logging", "env_flag", "get_logger"]
