"""loguru setup for sessionauth.

Every record carries the request's correlation id and goes through the
redaction filter before reaching a sink.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)
_DEFAULT_LOG_FILE = Path(__file__).resolve().parents[2] / "instance" / "sessionauth.log"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="-")


def _attach_correlation_id(record) -> None:
    record["extra"]["correlation_id"] = _correlation_id.get()


logger = _logger.patch(_attach_correlation_id)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def clear_correlation_id() -> None:
    _correlation_id.set("-")


class _StdlibBridge(logging.Handler):
    """Forwards werkzeug and SQLAlchemy records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str | None = None, *, debug_mode: bool = False, log_file: str | None = None) -> None:
    level = "DEBUG" if debug_mode else (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    path = Path(log_file or os.getenv("LOG_FILE") or _DEFAULT_LOG_FILE)
    path.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    common = {"level": level, "format": _FMT, "backtrace": False, "diagnose": False, "filter": sanitize_record}
    _logger.add(sys.stderr, colorize=True, **common)
    _logger.add(str(path), colorize=False, enqueue=True, encoding="utf-8", **common)

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["clear_correlation_id", "logger", "set_correlation_id", "setup_logging"]
