"""Loguru setup for services built on porest-core.

Exception handlers bind ``request_id``, ``method`` and ``path`` to each
record; the defaults below keep the formats valid for records logged
outside a request.
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from porest_core.core.config import settings

REQUEST_EXTRA_DEFAULTS = {
    "request_id": "-",
    "method": "-",
    "path": "-",
    "status_code": "-",
}

_REQUEST_FIELDS = (
    "req={extra[request_id]} method={extra[method]} "
    "path={extra[path]} status={extra[status_code]}"
)
_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> | " + _REQUEST_FIELDS + " - <level>{message}</level>"
)
_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} | "
    + _REQUEST_FIELDS
    + " - {message}"
)


def setup_logging(log_level: str = "INFO") -> None:
    """Replace loguru's sinks with the console sink and optional file sinks.

    ``DEBUG`` forces the DEBUG level and renders tracebacks with variable
    values on the console. File sinks exist only when ``LOG_TO_FILE`` is set:
    a daily application log and an error log that always keeps tracebacks.

    Args:
        log_level: Minimum level for application logs.
    """
    logger.remove()
    logger.configure(extra=dict(REQUEST_EXTRA_DEFAULTS))

    level = "DEBUG" if settings.DEBUG else log_level.upper()

    logger.add(
        sys.stdout,
        level=level,
        colorize=True,
        enqueue=True,
        backtrace=settings.DEBUG,
        diagnose=settings.DEBUG,
        format=_CONSOLE_FORMAT,
    )

    if not settings.LOG_TO_FILE:
        return

    log_dir = Path(settings.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / "app_{time:YYYY-MM-DD}.log",
        level=level,
        rotation="00:00",
        retention="30 days",
        compression="zip",
        enqueue=True,
        format=_FILE_FORMAT,
    )
    logger.add(
        log_dir / "errors_{time:YYYY-MM-DD}.log",
        level="ERROR",
        rotation="100 MB",
        retention="90 days",
        compression="zip",
        enqueue=True,
        backtrace=True,
        diagnose=False,
        format=_FILE_FORMAT,
    )


__all__ = ["REQUEST_EXTRA_DEFAULTS", "setup_logging"]
