"""Logging configuration using loguru.

Modules log event names with keyword context::

    logger = get_logger(__name__)
    logger.info("preferences_saved", user_id=user_id)
"""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Literal

from loguru import logger

logger.remove()

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <5}</level> | "
    "<cyan>{extra[name]}</cyan> | "
    "<level>{message}</level>"
    "<yellow>{extra[context]}</yellow>"
)

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn.access",
    "openai",
    "anthropic",
    "google_genai",
    "boto3",
    "botocore",
    "urllib3",
)


def _with_context(record) -> bool:
    """Flatten bound/keyword extras into one ``| k=v, ...`` suffix."""
    extra = record["extra"]
    extra.setdefault("name", record["name"])
    pairs = [f"{k}={v!r}" for k, v in extra.items() if k not in ("name", "context")]
    extra["context"] = " | " + ", ".join(pairs) if pairs else ""
    return True


class InterceptHandler(logging.Handler):
    """Forward stdlib records (uvicorn, SDKs) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "console",
) -> None:
    """Configure loguru sinks and route stdlib logging through them.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "json" for serialized records, "console" for colored lines
    """
    logger.remove()

    if log_format == "json":
        logger.add(sys.stdout, format="{message}", level=log_level.upper(), serialize=True)
    else:
        logger.add(
            sys.stdout,
            format=CONSOLE_FORMAT,
            level=log_level.upper(),
            filter=_with_context,
            colorize=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None):
    """Return the loguru logger, bound to ``name`` when given."""
    if name:
        return logger.bind(name=name)
    return logger


@contextmanager
def log_timing(logger_instance, event_name: str, **context):
    """Log ``{event}_started``, then ``{event}_completed`` or ``{event}_failed`` with duration_ms.

    Exceptions are logged and re-raised unchanged.
    """
    start = time.perf_counter()
    logger_instance.debug(f"{event_name}_started", **context)
    try:
        yield
    except Exception as e:
        elapsed = int((time.perf_counter() - start) * 1000)
        logger_instance.error(f"{event_name}_failed", duration_ms=elapsed, error=str(e), **context)
        raise
    elapsed = int((time.perf_counter() - start) * 1000)
    logger_instance.info(f"{event_name}_completed", duration_ms=elapsed, **context)
