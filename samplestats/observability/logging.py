"""Standard Python logging configuration."""
from __future__ import annotations

import logging
import sys

DEFAULT_LEVEL = "INFO"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    """Configure standard Python logging.

    The stdout handler is installed **exactly once**; the level is applied on
    every call so each app picks up its own settings.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for name in UVICORN_LOGGERS:
        logging.getLogger(name).setLevel(level)

    if getattr(setup_logging, "_configured", False):  # type: ignore[attr-defined]
        return

    # Create a standard formatter with gunicorn-like brackets
    formatter = logging.Formatter(
        fmt='[%(asctime)s] [%(process)d] [%(levelname)s] %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S %z'
    )

    # Configure stdout handler
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    # Configure root logger
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # Configure uvicorn loggers to propagate to root logger
    for name in UVICORN_LOGGERS:
        logger = logging.getLogger(name)
        logger.handlers.clear()  # Remove any existing handlers
        logger.propagate = True  # Propagate logs to root logger

    setup_logging._configured = True  # type: ignore[attr-defined]
