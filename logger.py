"""
Logging setup for the chat service.

``get_logger(__name__)`` hands every module a logger writing to stdout in one
format. ``settings.ENV`` picks the verbosity for our own modules (``dev`` →
DEBUG, ``prod`` → WARNING) and for the chatty client libraries underneath the
pipeline, which otherwise log every HTTP request to OpenAI and Qdrant.

Uvicorn gets the same format through ``uvicorn_log_config()``:

    uvicorn.run("app:app", log_config = uvicorn_log_config())
"""

import logging
import sys

from settings import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_ENV_LEVEL_MAP = {
    "dev": logging.DEBUG,
    "prod": logging.WARNING,
}

# client libraries stay one notch quieter than our own code
_LIBRARY_LEVEL_MAP = {
    "dev": logging.INFO,
    "prod": logging.WARNING,
}
LIBRARY_LOGGERS = ("httpx", "httpcore", "openai", "qdrant_client", "langsmith", "urllib3")

_DEFAULT_LEVEL = _ENV_LEVEL_MAP.get(settings.ENV, logging.INFO)
_LIBRARY_LEVEL = _LIBRARY_LEVEL_MAP.get(settings.ENV, logging.WARNING)


def _handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt = LOG_FORMAT, datefmt = DATE_FORMAT))
    return handler


def quiet_library_loggers(level: int = _LIBRARY_LEVEL) -> None:
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """
    Return a named logger with the service's stdout handler attached once.

    Args:
        name:  Usually ``__name__`` of the caller.
        level: Explicit level; defaults to the one derived from ``settings.ENV``.
    """
    resolved_level = level if level is not None else _DEFAULT_LEVEL
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(resolved_level)
        logger.addHandler(_handler(resolved_level))
        # root logger would print a second copy
        logger.propagate = False

    return logger


def uvicorn_log_config() -> dict:
    """``logging.config`` dict giving uvicorn's loggers the service format and level."""
    level = logging.getLevelName(max(_DEFAULT_LEVEL, logging.INFO))
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
        },
        "handlers": {
            "default": {"class": "logging.StreamHandler", "formatter": "default", "stream": "ext://sys.stdout"},
        },
        "loggers": {
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"level": level},
            "uvicorn.access": {"handlers": ["default"], "level": level, "propagate": False},
        },
    }


quiet_library_loggers()
