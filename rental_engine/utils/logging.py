"""Logging utilities with structured output for the rental engine."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_NAMESPACE = "rental_engine"


def configure_logging(namespace: str = _NAMESPACE, level: Optional[str] = None) -> logging.Logger:
    """Return the engine logger, attaching a single stream handler on first use.

    Records are one line each, ``<time> <level> <logger> <event> key=value ...``,
    so an analysis trail can be grepped by event name or field.
    """

    logger = logging.getLogger(namespace)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    logger.addHandler(handler)
    logger.setLevel(level or _LOG_LEVEL)
    logger.propagate = False
    return logger


def get_logger(child: Optional[str] = None) -> logging.Logger:
    base = configure_logging()
    if child:
        return base.getChild(child)
    return base


def _render(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.2f}"
    text = str(value)
    return f'"{text}"' if " " in text else text


def kv(**fields: Any) -> str:
    """Render fields as ``key=value`` pairs in call order; floats get two decimals."""

    return " ".join(f"{key}={_render(value)}" for key, value in fields.items())


__all__ = ["configure_logging", "get_logger", "kv"]
