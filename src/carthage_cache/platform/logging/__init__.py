"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export configured logger, setup helpers, sink adapter and custom Rich handlers.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .config import DEFAULT_LOG_FILE, LOGGER_NAME, logger, setup_logger
from .events import CacheEvent
from .handlers import CacheRichHandler
from .sink import LoggerSink

__all__ = [
    "DEFAULT_LOG_FILE",
    "LOGGER_NAME",
    "CacheEvent",
    "CacheRichHandler",
    "LoggerSink",
    "logger",
    "setup_logger",
]
