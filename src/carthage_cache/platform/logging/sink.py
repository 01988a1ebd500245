"""Summary: Adapt a standard logger to the retrieval ``LogSink`` protocol.
Why: Operations report progress through an injected sink instead of a verbosity flag.
"""

from __future__ import annotations

import logging
from typing import final


@final
class LoggerSink:
    """Forward sink messages to ``logger`` with structured extras."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger: logging.Logger = logger

    def say(
        self,
        message: str,
        *args: object,
        event: str | None = None,
        path: object | None = None,
    ) -> None:
        self._emit(logging.INFO, message, args, event, path)

    def warn(
        self,
        message: str,
        *args: object,
        event: str | None = None,
        path: object | None = None,
    ) -> None:
        self._emit(logging.WARNING, message, args, event, path)

    def _emit(
        self,
        level: int,
        message: str,
        args: tuple[object, ...],
        event: str | None,
        path: object | None,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        extra: dict[str, object] = {}
        if event is not None:
            extra["cache_event"] = str(event)
        if path is not None:
            extra["cache_path"] = str(path)
            extra["cache_summary"] = message % args if args else message
            message = f"{message} at: %s"
            args = (*args, path)
        self._logger.log(level, message, *args, extra=extra)


__all__ = ["LoggerSink"]
