"""Rich console handler that renders structured cache events."""

from __future__ import annotations

import logging
from pathlib import PurePath, PurePosixPath
from typing import Any, ClassVar

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class CacheRichHandler(RichHandler):
    """Rich handler that prefixes cache events with an icon and colour."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "cache.artifact.found": ("🔎", "cyan"),
        "cache.artifact.missing": ("❔", "yellow"),
        "install.artifact.removed": ("🧹", "magenta"),
        "install.artifact.done": ("📦", "green"),
        "install.marker.copied": ("📝", "green"),
        "install.artifact.warning": ("⚠️", "yellow"),
        "symbols.uuids.discovered": ("🧬", "blue"),
        "symbols.uuid.failed": ("⛔", "red"),
        "unit.failed": ("❌", "red"),
        "run.complete": ("✅", "green"),
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, verbose: bool = False, **kwargs: Any) -> None:
        """Initialize the handler; ``verbose`` adds a timestamp column."""

        kwargs["show_time"] = verbose
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Render ``path`` compactly, keeping only its trailing segments."""

        pure_path: PurePath = PurePosixPath(path)
        anchor = pure_path.anchor
        body_parts = [part for part in pure_path.parts if part and part != anchor]

        display = anchor
        if len(body_parts) > self._PATH_SEGMENT_LIMIT:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]
            display = "…/"
        display += "/".join(body_parts)

        text = Text()
        for char in display or ".":
            color = "magenta" if char in {"/", "…"} else "white"
            _ = text.append(char, style=Style(color=color))
        return text

    def _render_event(self, record: logging.LogRecord, message: str) -> Text | None:
        event = getattr(record, "cache_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        # The record message embeds the full path for file logs; the console
        # shows the short summary and a compacted path instead.
        path = getattr(record, "cache_path", None)
        summary = getattr(record, "cache_summary", None)
        if path and isinstance(summary, str):
            _ = text.append(summary, style=Style(color=color))
            _ = text.append(" @ ")
            _ = text.append_text(self._format_path(str(path)))
        else:
            _ = text.append(message, style=Style(color=color))
        return text

    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render cache events with dedicated styling, defer otherwise."""

        event_text = self._render_event(record, message)
        if event_text is not None:
            return event_text
        return super().render_message(record, message)


__all__ = ["CacheRichHandler"]
