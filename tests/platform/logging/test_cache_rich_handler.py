"""Tests for ``CacheRichHandler`` event rendering."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Any

from rich.console import Console
from rich.text import Text

from carthage_cache.platform.logging import CacheEvent, CacheRichHandler


def _make_handler() -> CacheRichHandler:
    """Create a handler instance with an in-memory console."""

    console = Console(file=StringIO(), force_terminal=True, soft_wrap=True)
    return CacheRichHandler(console=console)


def _build_record(**extras: Any) -> logging.LogRecord:
    record = logging.LogRecord(
        name="carthage_cache",
        level=logging.INFO,
        pathname="test",
        lineno=0,
        msg="",
        args=(),
        exc_info=None,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


def test_event_with_path_renders_summary_and_compact_path() -> None:
    """Long cache paths keep only their trailing segments."""

    handler = _make_handler()
    record = _build_record(
        cache_event=CacheEvent.ARTIFACT_FOUND.value,
        cache_summary="Found FrameworkA in local cache",
        cache_path="/Users/dev/cache/team1/RepoA/iOS/FrameworkA.framework-1.2.0.zip",
    )

    rendered = handler.render_message(record, "ignored full message")

    assert isinstance(rendered, Text)
    assert rendered.plain == "🔎 Found FrameworkA in local cache @ …/team1/RepoA/iOS/FrameworkA.framework-1.2.0.zip"


def test_short_paths_are_kept_whole() -> None:
    handler = _make_handler()
    record = _build_record(
        cache_event=CacheEvent.INSTALL_COPIED.value,
        cache_summary="Copied .RepoA.version",
        cache_path="Build/.RepoA.version",
    )

    rendered = handler.render_message(record, "")

    assert isinstance(rendered, Text)
    assert rendered.plain.endswith("@ Build/.RepoA.version")


def test_event_without_path_uses_message() -> None:
    handler = _make_handler()
    record = _build_record(cache_event=CacheEvent.RUN_COMPLETE.value)

    rendered = handler.render_message(record, "Retrieval finished: 3 succeeded, 0 failed")

    assert isinstance(rendered, Text)
    assert rendered.plain == "✅ Retrieval finished: 3 succeeded, 0 failed"


def test_plain_records_defer_to_rich() -> None:
    handler = _make_handler()

    rendered = handler.render_message(_build_record(), "plain message")

    assert isinstance(rendered, Text)
    assert rendered.plain == "plain message"
