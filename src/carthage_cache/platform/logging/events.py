"""Structured event identifiers attached to retrieval log records."""

from __future__ import annotations

from enum import StrEnum


class CacheEvent(StrEnum):
    """Values stored in the ``cache_event`` extra of a log record."""

    ARTIFACT_FOUND = "cache.artifact.found"
    ARTIFACT_MISSING = "cache.artifact.missing"
    INSTALL_REMOVED = "install.artifact.removed"
    INSTALL_DONE = "install.artifact.done"
    INSTALL_COPIED = "install.marker.copied"
    INSTALL_WARNING = "install.artifact.warning"
    SYMBOLS_DISCOVERED = "symbols.uuids.discovered"
    SYMBOLS_FAILED = "symbols.uuid.failed"
    UNIT_FAILED = "unit.failed"
    RUN_COMPLETE = "run.complete"


__all__ = ["CacheEvent"]
