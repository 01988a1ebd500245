"""Filesystem adapter reading artifacts out of a local cache directory."""

from __future__ import annotations

from pathlib import Path

from ..usecases.ports import CacheReader


class LocalCacheReader(CacheReader):
    """Thin wrapper around the local filesystem."""

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()


__all__ = ["LocalCacheReader"]
