"""Ports for the retrieval feature.

Where: features/retrieval/usecases.
What: Protocols describing the storage and binary-inspection collaborators.
Why: Keep fetch/install orchestration independent of the concrete filesystem and Xcode tooling.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from ..domain.models import SymbolUUID


@runtime_checkable
class CacheReader(Protocol):
    """Read-only access to a cache root."""

    def exists(self, path: Path) -> bool:
        """Return True if a file is stored at ``path``."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Return the full content stored at ``path``."""
        ...


@runtime_checkable
class UUIDInspector(Protocol):
    """Enumerate the debug-info UUIDs embedded in a compiled binary."""

    def uuids(self, binary_path: Path) -> list[SymbolUUID]:
        """Return one UUID per architecture slice; raise on inspection failure."""
        ...


@runtime_checkable
class ArchiveExtractor(Protocol):
    """Extract a named entry of an in-memory archive into a directory."""

    def __call__(self, payload: bytes, entry_name: str, target_dir: Path) -> Path:
        """Write the entry under ``target_dir`` and return its extracted path."""
        ...


__all__ = ["ArchiveExtractor", "CacheReader", "UUIDInspector"]
