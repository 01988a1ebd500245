"""
Summary: Cache-addressed fetch shared by every artifact kind.
Why: One existence-check-and-read path replaces four per-kind copies.
"""

from __future__ import annotations

from pathlib import Path

from carthage_cache.platform.logging import CacheEvent

from ..domain.errors import ArtifactNotFoundError, CacheReadError
from ..domain.models import ArtifactDescriptor, RetrievalContext
from .ports import CacheReader


def fetch_artifact(
    cache_root: Path,
    descriptor: ArtifactDescriptor,
    reader: CacheReader,
    context: RetrievalContext,
) -> bytes:
    """Return the exact bytes stored for ``descriptor`` under ``cache_root``.

    Raises:
        ArtifactNotFoundError: Nothing is stored at the resolved location.
        CacheReadError: The stored file exists but cannot be read.
    """

    location = descriptor.cache_location(cache_root)
    if not reader.exists(location):
        raise ArtifactNotFoundError(descriptor.name, location)

    try:
        payload = reader.read_bytes(location)
    except FileNotFoundError:
        raise ArtifactNotFoundError(descriptor.name, location) from None
    except OSError as exc:
        raise CacheReadError(descriptor.name, location, str(exc)) from exc
    context.sink.say(
        "Found %s in local cache",
        descriptor.name,
        event=CacheEvent.ARTIFACT_FOUND,
        path=location,
    )
    return payload


__all__ = ["fetch_artifact"]
