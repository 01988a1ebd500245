"""src/carthage_cache/features/retrieval/usecases/retrieve.py
What: Fetch-then-install for a single artifact of any kind.
Why: Every work unit and every symbol map UUID shares this sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from carthage_cache.platform.logging import CacheEvent

from ..domain.errors import ArtifactNotFoundError
from ..domain.models import (
    ArtifactDescriptor,
    FrameworkIdentity,
    GitRepoVersionMarker,
    RetrievalContext,
    ReverseRepositoryMap,
    SymbolUUID,
    TargetPlatform,
)
from ..domain.paths import (
    DEFAULT_BUILD_ROOT,
    describe_bcsymbolmap,
    describe_dsym,
    describe_framework,
    describe_version_marker,
)
from .fetch import fetch_artifact
from .install import ArtifactInstaller
from .ports import CacheReader


@dataclass(slots=True)
class ArtifactRetriever:
    """Resolve, fetch and install artifacts from one local cache root."""

    cache_root: Path
    reverse_map: ReverseRepositoryMap
    context: RetrievalContext
    reader: CacheReader
    build_root: Path = DEFAULT_BUILD_ROOT
    installer: ArtifactInstaller = field(default_factory=ArtifactInstaller)

    def retrieve(self, descriptor: ArtifactDescriptor) -> Path:
        """Fetch ``descriptor`` from the cache and install it; return the destination."""

        try:
            payload = fetch_artifact(self.cache_root, descriptor, self.reader, self.context)
        except ArtifactNotFoundError as exc:
            self.context.sink.warn(
                "%s not found in local cache",
                descriptor.name,
                event=CacheEvent.ARTIFACT_MISSING,
                path=exc.path,
            )
            raise
        return self.installer.install(payload, descriptor, self.context)

    def retrieve_framework(self, identity: FrameworkIdentity, platform: TargetPlatform) -> Path:
        return self.retrieve(
            describe_framework(identity, platform, self.reverse_map, self.context.cache_prefix, self.build_root)
        )

    def retrieve_dsym(self, identity: FrameworkIdentity, platform: TargetPlatform) -> Path:
        return self.retrieve(
            describe_dsym(identity, platform, self.reverse_map, self.context.cache_prefix, self.build_root)
        )

    def retrieve_bcsymbolmap(
        self,
        identity: FrameworkIdentity,
        platform: TargetPlatform,
        uuid: SymbolUUID,
    ) -> Path:
        return self.retrieve(
            describe_bcsymbolmap(
                identity,
                platform,
                uuid,
                self.reverse_map,
                self.context.cache_prefix,
                self.build_root,
            )
        )

    def retrieve_version_marker(self, marker: GitRepoVersionMarker) -> Path:
        return self.retrieve(describe_version_marker(marker, self.context.cache_prefix, self.build_root))


__all__ = ["ArtifactRetriever"]
