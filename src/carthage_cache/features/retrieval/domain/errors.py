"""Summary: Typed failures raised while retrieving artifacts from the local cache.
Why: Callers decide per failure kind whether to fall back, report, or abort.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path, PurePath

from .models import FrameworkIdentity, SymbolUUID, TargetPlatform


class CacheError(Exception):
    """Base class for every retrieval failure."""


class MissingRepositoryMappingError(CacheError, KeyError):
    """Raised when the reverse repository map has no entry for a framework."""

    def __init__(self, identity: FrameworkIdentity) -> None:
        super().__init__(f"No repository mapping for {identity}")
        self.identity: FrameworkIdentity = identity

    def __str__(self) -> str:
        return str(self.args[0])


class ArtifactNotFoundError(CacheError):
    """Raised when an artifact is absent at its resolved cache path."""

    def __init__(self, artifact_name: str, path: PurePath) -> None:
        super().__init__(f"Error: could not find {artifact_name} in local cache at : {path}")
        self.artifact_name: str = artifact_name
        self.path: PurePath = path


class CacheReadError(CacheError):
    """Raised when a cached artifact exists but cannot be read."""

    def __init__(self, artifact_name: str, path: PurePath, reason: str) -> None:
        super().__init__(f"Error: could not read {artifact_name} from local cache at : {path}: {reason}")
        self.artifact_name: str = artifact_name
        self.path: PurePath = path
        self.reason: str = reason


class InstallError(CacheError):
    """Raised when fetched bytes cannot be placed into the build tree."""

    def __init__(self, artifact_name: str, path: Path, reason: str) -> None:
        super().__init__(f"Error: could not install {artifact_name} to {path}: {reason}")
        self.artifact_name: str = artifact_name
        self.path: Path = path
        self.reason: str = reason


class UUIDDiscoveryError(CacheError):
    """Raised when the debug-info UUIDs of an installed binary cannot be read."""

    def __init__(self, binary_path: Path, reason: str) -> None:
        super().__init__(f"Error: could not read DWARF UUIDs from {binary_path}: {reason}")
        self.binary_path: Path = binary_path
        self.reason: str = reason


class SymbolMapBatchError(CacheError):
    """Raised in strict mode when some symbol maps of a framework failed."""

    def __init__(
        self,
        framework: FrameworkIdentity,
        platform: TargetPlatform,
        failures: Sequence[tuple[SymbolUUID, CacheError]],
    ) -> None:
        self.framework: FrameworkIdentity = framework
        self.platform: TargetPlatform = platform
        self.failures: tuple[tuple[SymbolUUID, CacheError], ...] = tuple(failures)
        details = "; ".join(f"{uuid}: {error}" for uuid, error in self.failures)
        super().__init__(
            f"Error: {len(self.failures)} bcsymbolmap(s) failed for {framework.name} "
            f"({platform.value}): {details}"
        )

    @property
    def failed_uuids(self) -> list[SymbolUUID]:
        """UUIDs whose retrieval failed, in discovery order."""

        return [uuid for uuid, _ in self.failures]


__all__ = [
    "ArtifactNotFoundError",
    "CacheError",
    "CacheReadError",
    "InstallError",
    "MissingRepositoryMappingError",
    "SymbolMapBatchError",
    "UUIDDiscoveryError",
]
