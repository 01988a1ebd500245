"""Value objects describing artifacts stored in the framework cache."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path, PurePosixPath
from typing import Final, NewType, Protocol

SymbolUUID = NewType("SymbolUUID", str)
CachePrefix = NewType("CachePrefix", str)

_UUID_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^[0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12}$"
)


def parse_symbol_uuid(value: str) -> SymbolUUID:
    """Normalise ``value`` to an upper-case dashed debug-info UUID."""

    normalized = value.strip().upper()
    if not _UUID_PATTERN.match(normalized):
        raise ValueError(f"Not a debug-info UUID: {value!r}")
    return SymbolUUID(normalized)


class TargetPlatform(StrEnum):
    """Platforms Carthage builds for; values double as build sub-directories."""

    IOS = "iOS"
    MACOS = "Mac"
    TVOS = "tvOS"
    WATCHOS = "watchOS"

    @staticmethod
    def from_user_input(value: str) -> "TargetPlatform":
        """Translate raw CLI or config input into the matching platform."""

        normalized = value.strip().lower()
        aliases = {"macos": TargetPlatform.MACOS, "osx": TargetPlatform.MACOS}
        if normalized in aliases:
            return aliases[normalized]
        for platform in TargetPlatform:
            if platform.value.lower() == normalized:
                return platform
        valid: Final[str] = ", ".join(p.value for p in TargetPlatform)
        msg = f"Unsupported platform '{value}'. Valid options: {valid}"
        raise ValueError(msg)


class ArtifactKind(StrEnum):
    """Tag for the four artifact families held in the cache."""

    FRAMEWORK = "framework"
    DSYM = "dsym"
    BCSYMBOLMAP = "bcsymbolmap"
    VERSION_MARKER = "version_marker"


class SymbolMapPolicy(StrEnum):
    """How per-UUID symbol map failures are surfaced to the caller."""

    BEST_EFFORT = "best-effort"
    STRICT = "strict"

    @staticmethod
    def from_user_input(value: str) -> "SymbolMapPolicy":
        """Translate raw CLI or config input into the matching policy."""

        normalized = value.strip().lower().replace("_", "-")
        for policy in SymbolMapPolicy:
            if policy.value == normalized:
                return policy
        valid: Final[str] = ", ".join(p.value for p in SymbolMapPolicy)
        msg = f"Unsupported symbol map policy '{value}'. Valid options: {valid}"
        raise ValueError(msg)


@dataclass(slots=True, frozen=True)
class FrameworkIdentity:
    """A framework family identified by name and resolved version."""

    name: str
    version: str

    @staticmethod
    def parse(value: str) -> "FrameworkIdentity":
        """Parse ``Name@version`` notation."""

        name, separator, version = value.partition("@")
        if not separator or not name.strip() or not version.strip():
            raise ValueError(f"Expected NAME@VERSION, got {value!r}")
        return FrameworkIdentity(name=name.strip(), version=version.strip())

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass(slots=True, frozen=True)
class GitRepoVersionMarker:
    """Identify the ``.version`` file recorded for a source dependency."""

    repository_name: str
    version: str

    @staticmethod
    def parse(value: str) -> "GitRepoVersionMarker":
        """Parse ``Repository@version`` notation."""

        identity = FrameworkIdentity.parse(value)
        return GitRepoVersionMarker(repository_name=identity.name, version=identity.version)

    def __str__(self) -> str:
        return f"{self.repository_name}@{self.version}"


ReverseRepositoryMap = Mapping[FrameworkIdentity, str]


def build_reverse_repository_map(
    repository_map: Mapping[str, list[str]],
    identities: list[FrameworkIdentity],
) -> dict[FrameworkIdentity, str]:
    """Map each identity to the repository segment that stores it.

    Frameworks not listed under any repository are assumed to live in a
    repository named after themselves.
    """

    owners: dict[str, str] = {}
    for repository, framework_names in repository_map.items():
        for framework_name in framework_names:
            _ = owners.setdefault(framework_name, repository)
    return {identity: owners.get(identity.name, identity.name) for identity in identities}


@dataclass(slots=True, frozen=True)
class ArtifactDescriptor:
    """Everything needed to fetch one artifact and install it."""

    kind: ArtifactKind
    name: str
    cache_path: PurePosixPath
    archive_entry: str
    destination: Path
    executable: bool = False
    platform: TargetPlatform | None = None

    def cache_location(self, cache_root: Path) -> Path:
        """Absolute location of the artifact inside ``cache_root``."""

        return cache_root.joinpath(*self.cache_path.parts)


class LogSink(Protocol):
    """Destination for progress messages emitted during retrieval."""

    def say(
        self,
        message: str,
        *args: object,
        event: str | None = None,
        path: object | None = None,
    ) -> None:
        """Report normal progress."""
        ...

    def warn(
        self,
        message: str,
        *args: object,
        event: str | None = None,
        path: object | None = None,
    ) -> None:
        """Report a recoverable failure."""
        ...


@dataclass(slots=True, frozen=True)
class RetrievalContext:
    """Explicit per-invocation settings threaded through every operation."""

    cache_prefix: CachePrefix
    sink: LogSink


__all__ = [
    "ArtifactDescriptor",
    "ArtifactKind",
    "CachePrefix",
    "FrameworkIdentity",
    "GitRepoVersionMarker",
    "LogSink",
    "RetrievalContext",
    "ReverseRepositoryMap",
    "SymbolMapPolicy",
    "SymbolUUID",
    "TargetPlatform",
    "build_reverse_repository_map",
    "parse_symbol_uuid",
]
