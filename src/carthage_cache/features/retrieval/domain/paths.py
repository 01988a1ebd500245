"""
Summary: Derive cache-relative and build-tree paths for cached artifacts.
Why: Uploader and retriever must agree on the cache layout without coordination.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Final

from .errors import MissingRepositoryMappingError
from .models import (
    ArtifactDescriptor,
    ArtifactKind,
    CachePrefix,
    FrameworkIdentity,
    GitRepoVersionMarker,
    ReverseRepositoryMap,
    SymbolUUID,
    TargetPlatform,
)

DEFAULT_BUILD_ROOT: Final[Path] = Path("Carthage") / "Build"

FRAMEWORK_EXTENSION: Final[str] = ".framework"
DSYM_EXTENSION: Final[str] = ".dSYM"
BCSYMBOLMAP_EXTENSION: Final[str] = ".bcsymbolmap"
ARCHIVE_EXTENSION: Final[str] = ".zip"


def framework_bundle_name(identity: FrameworkIdentity) -> str:
    return identity.name + FRAMEWORK_EXTENSION


def dsym_bundle_name(identity: FrameworkIdentity) -> str:
    return framework_bundle_name(identity) + DSYM_EXTENSION


def bcsymbolmap_file_name(uuid: SymbolUUID) -> str:
    return uuid + BCSYMBOLMAP_EXTENSION


def version_marker_file_name(repository_name: str) -> str:
    return f".{repository_name}.version"


def archive_file_name(
    kind: ArtifactKind,
    identity: FrameworkIdentity,
    uuid: SymbolUUID | None = None,
) -> str:
    """Return the archive filename for ``kind``; it encodes kind, name and version."""

    if kind is ArtifactKind.FRAMEWORK:
        stem = framework_bundle_name(identity)
    elif kind is ArtifactKind.DSYM:
        stem = dsym_bundle_name(identity)
    elif kind is ArtifactKind.BCSYMBOLMAP:
        if uuid is None:
            raise ValueError("A bcsymbolmap path requires a UUID")
        stem = f"{identity.name}.{bcsymbolmap_file_name(uuid)}"
    else:
        raise ValueError(f"{kind} is not stored as a framework archive")
    return f"{stem}-{identity.version}{ARCHIVE_EXTENSION}"


def _prefixed(prefix: CachePrefix, *parts: str) -> PurePosixPath:
    segments = [segment for segment in (prefix, *parts) if segment]
    return PurePosixPath(*segments)


def resolve_path(
    kind: ArtifactKind,
    identity: FrameworkIdentity,
    reverse_map: ReverseRepositoryMap,
    prefix: CachePrefix,
    *,
    platform: TargetPlatform | None = None,
    uuid: SymbolUUID | None = None,
) -> PurePosixPath:
    """Resolve the cache-relative path of a platform-bound artifact.

    The layout is ``<prefix>/<repository>/<platform>/<archive>``.

    Raises:
        MissingRepositoryMappingError: ``reverse_map`` has no entry for ``identity``.
        ValueError: ``platform`` (or ``uuid`` for symbol maps) is missing.
    """

    if kind is ArtifactKind.VERSION_MARKER:
        raise ValueError("Version markers are resolved with resolve_version_marker_path")
    if platform is None:
        raise ValueError(f"A {kind} path requires a target platform")
    try:
        repository = reverse_map[identity]
    except KeyError:
        raise MissingRepositoryMappingError(identity) from None
    return _prefixed(prefix, repository, platform.value, archive_file_name(kind, identity, uuid))


def resolve_version_marker_path(marker: GitRepoVersionMarker, prefix: CachePrefix) -> PurePosixPath:
    """Resolve ``<prefix>/<repository>/.<repository>.version-<version>``."""

    file_name = f"{version_marker_file_name(marker.repository_name)}-{marker.version}"
    return _prefixed(prefix, marker.repository_name, file_name)


def platform_build_directory(build_root: Path, platform: TargetPlatform) -> Path:
    return build_root / platform.value


def framework_destination(build_root: Path, identity: FrameworkIdentity, platform: TargetPlatform) -> Path:
    return platform_build_directory(build_root, platform) / framework_bundle_name(identity)


def framework_binary_path(build_root: Path, identity: FrameworkIdentity, platform: TargetPlatform) -> Path:
    """Location of the Mach-O binary inside an installed framework bundle."""

    return framework_destination(build_root, identity, platform) / identity.name


def dsym_destination(build_root: Path, identity: FrameworkIdentity, platform: TargetPlatform) -> Path:
    return platform_build_directory(build_root, platform) / dsym_bundle_name(identity)


def bcsymbolmap_destination(build_root: Path, uuid: SymbolUUID, platform: TargetPlatform) -> Path:
    return platform_build_directory(build_root, platform) / bcsymbolmap_file_name(uuid)


def version_marker_destination(build_root: Path, marker: GitRepoVersionMarker) -> Path:
    return build_root / version_marker_file_name(marker.repository_name)


def describe_framework(
    identity: FrameworkIdentity,
    platform: TargetPlatform,
    reverse_map: ReverseRepositoryMap,
    prefix: CachePrefix,
    build_root: Path,
) -> ArtifactDescriptor:
    """Build the descriptor for a framework bundle archive."""

    return ArtifactDescriptor(
        kind=ArtifactKind.FRAMEWORK,
        name=identity.name,
        cache_path=resolve_path(ArtifactKind.FRAMEWORK, identity, reverse_map, prefix, platform=platform),
        archive_entry=framework_bundle_name(identity),
        destination=framework_destination(build_root, identity, platform),
        executable=True,
        platform=platform,
    )


def describe_dsym(
    identity: FrameworkIdentity,
    platform: TargetPlatform,
    reverse_map: ReverseRepositoryMap,
    prefix: CachePrefix,
    build_root: Path,
) -> ArtifactDescriptor:
    """Build the descriptor for a dSYM bundle archive."""

    return ArtifactDescriptor(
        kind=ArtifactKind.DSYM,
        name=identity.name + DSYM_EXTENSION,
        cache_path=resolve_path(ArtifactKind.DSYM, identity, reverse_map, prefix, platform=platform),
        archive_entry=dsym_bundle_name(identity),
        destination=dsym_destination(build_root, identity, platform),
        platform=platform,
    )


def describe_bcsymbolmap(
    identity: FrameworkIdentity,
    platform: TargetPlatform,
    uuid: SymbolUUID,
    reverse_map: ReverseRepositoryMap,
    prefix: CachePrefix,
    build_root: Path,
) -> ArtifactDescriptor:
    """Build the descriptor for one symbol map archive."""

    return ArtifactDescriptor(
        kind=ArtifactKind.BCSYMBOLMAP,
        name=f"{identity.name}.{bcsymbolmap_file_name(uuid)}",
        cache_path=resolve_path(
            ArtifactKind.BCSYMBOLMAP,
            identity,
            reverse_map,
            prefix,
            platform=platform,
            uuid=uuid,
        ),
        archive_entry=bcsymbolmap_file_name(uuid),
        destination=bcsymbolmap_destination(build_root, uuid, platform),
        platform=platform,
    )


def describe_version_marker(
    marker: GitRepoVersionMarker,
    prefix: CachePrefix,
    build_root: Path,
) -> ArtifactDescriptor:
    """Build the descriptor for a plain (unarchived) version marker."""

    file_name = version_marker_file_name(marker.repository_name)
    return ArtifactDescriptor(
        kind=ArtifactKind.VERSION_MARKER,
        name=file_name,
        cache_path=resolve_version_marker_path(marker, prefix),
        archive_entry=file_name,
        destination=version_marker_destination(build_root, marker),
    )


__all__ = [
    "DEFAULT_BUILD_ROOT",
    "archive_file_name",
    "bcsymbolmap_destination",
    "describe_bcsymbolmap",
    "describe_dsym",
    "describe_framework",
    "describe_version_marker",
    "dsym_destination",
    "framework_binary_path",
    "framework_destination",
    "platform_build_directory",
    "resolve_path",
    "resolve_version_marker_path",
    "version_marker_destination",
]
