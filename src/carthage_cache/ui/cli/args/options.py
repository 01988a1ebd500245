"""Command line argument options."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, final

from carthage_cache.features.retrieval import (
    FrameworkIdentity,
    GitRepoVersionMarker,
    SymbolMapPolicy,
    TargetPlatform,
)


@final
@dataclass(slots=True)
class DownloadArgs:
    """Command line arguments for the ``download`` subcommand."""

    command: Literal["download"]
    frameworks: list[FrameworkIdentity]
    platforms: list[TargetPlatform]
    cache_root: Path
    cache_prefix: str
    build_root: Path
    symbol_map_policy: SymbolMapPolicy
    max_workers: int
    repository_map: dict[str, list[str]] = field(default_factory=dict)
    verbose: bool = False
    quiet: bool = False


@final
@dataclass(slots=True)
class VersionFilesArgs:
    """Command line arguments for the ``version-files`` subcommand."""

    command: Literal["version-files"]
    markers: list[GitRepoVersionMarker]
    cache_root: Path
    cache_prefix: str
    build_root: Path
    max_workers: int
    verbose: bool = False
    quiet: bool = False


CLIArgs = DownloadArgs | VersionFilesArgs

__all__ = ["CLIArgs", "DownloadArgs", "VersionFilesArgs"]
