"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from carthage_cache import __version__
from carthage_cache.config.config import Config
from carthage_cache.features.retrieval import (
    FrameworkIdentity,
    GitRepoVersionMarker,
    SymbolMapPolicy,
    TargetPlatform,
)
from carthage_cache.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from carthage_cache.ui.cli.args.options import CLIArgs, DownloadArgs, VersionFilesArgs


def _identity(value: str) -> FrameworkIdentity:
    try:
        return FrameworkIdentity.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _marker(value: str) -> GitRepoVersionMarker:
    try:
        return GitRepoVersionMarker.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _platform(value: str) -> TargetPlatform:
    try:
        return TargetPlatform.from_user_input(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {number}")
    return number


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="carthage-cache",
            description="Install Carthage frameworks, dSYMs and bcsymbolmaps from a local cache.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}",
        )
        _ = parser.add_argument(
            "--config",
            type=str,
            help="Configuration file (defaults to config/config.toml)",
            metavar="CONFIG",
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        download_parser = subparsers.add_parser(
            "download",
            help="Install frameworks and their debug symbols from the local cache",
        )
        _ = download_parser.add_argument(
            "frameworks",
            nargs="+",
            type=_identity,
            help="Frameworks to install as NAME@VERSION",
            metavar="FRAMEWORK@VERSION",
        )
        _ = download_parser.add_argument(
            "--platform",
            dest="platforms",
            action="append",
            type=_platform,
            help="Target platform (repeatable; defaults to all platforms)",
            metavar="PLATFORM",
        )
        _ = download_parser.add_argument(
            "--strict",
            action="store_true",
            default=None,
            help="Fail when any bcsymbolmap of a framework is missing",
        )
        ArgumentParser._configure_common(download_parser)

        version_parser = subparsers.add_parser(
            "version-files",
            help="Copy .version markers from the local cache into the build directory",
        )
        _ = version_parser.add_argument(
            "markers",
            nargs="+",
            type=_marker,
            help="Repositories as NAME@VERSION",
            metavar="REPOSITORY@VERSION",
        )
        ArgumentParser._configure_common(version_parser)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If no cache root is configured or validation fails.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        config_file = Path(parsed_args.config).expanduser() if parsed_args.config else None
        configuration = Config.load(config_file)
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level, verbose=is_verbose)

        cache_root_value = parsed_args.cache_root or configuration.cache_root
        if cache_root_value is None:
            logger.error("No cache root configured; pass --cache-root or set cache_root in the config")
            sys.exit(2)
        cache_root = Path(cache_root_value).expanduser()
        cache_prefix: str = (
            parsed_args.prefix if parsed_args.prefix is not None else configuration.cache_prefix
        )
        build_root = (
            Path(parsed_args.build_root).expanduser() if parsed_args.build_root else configuration.build_root
        )
        max_workers: int = parsed_args.workers or configuration.max_workers

        if parsed_args.command == "download":
            policy = (
                SymbolMapPolicy.STRICT if parsed_args.strict else configuration.symbol_map_policy
            )
            return DownloadArgs(
                command="download",
                frameworks=list(parsed_args.frameworks),
                platforms=list(parsed_args.platforms or list(TargetPlatform)),
                cache_root=cache_root,
                cache_prefix=cache_prefix,
                build_root=build_root,
                symbol_map_policy=policy,
                max_workers=max_workers,
                repository_map=dict(configuration.repository_map),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if parsed_args.command == "version-files":
            return VersionFilesArgs(
                command="version-files",
                markers=list(parsed_args.markers),
                cache_root=cache_root,
                cache_prefix=cache_prefix,
                build_root=build_root,
                max_workers=max_workers,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        logger.error("Unsupported command: %s", parsed_args.command)
        sys.exit(2)

    @staticmethod
    def _configure_common(parser: argparse.ArgumentParser) -> None:
        """Apply options shared by every retrieval subcommand."""

        _ = parser.add_argument(
            "--cache-root",
            type=str,
            help="Local cache directory (overrides cache_root in the config)",
            metavar="DIR",
        )
        _ = parser.add_argument(
            "--prefix",
            type=str,
            help="Cache prefix folder (overrides cache_prefix in the config)",
            metavar="PREFIX",
        )
        _ = parser.add_argument(
            "--build-root",
            type=str,
            help="Carthage build directory (defaults to Carthage/Build)",
            metavar="DIR",
        )
        _ = parser.add_argument(
            "--workers",
            type=_positive_int,
            help="Number of artifacts retrieved concurrently",
            metavar="N",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed, timestamped progress",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )


__all__ = ["ArgumentParser"]
