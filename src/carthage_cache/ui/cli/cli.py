"""Command line interface for carthage-cache."""

import sys
from typing import final

from carthage_cache.application.services import RetrievalRequest, RetrievalService, UnitResult
from carthage_cache.ui.cli.args import ArgumentParser
from carthage_cache.ui.cli.args.options import CLIArgs, DownloadArgs, VersionFilesArgs
from carthage_cache.ui.cli.display import ResultDisplay
from carthage_cache.platform.logging import logger


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def build_request(args: CLIArgs) -> RetrievalRequest:
        """Translate parsed arguments into a service request."""

        if isinstance(args, DownloadArgs):
            return RetrievalRequest(
                cache_root=args.cache_root,
                cache_prefix=args.cache_prefix,
                build_root=args.build_root,
                frameworks=args.frameworks,
                platforms=args.platforms,
                repository_map=args.repository_map,
                symbol_map_policy=args.symbol_map_policy,
                max_workers=args.max_workers,
            )

        assert isinstance(args, VersionFilesArgs)
        return RetrievalRequest(
            cache_root=args.cache_root,
            cache_prefix=args.cache_prefix,
            build_root=args.build_root,
            version_markers=args.markers,
            max_workers=args.max_workers,
        )

    @staticmethod
    def process_command(
        args_list: list[str] | None = None,
        service: RetrievalService | None = None,
    ) -> list[UnitResult]:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
            service: Service override (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)
            results = (service or RetrievalService()).run(CommandProcessor.build_request(args))
            ResultDisplay().show_results(results, quiet=args.quiet)
            if any(not result.success for result in results):
                sys.exit(1)
            return results

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` inside ``CommandProcessor.process_command``.
    """
    _ = CommandProcessor.process_command()
    return 0
