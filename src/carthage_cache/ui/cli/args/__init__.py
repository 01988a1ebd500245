"""Command line argument handling package."""

from carthage_cache.ui.cli.args.parser import ArgumentParser
from carthage_cache.ui.cli.args.options import CLIArgs, DownloadArgs, VersionFilesArgs

__all__ = ["ArgumentParser", "CLIArgs", "DownloadArgs", "VersionFilesArgs"]
