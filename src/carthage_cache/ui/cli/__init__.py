"""Command line interface for carthage-cache."""

from .cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
