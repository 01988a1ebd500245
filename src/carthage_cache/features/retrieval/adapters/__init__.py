"""Concrete adapters for the retrieval feature ports."""

from carthage_cache.platform.dwarf import DwarfdumpInspector

from .local_cache import LocalCacheReader

__all__ = ["DwarfdumpInspector", "LocalCacheReader"]
