"""Use cases for fetching cached artifacts and installing them."""

from .fetch import fetch_artifact
from .install import ArtifactInstaller
from .multiplexer import WorkUnit, plan_framework_units, plan_version_marker_units
from .retrieve import ArtifactRetriever
from .symbol_maps import SymbolMapBatch, SymbolMapBatchResult

__all__ = [
    "ArtifactInstaller",
    "ArtifactRetriever",
    "SymbolMapBatch",
    "SymbolMapBatchResult",
    "WorkUnit",
    "fetch_artifact",
    "plan_framework_units",
    "plan_version_marker_units",
]
