"""Public surface for the local-cache retrieval feature."""

from .domain.errors import (
    ArtifactNotFoundError,
    CacheError,
    CacheReadError,
    InstallError,
    MissingRepositoryMappingError,
    SymbolMapBatchError,
    UUIDDiscoveryError,
)
from .domain.models import (
    ArtifactDescriptor,
    ArtifactKind,
    CachePrefix,
    FrameworkIdentity,
    GitRepoVersionMarker,
    RetrievalContext,
    SymbolMapPolicy,
    SymbolUUID,
    TargetPlatform,
    build_reverse_repository_map,
)
from .domain.paths import resolve_path, resolve_version_marker_path
from .usecases import (
    ArtifactInstaller,
    ArtifactRetriever,
    SymbolMapBatch,
    SymbolMapBatchResult,
    WorkUnit,
    fetch_artifact,
    plan_framework_units,
    plan_version_marker_units,
)

__all__ = [
    "ArtifactDescriptor",
    "ArtifactInstaller",
    "ArtifactKind",
    "ArtifactNotFoundError",
    "ArtifactRetriever",
    "CacheError",
    "CachePrefix",
    "CacheReadError",
    "FrameworkIdentity",
    "GitRepoVersionMarker",
    "InstallError",
    "MissingRepositoryMappingError",
    "RetrievalContext",
    "SymbolMapBatch",
    "SymbolMapBatchError",
    "SymbolMapBatchResult",
    "SymbolMapPolicy",
    "SymbolUUID",
    "TargetPlatform",
    "UUIDDiscoveryError",
    "WorkUnit",
    "build_reverse_repository_map",
    "fetch_artifact",
    "plan_framework_units",
    "plan_version_marker_units",
    "resolve_path",
    "resolve_version_marker_path",
]
