"""Application service wiring the retrieval feature to concrete adapters."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from itertools import groupby
from pathlib import Path
from typing import final

from carthage_cache.features.retrieval import (
    ArtifactKind,
    ArtifactRetriever,
    CacheError,
    CachePrefix,
    FrameworkIdentity,
    GitRepoVersionMarker,
    RetrievalContext,
    SymbolMapBatch,
    SymbolMapPolicy,
    TargetPlatform,
    WorkUnit,
    build_reverse_repository_map,
    plan_framework_units,
    plan_version_marker_units,
)
from carthage_cache.features.retrieval.adapters import DwarfdumpInspector, LocalCacheReader
from carthage_cache.features.retrieval.domain.paths import DEFAULT_BUILD_ROOT
from carthage_cache.features.retrieval.usecases.ports import CacheReader, UUIDInspector
from carthage_cache.platform.logging import CacheEvent, LoggerSink, logger as app_logger


@dataclass(slots=True)
class RetrievalRequest:
    """Inputs required to build and execute a retrieval run."""

    cache_root: Path
    cache_prefix: str = ""
    build_root: Path = DEFAULT_BUILD_ROOT
    frameworks: list[FrameworkIdentity] = field(default_factory=list)
    platforms: list[TargetPlatform] = field(default_factory=list)
    version_markers: list[GitRepoVersionMarker] = field(default_factory=list)
    repository_map: Mapping[str, list[str]] = field(default_factory=dict)
    symbol_map_policy: SymbolMapPolicy = SymbolMapPolicy.BEST_EFFORT
    max_workers: int = 1


@dataclass(slots=True)
class UnitResult:
    """Outcome of one work unit."""

    label: str
    kind: ArtifactKind
    platform: TargetPlatform | None
    success: bool
    error: CacheError | None = None
    value: object | None = None

    @property
    def error_message(self) -> str | None:
        return str(self.error) if self.error is not None else None


@final
class RetrievalService:
    """Plan retrieval units for a request and execute them stage by stage."""

    def __init__(
        self,
        *,
        reader_factory: Callable[[], CacheReader] = LocalCacheReader,
        inspector_factory: Callable[[], UUIDInspector] = DwarfdumpInspector,
        logger: logging.Logger | None = None,
    ) -> None:
        self._reader_factory = reader_factory
        self._inspector_factory = inspector_factory
        self._logger = logger or app_logger

    def build_units(self, request: RetrievalRequest) -> list[WorkUnit]:
        """Construct the work units for ``request`` without running them."""

        context = RetrievalContext(
            cache_prefix=CachePrefix(request.cache_prefix),
            sink=LoggerSink(self._logger),
        )
        retriever = ArtifactRetriever(
            cache_root=request.cache_root,
            reverse_map=build_reverse_repository_map(request.repository_map, request.frameworks),
            context=context,
            reader=self._reader_factory(),
            build_root=request.build_root,
        )
        symbol_maps = SymbolMapBatch(retriever=retriever, inspector=self._inspector_factory())

        units = plan_framework_units(
            retriever,
            symbol_maps,
            request.frameworks,
            request.platforms,
            policy=request.symbol_map_policy,
        )
        units.extend(plan_version_marker_units(retriever, request.version_markers))
        return units

    def execute(self, units: Iterable[WorkUnit], *, max_workers: int = 1) -> list[UnitResult]:
        """Run ``units``; stages run in order and units inside a stage may overlap."""

        ordered = sorted(units, key=lambda unit: unit.stage)
        results: list[UnitResult] = []
        for _, stage_units in groupby(ordered, key=lambda unit: unit.stage):
            batch = list(stage_units)
            if max_workers > 1 and len(batch) > 1:
                with ThreadPoolExecutor(
                    max_workers=max_workers,
                    thread_name_prefix="cache-retrieval",
                ) as executor:
                    results.extend(executor.map(self._run_unit, batch))
            else:
                results.extend(self._run_unit(unit) for unit in batch)

        failed = sum(1 for result in results if not result.success)
        self._logger.info(
            "Retrieval finished: %d succeeded, %d failed",
            len(results) - failed,
            failed,
            extra={"cache_event": CacheEvent.RUN_COMPLETE.value},
        )
        return results

    def run(self, request: RetrievalRequest) -> list[UnitResult]:
        """Plan and execute ``request`` in a single call."""

        return self.execute(self.build_units(request), max_workers=request.max_workers)

    def _run_unit(self, unit: WorkUnit) -> UnitResult:
        try:
            value = unit.run()
        except CacheError as exc:
            self._logger.error(
                "%s failed: %s",
                unit.label,
                exc,
                extra={"cache_event": CacheEvent.UNIT_FAILED.value},
            )
            return UnitResult(
                label=unit.label,
                kind=unit.kind,
                platform=unit.platform,
                success=False,
                error=exc,
            )
        return UnitResult(
            label=unit.label,
            kind=unit.kind,
            platform=unit.platform,
            success=True,
            value=value,
        )


__all__ = ["RetrievalRequest", "RetrievalService", "UnitResult"]
