"""Enumerate independent retrieval work units for a set of frameworks."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from functools import partial

from ..domain.models import (
    ArtifactKind,
    FrameworkIdentity,
    GitRepoVersionMarker,
    SymbolMapPolicy,
    TargetPlatform,
)
from .retrieve import ArtifactRetriever
from .symbol_maps import SymbolMapBatch

# Symbol map discovery inspects the framework binary installed by stage 0.
FRAMEWORK_STAGE: int = 0
SYMBOL_MAP_STAGE: int = 1


@dataclass(slots=True, frozen=True)
class WorkUnit:
    """One independently failable and retryable retrieval."""

    kind: ArtifactKind
    label: str
    action: Callable[[], object]
    platform: TargetPlatform | None = None
    stage: int = FRAMEWORK_STAGE

    def run(self) -> object:
        return self.action()


def plan_framework_units(
    retriever: ArtifactRetriever,
    symbol_maps: SymbolMapBatch,
    identities: Iterable[FrameworkIdentity],
    platforms: Iterable[TargetPlatform],
    *,
    policy: SymbolMapPolicy = SymbolMapPolicy.BEST_EFFORT,
) -> list[WorkUnit]:
    """Return framework, symbol map and dSYM units for every identity and platform."""

    frameworks = list(identities)
    targets = list(platforms)
    units: list[WorkUnit] = []

    for platform in targets:
        for identity in frameworks:
            units.append(
                WorkUnit(
                    kind=ArtifactKind.FRAMEWORK,
                    label=f"{identity.name}.framework ({platform.value})",
                    action=partial(retriever.retrieve_framework, identity, platform),
                    platform=platform,
                )
            )
    for platform in targets:
        for identity in frameworks:
            units.append(
                WorkUnit(
                    kind=ArtifactKind.BCSYMBOLMAP,
                    label=f"{identity.name} bcsymbolmaps ({platform.value})",
                    action=partial(symbol_maps.run, identity, platform, policy),
                    platform=platform,
                    stage=SYMBOL_MAP_STAGE,
                )
            )
    for platform in targets:
        for identity in frameworks:
            units.append(
                WorkUnit(
                    kind=ArtifactKind.DSYM,
                    label=f"{identity.name}.framework.dSYM ({platform.value})",
                    action=partial(retriever.retrieve_dsym, identity, platform),
                    platform=platform,
                )
            )
    return units


def plan_version_marker_units(
    retriever: ArtifactRetriever,
    markers: Iterable[GitRepoVersionMarker],
) -> list[WorkUnit]:
    """Return one unit per ``.version`` marker."""

    return [
        WorkUnit(
            kind=ArtifactKind.VERSION_MARKER,
            label=f".{marker.repository_name}.version ({marker.version})",
            action=partial(retriever.retrieve_version_marker, marker),
        )
        for marker in markers
    ]


__all__ = [
    "FRAMEWORK_STAGE",
    "SYMBOL_MAP_STAGE",
    "WorkUnit",
    "plan_framework_units",
    "plan_version_marker_units",
]
