"""
Summary: Install every bcsymbolmap belonging to one framework and platform.
Why: UUIDs are discovered at runtime and one missing map must not hide the others.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Executor
from dataclasses import dataclass, field
from pathlib import Path

from carthage_cache.platform.logging import CacheEvent

from ..domain.errors import CacheError, SymbolMapBatchError, UUIDDiscoveryError
from ..domain.models import FrameworkIdentity, SymbolMapPolicy, SymbolUUID, TargetPlatform
from ..domain.paths import framework_binary_path
from .ports import UUIDInspector
from .retrieve import ArtifactRetriever


@dataclass(slots=True)
class SymbolMapBatchResult:
    """Per-UUID outcomes of one batch."""

    framework: FrameworkIdentity
    platform: TargetPlatform
    installed: dict[SymbolUUID, Path] = field(default_factory=dict)
    failures: list[tuple[SymbolUUID, CacheError]] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures


class SymbolMapBatch:
    """Discover the UUIDs of an installed framework and retrieve their symbol maps."""

    _retriever: ArtifactRetriever
    _inspector: UUIDInspector
    _executor: Executor | None

    def __init__(
        self,
        *,
        retriever: ArtifactRetriever,
        inspector: UUIDInspector,
        executor: Executor | None = None,
    ) -> None:
        self._retriever = retriever
        self._inspector = inspector
        self._executor = executor

    def discover(self, identity: FrameworkIdentity, platform: TargetPlatform) -> list[SymbolUUID]:
        """Return the UUIDs of the installed framework binary.

        Raises:
            UUIDDiscoveryError: The binary is missing or cannot be inspected.
        """

        binary = framework_binary_path(self._retriever.build_root, identity, platform)
        try:
            uuids = self._inspector.uuids(binary)
        except UUIDDiscoveryError:
            raise
        except (OSError, ValueError) as exc:
            raise UUIDDiscoveryError(binary, str(exc)) from exc

        self._retriever.context.sink.say(
            "Found %d DWARF UUID(s) in %s",
            len(uuids),
            identity.name,
            event=CacheEvent.SYMBOLS_DISCOVERED,
            path=binary,
        )
        return uuids

    def run(
        self,
        identity: FrameworkIdentity,
        platform: TargetPlatform,
        policy: SymbolMapPolicy = SymbolMapPolicy.BEST_EFFORT,
    ) -> SymbolMapBatchResult:
        """Retrieve every symbol map; apply ``policy`` to the collected failures.

        Raises:
            UUIDDiscoveryError: Discovery failed; no symbol map was attempted.
            SymbolMapBatchError: ``policy`` is strict and at least one UUID failed.
        """

        uuids = self.discover(identity, platform)
        result = SymbolMapBatchResult(framework=identity, platform=platform)

        for uuid, outcome in self._attempt_all(identity, platform, uuids):
            if isinstance(outcome, CacheError):
                result.failures.append((uuid, outcome))
            else:
                result.installed[uuid] = outcome

        if result.failures and policy is SymbolMapPolicy.STRICT:
            raise SymbolMapBatchError(identity, platform, result.failures)

        for uuid, error in result.failures:
            self._retriever.context.sink.warn(
                "Skipped bcsymbolmap %s of %s: %s",
                uuid,
                identity.name,
                error,
                event=CacheEvent.SYMBOLS_FAILED,
            )
        return result

    def _attempt_all(
        self,
        identity: FrameworkIdentity,
        platform: TargetPlatform,
        uuids: Iterable[SymbolUUID],
    ) -> Iterator[tuple[SymbolUUID, Path | CacheError]]:
        def attempt(uuid: SymbolUUID) -> Path | CacheError:
            try:
                return self._retriever.retrieve_bcsymbolmap(identity, platform, uuid)
            except CacheError as exc:
                return exc

        ordered = list(uuids)
        mapper: Callable[..., Iterable[Path | CacheError]] = (
            self._executor.map if self._executor is not None else map
        )
        yield from zip(ordered, mapper(attempt, ordered))


__all__ = ["SymbolMapBatch", "SymbolMapBatchResult"]
