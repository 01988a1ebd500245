"""Read debug-info UUIDs from Mach-O binaries with ``xcrun dwarfdump``."""

from __future__ import annotations

import re
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Final, final

from carthage_cache.features.retrieval.domain.errors import UUIDDiscoveryError
from carthage_cache.features.retrieval.domain.models import SymbolUUID, parse_symbol_uuid

_UUID_LINE: Final[re.Pattern[str]] = re.compile(
    r"^UUID:\s+(?P<uuid>[0-9A-Fa-f-]{36})\s+\((?P<arch>[^)]+)\)"
)


def parse_dwarfdump_output(output: str) -> list[SymbolUUID]:
    """Extract UUIDs from ``dwarfdump --uuid`` lines, dropping duplicates."""

    uuids: list[SymbolUUID] = []
    for line in output.splitlines():
        match = _UUID_LINE.match(line.strip())
        if match is None:
            continue
        uuid = parse_symbol_uuid(match.group("uuid"))
        if uuid not in uuids:
            uuids.append(uuid)
    return uuids


@final
class DwarfdumpInspector:
    """``UUIDInspector`` backed by the Xcode command line tools."""

    def __init__(self, command: Sequence[str] = ("xcrun", "dwarfdump", "--uuid")) -> None:
        self._command: tuple[str, ...] = tuple(command)

    def uuids(self, binary_path: Path) -> list[SymbolUUID]:
        if not binary_path.is_file():
            raise UUIDDiscoveryError(binary_path, "binary not found")

        executable = shutil.which(self._command[0])
        if executable is None:
            raise UUIDDiscoveryError(binary_path, f"'{self._command[0]}' was not found on PATH")

        try:
            completed = subprocess.run(
                [executable, *self._command[1:], str(binary_path)],
                check=True,
                capture_output=True,
                text=True,
            )
        except subprocess.CalledProcessError as exc:
            reason = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise UUIDDiscoveryError(binary_path, reason) from exc
        except OSError as exc:
            raise UUIDDiscoveryError(binary_path, str(exc)) from exc

        return parse_dwarfdump_output(completed.stdout)


__all__ = ["DwarfdumpInspector", "parse_dwarfdump_output"]
