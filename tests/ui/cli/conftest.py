"""Fixtures shared by CLI tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from carthage_cache.platform.logging import setup_logger


@pytest.fixture()
def config_file(tmp_path: Path) -> Iterator[Path]:
    """Write a config that keeps log output inside ``tmp_path``."""

    path = tmp_path / "config.toml"
    _ = path.write_text(
        f"""
cache_root = "{(tmp_path / 'cache').as_posix()}"
cache_prefix = "team1"
log_file = "{(tmp_path / 'logs' / 'carthage_cache.log').as_posix()}"
max_workers = 2

[repository_map]
RepoA = ["FrameworkA"]
""",
        encoding="utf-8",
    )
    try:
        yield path
    finally:
        _ = setup_logger()
