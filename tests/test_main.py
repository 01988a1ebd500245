"""Smoke tests for unified entry points.

These tests assert that `python -m carthage_cache` and the console script
both resolve to the CLI's `main` function exposed under `carthage_cache.ui.cli`.
"""

from importlib import import_module

import pytest

from carthage_cache import __version__
from carthage_cache.ui.cli.args import ArgumentParser


def test_module_entry_point_exposes_main() -> None:
    """`python -m carthage_cache` path exposes a `main` callable."""
    m = import_module("carthage_cache.__main__")
    assert hasattr(m, "main")


def test_console_script_target_exposes_main() -> None:
    """Console script points to `carthage_cache.ui.cli:main` and is importable."""
    m = import_module("carthage_cache.ui.cli")
    assert hasattr(m, "main")


def test_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _ = ArgumentParser.create_parser().parse_args(["--version"])

    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == f"carthage-cache {__version__}"
