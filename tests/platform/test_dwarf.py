"""Tests for the dwarfdump-backed UUID inspector."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from carthage_cache.features.retrieval import UUIDDiscoveryError
from carthage_cache.platform.dwarf import DwarfdumpInspector, parse_dwarfdump_output

SAMPLE_OUTPUT = """\
UUID: 2b6f7a8c-1234-5678-9abc-def012345678 (armv7) /tmp/FrameworkA.framework/FrameworkA
UUID: 9F0E1D2C-3B4A-5968-7766-554433221100 (arm64) /tmp/FrameworkA.framework/FrameworkA
UUID: 9F0E1D2C-3B4A-5968-7766-554433221100 (arm64e) /tmp/FrameworkA.framework/FrameworkA
warning: unrelated line
"""


@pytest.fixture()
def binary(tmp_path: Path) -> Path:
    path = tmp_path / "FrameworkA.framework" / "FrameworkA"
    path.parent.mkdir()
    _ = path.write_bytes(b"\xcf\xfa\xed\xfe")
    return path


def test_parse_output_normalises_and_deduplicates() -> None:
    assert parse_dwarfdump_output(SAMPLE_OUTPUT) == [
        "2B6F7A8C-1234-5678-9ABC-DEF012345678",
        "9F0E1D2C-3B4A-5968-7766-554433221100",
    ]
    assert parse_dwarfdump_output("") == []


def test_inspector_runs_dwarfdump(binary: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("carthage_cache.platform.dwarf.shutil.which", return_value="/usr/bin/xcrun")
    run = mocker.patch(
        "carthage_cache.platform.dwarf.subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout=SAMPLE_OUTPUT, stderr=""),
    )

    uuids = DwarfdumpInspector().uuids(binary)

    assert len(uuids) == 2
    run.assert_called_once_with(
        ["/usr/bin/xcrun", "dwarfdump", "--uuid", str(binary)],
        check=True,
        capture_output=True,
        text=True,
    )


def test_missing_binary_fails_without_running(tmp_path: Path, mocker: MockerFixture) -> None:
    run = mocker.patch("carthage_cache.platform.dwarf.subprocess.run")

    with pytest.raises(UUIDDiscoveryError, match="binary not found"):
        _ = DwarfdumpInspector().uuids(tmp_path / "missing")

    run.assert_not_called()


def test_missing_tool_is_reported(binary: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("carthage_cache.platform.dwarf.shutil.which", return_value=None)

    with pytest.raises(UUIDDiscoveryError, match="'xcrun' was not found on PATH"):
        _ = DwarfdumpInspector().uuids(binary)


def test_tool_failure_surfaces_stderr(binary: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("carthage_cache.platform.dwarf.shutil.which", return_value="/usr/bin/xcrun")
    _ = mocker.patch(
        "carthage_cache.platform.dwarf.subprocess.run",
        side_effect=subprocess.CalledProcessError(1, ["xcrun"], output="", stderr="not a Mach-O file\n"),
    )

    with pytest.raises(UUIDDiscoveryError, match="not a Mach-O file"):
        _ = DwarfdumpInspector().uuids(binary)


def test_custom_command(binary: Path, mocker: MockerFixture) -> None:
    _ = mocker.patch("carthage_cache.platform.dwarf.shutil.which", return_value="/opt/bin/dwarfdump")
    run = mocker.patch(
        "carthage_cache.platform.dwarf.subprocess.run",
        return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr=""),
    )

    assert DwarfdumpInspector(command=("dwarfdump", "-u")).uuids(binary) == []
    assert run.call_args.args[0] == ["/opt/bin/dwarfdump", "-u", str(binary)]
