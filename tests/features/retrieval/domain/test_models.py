"""Tests for retrieval value objects and input parsing."""

from __future__ import annotations

import pytest

from carthage_cache.features.retrieval import (
    FrameworkIdentity,
    GitRepoVersionMarker,
    SymbolMapBatchError,
    SymbolMapPolicy,
    SymbolUUID,
    TargetPlatform,
    build_reverse_repository_map,
)
from carthage_cache.features.retrieval.domain.errors import ArtifactNotFoundError
from carthage_cache.features.retrieval.domain.models import parse_symbol_uuid


def test_framework_identity_parse_and_str() -> None:
    """``Name@version`` notation should round-trip through ``str``."""

    identity = FrameworkIdentity.parse(" FrameworkA @ 1.2.0 ")

    assert identity == FrameworkIdentity(name="FrameworkA", version="1.2.0")
    assert str(identity) == "FrameworkA@1.2.0"


@pytest.mark.parametrize("value", ["FrameworkA", "@1.0", "FrameworkA@", ""])
def test_framework_identity_rejects_malformed_input(value: str) -> None:
    with pytest.raises(ValueError):
        _ = FrameworkIdentity.parse(value)


def test_version_marker_parse() -> None:
    marker = GitRepoVersionMarker.parse("RepoA@v2")

    assert marker.repository_name == "RepoA"
    assert marker.version == "v2"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("ios", TargetPlatform.IOS),
        ("iOS", TargetPlatform.IOS),
        ("Mac", TargetPlatform.MACOS),
        ("macos", TargetPlatform.MACOS),
        ("OSX", TargetPlatform.MACOS),
        ("tvos", TargetPlatform.TVOS),
        ("watchOS", TargetPlatform.WATCHOS),
    ],
)
def test_platform_from_user_input(raw: str, expected: TargetPlatform) -> None:
    assert TargetPlatform.from_user_input(raw) is expected


def test_platform_from_user_input_lists_valid_options() -> None:
    with pytest.raises(ValueError, match="iOS, Mac, tvOS, watchOS"):
        _ = TargetPlatform.from_user_input("android")


def test_symbol_map_policy_accepts_underscores() -> None:
    assert SymbolMapPolicy.from_user_input("best_effort") is SymbolMapPolicy.BEST_EFFORT
    assert SymbolMapPolicy.from_user_input("STRICT") is SymbolMapPolicy.STRICT
    with pytest.raises(ValueError):
        _ = SymbolMapPolicy.from_user_input("lenient")


def test_parse_symbol_uuid_normalises_case() -> None:
    assert parse_symbol_uuid("abcdef01-2345-6789-abcd-ef0123456789") == (
        "ABCDEF01-2345-6789-ABCD-EF0123456789"
    )
    with pytest.raises(ValueError):
        _ = parse_symbol_uuid("not-a-uuid")


def test_reverse_map_falls_back_to_framework_name() -> None:
    """Unlisted frameworks live in a repository named after themselves."""

    first = FrameworkIdentity(name="FrameworkA", version="1.0")
    second = FrameworkIdentity(name="FrameworkB", version="1.0")
    orphan = FrameworkIdentity(name="Orphan", version="2.0")

    reverse_map = build_reverse_repository_map(
        {"RepoA": ["FrameworkA", "FrameworkB"], "RepoZ": ["FrameworkA"]},
        [first, second, orphan],
    )

    assert reverse_map == {first: "RepoA", second: "RepoA", orphan: "Orphan"}


def test_not_found_message_names_artifact_and_path(tmp_path) -> None:
    error = ArtifactNotFoundError("FrameworkA.framework", tmp_path / "a.zip")

    assert str(error) == f"Error: could not find FrameworkA.framework in local cache at : {tmp_path / 'a.zip'}"


def test_batch_error_lists_every_failed_uuid(tmp_path) -> None:
    identity = FrameworkIdentity(name="FrameworkA", version="1.0")
    first = SymbolUUID("11111111-1111-1111-1111-111111111111")
    second = SymbolUUID("22222222-2222-2222-2222-222222222222")
    failures = [
        (first, ArtifactNotFoundError("a", tmp_path / "a")),
        (second, ArtifactNotFoundError("b", tmp_path / "b")),
    ]

    error = SymbolMapBatchError(identity, TargetPlatform.IOS, failures)

    assert error.failed_uuids == [first, second]
    assert first in str(error) and second in str(error)
    assert "2 bcsymbolmap(s) failed for FrameworkA (iOS)" in str(error)
