"""Summary: Extract one named bundle or file out of an in-memory zip archive.
Why: Cached artifacts are zipped bundles whose modes and symlinks must survive extraction.
"""

from __future__ import annotations

import io
import os
import stat
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Final

# Raised while decoding member data or a symlink target.
_CORRUPTION_ERRORS: Final[tuple[type[Exception], ...]] = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    UnicodeDecodeError,
)


class ArchiveError(ValueError):
    """Raised when an archive does not contain a usable entry."""


def _member_parts(info: zipfile.ZipInfo) -> tuple[str, ...]:
    parts = PurePosixPath(info.filename.replace("\\", "/")).parts
    if not parts or parts[0] == "/" or ".." in parts:
        raise ArchiveError(f"Refusing unsafe archive member: {info.filename!r}")
    return parts


def _locate_prefix(members: list[zipfile.ZipInfo], entry_name: str) -> tuple[str, ...]:
    """Return the leading components stored before ``entry_name``.

    Archives are zipped either relative to the platform build directory
    (``Name.framework/...``) or relative to the project
    (``Carthage/Build/iOS/Name.framework/...``).
    """

    for info in members:
        parts = _member_parts(info)
        if entry_name in parts:
            return parts[: parts.index(entry_name)]
    raise ArchiveError(f"Archive has no entry named {entry_name!r}")


def _ensure_within(path: Path, root: Path, member: str) -> None:
    if not path.is_relative_to(root):
        raise ArchiveError(f"Refusing archive member escaping {root.name}: {member!r}")


def _write_member(archive: zipfile.ZipFile, info: zipfile.ZipInfo, target: Path, root: Path) -> None:
    # Resolving follows symlinks extracted by earlier members.
    _ensure_within(target.resolve(), root, info.filename)
    mode = info.external_attr >> 16
    if info.is_dir():
        target.mkdir(parents=True, exist_ok=True)
        return

    target.parent.mkdir(parents=True, exist_ok=True)
    if stat.S_ISLNK(mode):
        link_target = archive.read(info).decode("utf-8")
        if PurePosixPath(link_target).is_absolute():
            raise ArchiveError(f"Refusing absolute symlink in archive: {info.filename!r}")
        _ensure_within((target.parent / link_target).resolve(), root, info.filename)
        os.symlink(link_target, target)
        return

    with archive.open(info) as source, open(target, "wb") as sink:
        while chunk := source.read(1024 * 1024):
            _ = sink.write(chunk)
    permissions = stat.S_IMODE(mode)
    if permissions:
        target.chmod(permissions)


def extract_archive_entry(payload: bytes, entry_name: str, target_dir: Path) -> Path:
    """Extract ``entry_name`` (file or directory tree) from ``payload`` into ``target_dir``.

    Args:
        payload: Raw zip bytes.
        entry_name: Name of the bundle or file to extract, e.g. ``Name.framework``.
        target_dir: Existing directory that receives ``entry_name``.

    Returns:
        Path: ``target_dir / entry_name``.

    Raises:
        ArchiveError: The archive is not a zip, is corrupt, lacks ``entry_name``,
            or has a member or symlink pointing outside ``entry_name``.
        OSError: Writing to ``target_dir`` failed.
    """

    try:
        archive = zipfile.ZipFile(io.BytesIO(payload))
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Not a zip archive: {exc}") from exc

    base = target_dir.resolve()
    with archive:
        members = archive.infolist()
        prefix = _locate_prefix(members, entry_name)
        root = (*prefix, entry_name)
        selected = [info for info in members if _member_parts(info)[: len(root)] == root]

        for info in selected:
            relative = _member_parts(info)[len(prefix):]
            try:
                _write_member(archive, info, base.joinpath(*relative), base / entry_name)
            except _CORRUPTION_ERRORS as exc:
                raise ArchiveError(f"Corrupt archive member {info.filename!r}: {exc}") from exc

    return target_dir / entry_name


__all__ = ["ArchiveError", "extract_archive_entry"]
