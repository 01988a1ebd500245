"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from pathlib import Path


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(parents=True, exist_ok=True)
    return directory


def ensure_parent_directory(path: Path) -> Path:
    """Ensure the parent directory for ``path`` exists and return it."""

    parent = path.parent
    return ensure_directory(parent)


def remove_path(path: Path) -> bool:
    """Delete a file, symlink or directory tree; return False when nothing was there."""

    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path)
        return True
    return False


def write_bytes_atomic(path: Path, payload: bytes) -> None:
    """Write ``payload`` to ``path`` so readers see either the old or the new file."""

    _ = ensure_parent_directory(path)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            _ = handle.write(payload)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise


def make_executable(path: Path) -> None:
    """Add execute permission wherever read permission is granted."""

    mode = path.stat().st_mode
    executable_bits = 0
    if mode & stat.S_IRUSR:
        executable_bits |= stat.S_IXUSR
    if mode & stat.S_IRGRP:
        executable_bits |= stat.S_IXGRP
    if mode & stat.S_IROTH:
        executable_bits |= stat.S_IXOTH
    path.chmod(mode | executable_bits)


__all__ = [
    "ensure_directory",
    "ensure_parent_directory",
    "make_executable",
    "remove_path",
    "write_bytes_atomic",
]
