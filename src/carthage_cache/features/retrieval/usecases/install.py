"""Use cases placing fetched artifacts into the Carthage build tree."""

from __future__ import annotations

import shutil
import tempfile
import uuid
import zipfile
from pathlib import Path

from carthage_cache.platform.archive import ArchiveError, extract_archive_entry
from carthage_cache.platform.filesystem import (
    ensure_directory,
    make_executable,
    remove_path,
    write_bytes_atomic,
)
from carthage_cache.platform.logging import CacheEvent

from ..domain.errors import InstallError
from ..domain.models import ArtifactDescriptor, ArtifactKind, RetrievalContext
from .ports import ArchiveExtractor


class ArtifactInstaller:
    """Replace an installed artifact with the content of a cached archive.

    The destination only ever holds a complete copy: archives are unpacked
    into a staging directory next to it and swapped in with a rename.
    """

    _extract: ArchiveExtractor

    def __init__(self, *, extractor: ArchiveExtractor | None = None) -> None:
        self._extract = extractor or extract_archive_entry

    def install(self, payload: bytes, descriptor: ArtifactDescriptor, context: RetrievalContext) -> Path:
        """Install ``payload`` at ``descriptor.destination`` and return that path.

        Raises:
            InstallError: Extraction, the swap, or the permission fix failed.
        """

        if descriptor.kind is ArtifactKind.VERSION_MARKER:
            return self.install_version_marker(payload, descriptor, context)

        destination = descriptor.destination
        self._remove_existing(descriptor, context)

        try:
            parent = ensure_directory(destination.parent)
        except OSError as exc:
            raise InstallError(descriptor.name, destination, str(exc)) from exc

        staging = Path(tempfile.mkdtemp(prefix=f".{destination.name}.", suffix=".staging", dir=parent))
        try:
            extracted = self._extract(payload, descriptor.archive_entry, staging)
            if descriptor.executable:
                self._mark_executable(extracted, descriptor)
            self._swap_into_place(extracted, destination)
        except (ArchiveError, zipfile.BadZipFile, OSError) as exc:
            raise InstallError(descriptor.name, destination, str(exc)) from exc
        finally:
            shutil.rmtree(staging, ignore_errors=True)

        context.sink.say(
            "Unzipped %s",
            descriptor.name,
            event=CacheEvent.INSTALL_DONE,
            path=destination,
        )
        return destination

    def install_version_marker(
        self,
        payload: bytes,
        descriptor: ArtifactDescriptor,
        context: RetrievalContext,
    ) -> Path:
        """Copy a version marker verbatim; markers are not archived."""

        try:
            write_bytes_atomic(descriptor.destination, payload)
        except OSError as exc:
            raise InstallError(descriptor.name, descriptor.destination, str(exc)) from exc
        context.sink.say(
            "Copied %s",
            descriptor.name,
            event=CacheEvent.INSTALL_COPIED,
            path=descriptor.destination,
        )
        return descriptor.destination

    def _remove_existing(self, descriptor: ArtifactDescriptor, context: RetrievalContext) -> None:
        destination = descriptor.destination
        try:
            removed = remove_path(destination)
        except OSError as exc:
            # The swap below still replaces whatever survived.
            context.sink.warn(
                "Could not delete previous %s: %s",
                descriptor.name,
                exc,
                event=CacheEvent.INSTALL_WARNING,
                path=destination,
            )
            return
        if removed:
            context.sink.say(
                "Deleted %s",
                descriptor.name,
                event=CacheEvent.INSTALL_REMOVED,
                path=destination,
            )

    @staticmethod
    def _swap_into_place(extracted: Path, destination: Path) -> None:
        if not extracted.exists() and not extracted.is_symlink():
            raise ArchiveError(f"Nothing was extracted for {destination.name}")

        stale: Path | None = None
        if destination.exists() or destination.is_symlink():
            stale = destination.with_name(f".{destination.name}.stale-{uuid.uuid4().hex[:8]}")
            _ = destination.rename(stale)

        _ = extracted.rename(destination)

        if stale is None:
            return
        if stale.is_dir() and not stale.is_symlink():
            shutil.rmtree(stale, ignore_errors=True)
        else:
            stale.unlink(missing_ok=True)

    @staticmethod
    def _mark_executable(bundle: Path, descriptor: ArtifactDescriptor) -> None:
        binary = bundle / descriptor.name
        try:
            make_executable(binary.resolve())
        except OSError as exc:
            raise InstallError(descriptor.name, descriptor.destination, f"cannot mark executable: {exc}") from exc


__all__ = ["ArtifactInstaller"]
