"""Shared pytest fixtures for retrieval tests."""

from __future__ import annotations

import io
import stat
import struct
import zipfile
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field

import pytest

from carthage_cache.config.config import Config
from carthage_cache.features.retrieval import CachePrefix, RetrievalContext

ZipFactory = Callable[..., bytes]


@dataclass
class RecordingSink:
    """LogSink that keeps every message for assertions."""

    said: list[str] = field(default_factory=list)
    warned: list[str] = field(default_factory=list)
    events: list[str] = field(default_factory=list)

    def say(
        self,
        message: str,
        *args: object,
        event: str | None = None,
        path: object | None = None,
    ) -> None:
        del path
        self.said.append(message % args if args else message)
        if event is not None:
            self.events.append(str(event))

    def warn(
        self,
        message: str,
        *args: object,
        event: str | None = None,
        path: object | None = None,
    ) -> None:
        del path
        self.warned.append(message % args if args else message)
        if event is not None:
            self.events.append(str(event))


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def context(sink: RecordingSink) -> RetrievalContext:
    return RetrievalContext(cache_prefix=CachePrefix("team1"), sink=sink)


def _build_zip(
    files: Mapping[str, bytes],
    *,
    executables: tuple[str, ...] = (),
    symlinks: Mapping[str, str] | None = None,
    symlinks_first: bool = False,
) -> bytes:
    def write_files(archive: zipfile.ZipFile) -> None:
        for name, content in files.items():
            info = zipfile.ZipInfo(name)
            mode = 0o755 if name in executables else 0o644
            info.external_attr = (stat.S_IFREG | mode) << 16
            archive.writestr(info, content)

    def write_symlinks(archive: zipfile.ZipFile) -> None:
        for name, target in (symlinks or {}).items():
            info = zipfile.ZipInfo(name)
            info.external_attr = (stat.S_IFLNK | 0o777) << 16
            archive.writestr(info, target)

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        if symlinks_first:
            write_symlinks(archive)
            write_files(archive)
        else:
            write_files(archive)
            write_symlinks(archive)
    return buffer.getvalue()


@pytest.fixture()
def make_zip() -> ZipFactory:
    """Build zip payloads in memory from ``{member: bytes}`` mappings."""

    return _build_zip


@pytest.fixture()
def framework_zip(make_zip: ZipFactory) -> Callable[[str], bytes]:
    """Zip a minimal framework bundle named ``<name>.framework``."""

    def _factory(name: str) -> bytes:
        return make_zip(
            {
                f"{name}.framework/{name}": b"\xcf\xfa\xed\xfe binary",
                f"{name}.framework/Info.plist": b"<plist/>",
            }
        )

    return _factory


@pytest.fixture()
def corrupt_framework_zip() -> Callable[[str], bytes]:
    """Zip a framework whose deflate stream starts with an invalid block header."""

    def _factory(name: str) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr(
                f"{name}.framework/{name}",
                b"binary " * 4096,
                compress_type=zipfile.ZIP_DEFLATED,
            )
        payload = bytearray(buffer.getvalue())
        # Single member, so its local header starts at offset 0.
        name_length, extra_length = struct.unpack_from("<HH", payload, 26)
        data_start = 30 + name_length + extra_length
        payload[data_start : data_start + 20] = b"\xff" * 20
        return bytes(payload)

    return _factory


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Iterator[None]:
    """Keep ``Config.load`` caching from leaking between tests."""

    Config.reset()
    try:
        yield None
    finally:
        Config.reset()
