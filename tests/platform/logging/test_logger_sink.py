"""Tests for ``LoggerSink`` and logger bootstrap."""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Iterator
from pathlib import Path

import pytest

from carthage_cache.platform.logging import (
    LOGGER_NAME,
    CacheEvent,
    CacheRichHandler,
    LoggerSink,
    setup_logger,
)


@pytest.fixture()
def restore_logger() -> Iterator[None]:
    try:
        yield None
    finally:
        _ = setup_logger()


def test_say_attaches_structured_extras(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggerSink(logging.getLogger(f"{LOGGER_NAME}.tests"))

    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        sink.say(
            "Found %s in local cache",
            "FrameworkA",
            event=CacheEvent.ARTIFACT_FOUND,
            path=Path("/cache/a.zip"),
        )

    record = caplog.records[-1]
    assert record.levelno == logging.INFO
    assert record.getMessage() == "Found FrameworkA in local cache at: /cache/a.zip"
    assert getattr(record, "cache_event") == "cache.artifact.found"
    assert getattr(record, "cache_path") == "/cache/a.zip"
    assert getattr(record, "cache_summary") == "Found FrameworkA in local cache"


def test_warn_without_path(caplog: pytest.LogCaptureFixture) -> None:
    sink = LoggerSink(logging.getLogger(f"{LOGGER_NAME}.tests"))

    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        sink.warn("Skipped %s", "U2", event=CacheEvent.SYMBOLS_FAILED)

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.getMessage() == "Skipped U2"
    assert not hasattr(record, "cache_path")


def test_setup_logger_adds_rotating_file(tmp_path: Path, restore_logger: None) -> None:
    _ = restore_logger
    log_file = tmp_path / "logs" / "carthage_cache.log"

    logger = setup_logger(log_file=log_file, console_level=logging.WARNING)

    handlers = {type(handler) for handler in logger.handlers}
    assert handlers == {CacheRichHandler, logging.handlers.RotatingFileHandler}
    logger.debug("written to file only")
    for handler in logger.handlers:
        handler.flush()
    assert "written to file only" in log_file.read_text(encoding="utf-8")


def test_setup_logger_is_repeatable(restore_logger: None) -> None:
    _ = restore_logger

    _ = setup_logger()
    logger = setup_logger()

    assert len(logger.handlers) == 1


def test_reconfiguring_closes_the_previous_log_file(tmp_path: Path, restore_logger: None) -> None:
    """File lines carry the worker thread, and replaced handlers release their file."""

    _ = restore_logger
    first = setup_logger(log_file=tmp_path / "first.log")
    previous = next(
        handler for handler in first.handlers if isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    first.info("Unzipped FrameworkA")
    previous.flush()

    _ = setup_logger(log_file=tmp_path / "second.log")

    assert previous.stream is None
    line = (tmp_path / "first.log").read_text(encoding="utf-8").splitlines()[-1]
    assert "[MainThread] INFO" in line
    assert line.endswith("carthage_cache: Unzipped FrameworkA")
