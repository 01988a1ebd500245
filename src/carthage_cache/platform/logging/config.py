"""Logger bootstrap for carthage-cache.

Where: platform/logging/config.py
What: Build the console and rotating file handlers for the ``carthage_cache`` logger.
Why: The CLI reconfigures logging after reading the config file, so setup must be repeatable.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final

from rich.console import Console

from carthage_cache.config.paths import default_log_file

from .handlers import CacheRichHandler


LOGGER_NAME: Final[str] = "carthage_cache"
DEFAULT_LOG_FILE: Final[Path] = default_log_file()

_FILE_FORMAT: Final[str] = "%(asctime)s [%(threadName)s] %(levelname)-8s %(name)s: %(message)s"
_ROTATE_BYTES: Final[int] = 10 * 1024 * 1024
_ROTATE_BACKUPS: Final[int] = 5


def _console_handler(level: int, verbose: bool, console: Console | None) -> logging.Handler:
    # stderr keeps stdout free for the summary table.
    handler = CacheRichHandler(
        console=console or Console(stderr=True, soft_wrap=True),
        verbose=verbose,
    )
    handler.setLevel(level)
    return handler


def _file_handler(log_file: Path, level: int) -> logging.Handler:
    target = Path(log_file).expanduser().resolve()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        target,
        maxBytes=_ROTATE_BYTES,
        backupCount=_ROTATE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    *,
    verbose: bool = False,
    console: Console | None = None,
) -> logging.Logger:
    """Replace the handlers of the application logger and return it.

    Args:
        log_file: Rotating log destination; ``None`` logs to the console only.
        console_level: Threshold for console output.
        file_level: Threshold for the log file.
        verbose: Show timestamps on the console.
        console: Console override, mainly for tests.
    """

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(logging.DEBUG)

    for stale in list(app_logger.handlers):
        app_logger.removeHandler(stale)
        stale.close()

    app_logger.addHandler(_console_handler(console_level, verbose, console))
    if log_file is not None:
        app_logger.addHandler(_file_handler(log_file, file_level))
    return app_logger


# Console only until the CLI knows where the configured log file lives.
logger: Final[logging.Logger] = setup_logger()


__all__ = ["DEFAULT_LOG_FILE", "LOGGER_NAME", "logger", "setup_logger"]
