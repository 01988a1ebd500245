"""Configuration management for carthage-cache."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from carthage_cache.config.paths import default_config_path
from carthage_cache.features.retrieval.domain.models import SymbolMapPolicy
from carthage_cache.features.retrieval.domain.paths import DEFAULT_BUILD_ROOT
from carthage_cache.platform.logging import logger

MAX_WORKERS_DEFAULT: int = 4


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


class ConfigError(ValueError):
    """Raised when the configuration file holds invalid values."""


@dataclass
class Config:
    """Application configuration."""

    # Root of the local cache shared between projects
    cache_root: Path | None = _path_field()

    # Namespace folder inside the cache root
    cache_prefix: str = ""

    # Carthage build directory of the current project
    build_root: Path = _path_field(DEFAULT_BUILD_ROOT)

    # Log file path
    log_file: Path | None = _path_field()

    max_workers: int = MAX_WORKERS_DEFAULT
    symbol_map_policy: SymbolMapPolicy = SymbolMapPolicy.BEST_EFFORT

    # Repository name -> framework names built from it
    repository_map: dict[str, list[str]] = field(default_factory=dict)

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Normalise raw TOML values into their typed representation."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value).expanduser() if value.strip() else None)

        if self.build_root is None:
            self.build_root = DEFAULT_BUILD_ROOT

        if isinstance(self.symbol_map_policy, str) and not isinstance(
            self.symbol_map_policy, SymbolMapPolicy
        ):
            try:
                self.symbol_map_policy = SymbolMapPolicy.from_user_input(self.symbol_map_policy)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc

        if not isinstance(self.max_workers, int) or self.max_workers < 1:
            raise ConfigError(f"max_workers must be a positive integer, got {self.max_workers!r}")

        for repository, frameworks in self.repository_map.items():
            if not isinstance(frameworks, list) or not all(isinstance(name, str) for name in frameworks):
                raise ConfigError(f"repository_map.{repository} must be a list of framework names")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Build a configuration, ignoring unknown keys with a warning."""

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration from file.

        Args:
            config_file: Explicit file to read; defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object, or defaults when no file exists.
        """
        target = config_file or default_config_path()

        if cls._instance is not None and cls._loaded_from == target:
            return cls._instance

        try:
            if target.exists():
                with open(target, "rb") as f:
                    config_dict = tomllib.load(f)
                instance = cls.from_dict(config_dict)
                logger.debug("Configuration loaded from %s", target)
            else:
                instance = cls()
                logger.debug("No configuration at %s; using defaults", target)
        except (OSError, tomllib.TOMLDecodeError, ConfigError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = target
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next ``load`` rereads the file."""

        cls._instance = None
        cls._loaded_from = None


__all__ = ["Config", "ConfigError", "MAX_WORKERS_DEFAULT"]
