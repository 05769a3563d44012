# transcollect/common/config.py
"""Collector configuration (explicit, no framework path helpers).

Frozen dataclass plus tolerant conversion helpers. Every directory is
resolved against the project root supplied by the caller.

Usage:
    from transcollect.common.config import load_config

    config = load_config(Path.cwd())
    for root in config.scan_dirs(test=False):
        ...
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from transcollect.core.errors import ConfigError

CONFIG_FILENAME = "transcollect.json"

DEFAULT_SOURCE_DIRS = ("app", "resources/views")
DEFAULT_TEST_DIRS = ("tests/translations",)
DEFAULT_LANG_DIR = "resources/lang"
DEFAULT_DUMP_DIR = "resources/lang/dump"
DEFAULT_EXTENSIONS = ("php",)
DEFAULT_CATALOG_PATTERN = "messages.yaml"


def _get_logger() -> logging.Logger:
    """Get module logger (lazy to avoid side effect at import time)."""
    return logging.getLogger(__name__)


# =============================================================================
# Helper Functions
# =============================================================================


def safe_str(value: Any, default: str) -> str:
    """String conversion. None, empty string and non-str values give default.

    Args:
        value: Value to convert
        default: Fallback value

    Returns:
        The string, or default
    """
    if not isinstance(value, str) or not value:
        return default
    return value


def safe_str_tuple(value: Any, default: tuple[str, ...]) -> tuple[str, ...]:
    """Tuple-of-strings conversion.

    A single string is accepted as a one-element tuple. Lists with any
    non-string or empty item give default, so one typo does not silently
    drop a scan root.

    Args:
        value: Value to convert
        default: Fallback value

    Returns:
        Tuple of strings, or default
    """
    if isinstance(value, str):
        return (value,) if value else default
    if not isinstance(value, (list, tuple)) or not value:
        return default
    if not all(isinstance(item, str) and item for item in value):
        return default
    return tuple(value)


def _normalize_extension(ext: str) -> str:
    return ext[1:] if ext.startswith(".") else ext


# =============================================================================
# CollectorConfig
# =============================================================================


@dataclass(frozen=True)
class CollectorConfig:
    """Paths and matching rules for one collector run.

    Attributes:
        project_root: Base directory; relative paths below resolve against it
        source_dirs: Scan roots for the default mode
        test_dirs: Scan roots for test mode
        lang_dir: Directory searched (recursively) for merge targets
        dump_dir: Directory receiving generated catalogs
        extensions: File extensions (without dot) passed to the extractor
        catalog_pattern: Glob pattern naming merge target files
    """

    project_root: Path
    source_dirs: tuple[str, ...] = DEFAULT_SOURCE_DIRS
    test_dirs: tuple[str, ...] = DEFAULT_TEST_DIRS
    lang_dir: str = DEFAULT_LANG_DIR
    dump_dir: str = DEFAULT_DUMP_DIR
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    catalog_pattern: str = DEFAULT_CATALOG_PATTERN

    def __post_init__(self) -> None:
        object.__setattr__(self, "project_root", Path(self.project_root).resolve())
        object.__setattr__(
            self, "extensions", tuple(_normalize_extension(ext) for ext in self.extensions)
        )

    @classmethod
    def from_dict(cls, project_root: str | os.PathLike[str], data: dict[str, Any]) -> CollectorConfig:
        """Build a config from a raw dict, falling back to defaults per field."""
        return cls(
            project_root=Path(project_root),
            source_dirs=safe_str_tuple(data.get("source_dirs"), DEFAULT_SOURCE_DIRS),
            test_dirs=safe_str_tuple(data.get("test_dirs"), DEFAULT_TEST_DIRS),
            lang_dir=safe_str(data.get("lang_dir"), DEFAULT_LANG_DIR),
            dump_dir=safe_str(data.get("dump_dir"), DEFAULT_DUMP_DIR),
            extensions=safe_str_tuple(data.get("extensions"), DEFAULT_EXTENSIONS),
            catalog_pattern=safe_str(data.get("catalog_pattern"), DEFAULT_CATALOG_PATTERN),
        )

    def resolve(self, path: str) -> Path:
        """Resolve a configured path against the project root."""
        return self.project_root / path

    def scan_dirs(self, test: bool = False) -> list[Path]:
        dirs = self.test_dirs if test else self.source_dirs
        return [self.resolve(d) for d in dirs]

    @property
    def lang_path(self) -> Path:
        return self.resolve(self.lang_dir)

    @property
    def dump_path(self) -> Path:
        return self.resolve(self.dump_dir)


def load_config(
    project_root: str | os.PathLike[str],
    config_path: str | os.PathLike[str] | None = None,
) -> CollectorConfig:
    """Load collector config for a project.

    Reads overrides from ``config_path``, or from ``transcollect.json`` in
    the project root when present. A missing default file means defaults.

    Raises:
        ConfigError: If an explicitly given file is missing, or any config
            file is not a JSON object.
    """
    if config_path is None:
        path = Path(project_root) / CONFIG_FILENAME
        if not path.exists():
            return CollectorConfig(project_root=Path(project_root))
    else:
        path = Path(config_path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(
            f"Cannot load config file {path}: {e}",
            user_message=f"Invalid configuration file: {path}",
            context={"path": str(path)},
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {path} must contain a JSON object (got {type(data).__name__})",
            context={"path": str(path)},
        )

    _get_logger().debug("Loaded config overrides from %s: %s", path, sorted(data))
    return CollectorConfig.from_dict(project_root, data)
