"""
Non-destructive merge of discovered keys into existing catalogs.

Existing entries always win: their values and order are kept, and only keys
absent from a catalog are appended (value = key, in discovery order).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from transcollect.common.atomic_write import write_text_atomic
from transcollect.core.catalog_format import UPDATED_BANNER, dump_catalog, load_catalog
from transcollect.core.errors import CatalogLoadError, WriteError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeOutcome:
    """Result of merging keys into one in-memory catalog.

    Attributes:
        messages: Merged mapping (existing entries first, then added keys).
        added: Keys that were absent before the merge, in discovery order.
    """

    messages: dict[str, str]
    added: tuple[str, ...]


@dataclass
class MergeReport:
    """Per-file results of a merge run."""

    updated: dict[Path, tuple[str, ...]] = field(default_factory=dict)
    failed: dict[Path, CatalogLoadError] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return bool(self.failed)

    @property
    def added_count(self) -> int:
        return sum(len(added) for added in self.updated.values())


def find_catalogs(lang_dir: str | os.PathLike[str], pattern: str) -> list[Path]:
    """Return merge targets under lang_dir (recursive), sorted by path.

    A missing catalog directory simply has no merge targets.
    """
    lang_path = Path(lang_dir)
    if not lang_path.is_dir():
        logger.warning("Catalog directory %s does not exist, nothing to merge", lang_path)
        return []
    return sorted(path for path in lang_path.rglob(pattern) if path.is_file())


def merge_keys(existing: dict[str, str], keys: Iterable[str]) -> MergeOutcome:
    """Union discovered keys into an existing catalog mapping.

    Args:
        existing: Current catalog content (left untouched)
        keys: Discovered keys in discovery order

    Returns:
        MergeOutcome with the merged mapping and the keys that were added
    """
    merged = dict(existing)
    added: list[str] = []
    for key in keys:
        if key in merged:
            continue
        merged[key] = key
        added.append(key)
    return MergeOutcome(messages=merged, added=tuple(added))


def merge_catalog_file(path: str | os.PathLike[str], keys: Iterable[str]) -> tuple[str, ...]:
    """Merge keys into one catalog file and overwrite it.

    Returns:
        Keys added to the file.

    Raises:
        CatalogLoadError: If the existing file cannot be loaded.
        WriteError: If the merged file cannot be written.
    """
    outcome = merge_keys(load_catalog(path), keys)
    text = dump_catalog(outcome.messages.items(), banner=UPDATED_BANNER)
    try:
        write_text_atomic(path, text)
    except OSError as e:
        raise WriteError(
            f"Cannot write catalog {path}: {e}",
            user_message=f"Failed to update {path}",
            context={"path": os.fspath(path)},
        ) from e
    return outcome.added


def merge_into_catalogs(catalog_files: Iterable[Path], keys: Iterable[str]) -> MergeReport:
    """Merge keys into every catalog file.

    A catalog that cannot be loaded is reported and skipped; the other files
    are still processed. Write failures propagate.
    """
    key_list = list(keys)
    report = MergeReport()
    for path in catalog_files:
        try:
            added = merge_catalog_file(path, key_list)
        except CatalogLoadError as e:
            logger.error("Skipping catalog %s: %s", path, e)
            report.failed[path] = e
            continue
        report.updated[path] = added
        logger.info("Updated %s", path)
        logger.debug("%d new key(s) added to %s", len(added), path)
        for key in added:
            logger.debug("  + %r", key)
    return report
