"""
Translation collector: scan roots, dump generated catalogs, merge.

One KeyRegistry is built per scan root and never shared between roots.

Usage:
    collector = TranslationCollector(load_config(project_root), include_locations=True)
    exit_code = collector.run(test=False, append=True)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from transcollect.common.atomic_write import write_text_atomic
from transcollect.common.config import CollectorConfig
from transcollect.common.slug import slugify
from transcollect.core.catalog_format import GENERATED_BANNER, dump_catalog
from transcollect.core.catalog_merger import MergeReport, find_catalogs, merge_into_catalogs
from transcollect.core.errors import ScanError, WriteError
from transcollect.core.file_walker import walk_files
from transcollect.core.key_extractor import extract_keys, read_source
from transcollect.core.key_registry import KeyRegistry, SourceLocation

logger = logging.getLogger(__name__)

DUMP_SUFFIX = ".yaml"


def relative_name(path: Path, base: Path) -> str:
    """POSIX-style path of ``path`` relative to ``base`` ("" for base itself).

    Paths outside ``base`` are returned absolute.
    """
    try:
        rel = path.relative_to(base)
    except ValueError:
        return path.as_posix()
    name = rel.as_posix()
    return "" if name == "." else name


@dataclass(frozen=True)
class ScanRoot:
    """A directory designated as a scan target.

    Attributes:
        path: Absolute directory path.
        name: Path relative to the project root; names the dump file.
    """

    path: Path
    name: str

    @classmethod
    def from_path(cls, path: str | os.PathLike[str], project_root: Path) -> ScanRoot:
        abs_path = Path(path).absolute()
        return cls(path=abs_path, name=relative_name(abs_path, project_root))


@dataclass
class ScanResult:
    """Everything one scan root produced."""

    root: ScanRoot
    registry: KeyRegistry = field(default_factory=KeyRegistry)
    files_scanned: int = 0
    files_skipped: int = 0
    unreadable: list[Path] = field(default_factory=list)


class TranslationCollector:
    """Runs the scan -> dump -> merge pipeline for configured roots.

    Args:
        config: Paths and matching rules
        include_locations: Add ``# path:offset`` comments to dumps
    """

    def __init__(self, config: CollectorConfig, *, include_locations: bool = False) -> None:
        self._config = config
        self._include_locations = include_locations
        self._extensions = frozenset(config.extensions)

    @property
    def config(self) -> CollectorConfig:
        return self._config

    def scan_roots(self, test: bool = False) -> list[ScanRoot]:
        return [ScanRoot.from_path(p, self._config.project_root) for p in self._config.scan_dirs(test)]

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def scan(self, root: ScanRoot) -> ScanResult:
        """Extract keys from every matching file under a root.

        Raises:
            ScanError: If the root cannot be scanned (before any extraction).
        """
        files = walk_files(root.path)
        logger.info("Scanning recursively %s", root.path)

        result = ScanResult(root=root)
        registry = result.registry
        for walked in files:
            rel_path = relative_name(walked.path, self._config.project_root)
            logger.debug("Scanning file %s:", rel_path)

            if walked.extension not in self._extensions:
                logger.debug("Invalid extension.")
                result.files_skipped += 1
                continue

            try:
                content = read_source(walked.path)
            except OSError as e:
                logger.error("Cannot read %s: %s", rel_path, e)
                result.unreadable.append(walked.path)
                continue
            result.files_scanned += 1

            found = 0
            for key, offset in extract_keys(content):
                location = SourceLocation(rel_path, offset)
                if not registry.record(key, location):
                    logger.debug("  duplicate %r at %s", key, location)
                else:
                    logger.debug("  %r at %s", key, location)
                found += 1
            if not found:
                logger.debug("No translations found.")

        logger.debug(
            "Found %d key(s) in %d file(s) under %s (%d duplicate(s))",
            len(registry),
            result.files_scanned,
            root.name or root.path,
            registry.duplicate_count,
        )
        return result

    def dump_path_for(self, root: ScanRoot) -> Path:
        return self._config.dump_path / f"{slugify(root.name)}{DUMP_SUFFIX}"

    def dump(self, result: ScanResult) -> Path:
        """Write the generated catalog for a scan result.

        Raises:
            WriteError: If the dump file cannot be written.
        """
        registry = result.registry
        locations: Optional[dict[str, SourceLocation]] = (
            registry.locations() if self._include_locations else None
        )
        text = dump_catalog(registry.entries(), locations=locations, banner=GENERATED_BANNER)

        dump_file = self.dump_path_for(result.root)
        logger.info("Dumping into file %s", dump_file)
        try:
            write_text_atomic(dump_file, text)
        except OSError as e:
            raise WriteError(
                f"Cannot write dump file {dump_file}: {e}",
                user_message=f"Failed to write {dump_file}",
                context={"path": str(dump_file)},
            ) from e
        return dump_file

    def merge(self, registry: KeyRegistry) -> MergeReport:
        """Append newly discovered keys to every existing catalog.

        Raises:
            WriteError: If a merged catalog cannot be written.
        """
        catalogs = find_catalogs(self._config.lang_path, self._config.catalog_pattern)
        logger.info(
            "New translations will be added to %d %s catalog(s)",
            len(catalogs),
            self._config.catalog_pattern,
        )
        return merge_into_catalogs(catalogs, registry.keys_in_order())

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def collect(self, root: ScanRoot, append: bool = False) -> tuple[ScanResult, Optional[MergeReport]]:
        """Scan one root, dump its catalog and optionally merge.

        Raises:
            ScanError: If the root cannot be scanned.
            WriteError: If an output file cannot be written.
        """
        result = self.scan(root)
        self.dump(result)
        report = None
        if append:
            report = self.merge(result.registry)
        logger.info("Directory scanned.")
        return result, report

    def run(self, test: bool = False, append: bool = False) -> int:
        """Collect every configured root.

        A failing root is reported and the remaining roots still run.

        Returns:
            0 on success (even with zero keys), 1 if any root, catalog load
            or write failed.
        """
        exit_code = 0
        for root in self.scan_roots(test):
            try:
                _result, report = self.collect(root, append=append)
            except ScanError as e:
                logger.error("Cannot scan %s: %s", root.name or root.path, e)
                exit_code = 1
                continue
            except WriteError as e:
                logger.error("%s", e)
                exit_code = 1
                continue
            if report is not None and report.has_errors:
                exit_code = 1
        return exit_code
