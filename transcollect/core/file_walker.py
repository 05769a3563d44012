"""Recursive file discovery under a scan root.

Traversal follows symbolic links and is only safe on acyclic trees,
which is what source trees normally are.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from transcollect.core.errors import ScanError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalkedFile:
    """A regular file found under a scan root.

    Attributes:
        path: Absolute file path.
        extension: Suffix after the last "." of the file name ("" if none).
    """

    path: Path
    extension: str


def file_extension(name: str) -> str:
    """Return the suffix after the last "." in a file name.

    >>> file_extension("welcome.blade.php")
    'php'
    >>> file_extension("Makefile")
    ''
    """
    if "." not in name:
        return ""
    return name.rpartition(".")[2]


def check_root(root: str | os.PathLike[str]) -> Path:
    """Validate a scan root and return its absolute path.

    Raises:
        ScanError: If the root does not exist, is not a directory or is
            not readable.
    """
    root_path = Path(root).absolute()
    if not root_path.exists():
        raise ScanError(
            f"Scan root does not exist: {root_path}",
            user_message=f"Directory not found: {root_path}",
            context={"root": str(root_path)},
        )
    if not root_path.is_dir():
        raise ScanError(
            f"Scan root is not a directory: {root_path}",
            context={"root": str(root_path)},
        )
    if not os.access(root_path, os.R_OK | os.X_OK):
        raise ScanError(
            f"Scan root is not readable: {root_path}",
            user_message=f"Permission denied: {root_path}",
            context={"root": str(root_path)},
        )
    return root_path


def _log_walk_error(error: OSError) -> None:
    logger.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror)


def walk_files(root: str | os.PathLike[str]) -> Iterator[WalkedFile]:
    """Yield every regular file under root, depth-first, in traversal order.

    The root is validated eagerly, so a bad root fails at call time rather
    than on first iteration.

    Args:
        root: Directory to scan

    Returns:
        Lazy iterator of WalkedFile entries (not sorted)

    Raises:
        ScanError: If the root cannot be scanned.
    """
    root_path = check_root(root)
    return _walk(root_path)


def _walk(root_path: Path) -> Iterator[WalkedFile]:
    for dirpath, _dirs, files in os.walk(root_path, onerror=_log_walk_error, followlinks=True):
        dir_path = Path(dirpath)
        for file_name in files:
            file_path = dir_path / file_name
            # Skips broken links, sockets, FIFOs and devices
            if not file_path.is_file():
                continue
            yield WalkedFile(path=file_path, extension=file_extension(file_name))
