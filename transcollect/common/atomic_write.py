# transcollect/common/atomic_write.py
"""Atomic whole-file text writes.

Usage:
    from transcollect.common.atomic_write import write_text_atomic

    write_text_atomic("resources/lang/dump/app.yaml", text)
"""

from __future__ import annotations

import contextlib
import os
import tempfile


def write_text_atomic(filename: str | os.PathLike[str], text: str) -> None:
    """Replace a file's content in one step.

    The text goes to a sibling temp file which is fsynced and then moved
    over the destination, so a reader sees either the old file or the new
    one. Missing parent directories are created.

    Args:
        filename: Destination path
        text: Full file content (written as UTF-8, newlines untranslated)

    Raises:
        OSError: If the directory, temp file or rename fails.
    """
    target = os.fspath(filename)
    parent = os.path.dirname(target) or os.curdir
    os.makedirs(parent, exist_ok=True)

    fd, temp_path = tempfile.mkstemp(suffix=".tmp", dir=parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, target)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(temp_path)
        raise
