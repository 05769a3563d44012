"""
Translation key extraction.

Finds single-argument ``trans('...')`` / ``trans("...")`` calls with a literal
string argument. Dynamic arguments (variables, concatenation, interpolation)
cannot be resolved statically and are not matched.
"""

from __future__ import annotations

import os
import re
from typing import Iterator, NamedTuple

SOURCE_ENCODING = "utf-8"

# Only the call name is case-insensitive; \w and \s are ASCII-only.
TRANS_PATTERN = re.compile(r"""(?i:trans)\(['"]([\w\s_\-.!?:,\\'"]+)['"]\)""", re.ASCII)

_ESCAPED_QUOTE_RE = re.compile(r"""\\(['"])""")


class ExtractedKey(NamedTuple):
    """A key literal and the byte offset where its captured text starts."""

    key: str
    offset: int


def unescape_key(raw: str) -> str:
    """Collapse escaped quotes (\\' and \\") to the plain quote character.

    >>> unescape_key("say \\\\'hi\\\\'")
    "say 'hi'"
    """
    return _ESCAPED_QUOTE_RE.sub(r"\1", raw)


def read_source(path: str | os.PathLike[str]) -> str:
    """Read a whole file for extraction.

    Undecodable bytes are kept as surrogate escapes, so any content is
    accepted and offsets can be mapped back to exact byte positions.

    Raises:
        OSError: If the file cannot be read.
    """
    with open(path, "rb") as f:
        data = f.read()
    return data.decode(SOURCE_ENCODING, errors="surrogateescape")


def extract_keys(content: str) -> Iterator[ExtractedKey]:
    """Yield every translation key in content, left to right.

    Args:
        content: Full text of one file (as returned by read_source)

    Returns:
        Iterator of ExtractedKey; empty when nothing matches
    """
    char_pos = 0
    byte_pos = 0
    for match in TRANS_PATTERN.finditer(content):
        start = match.start(1)
        byte_pos += len(content[char_pos:start].encode(SOURCE_ENCODING, errors="surrogateescape"))
        char_pos = start
        yield ExtractedKey(unescape_key(match.group(1)), byte_pos)
