"""
Catalog file format (version 1).

A catalog is a YAML document with a comment banner, a format marker and an
ordered ``messages`` mapping of key -> value::

    # ------------------------------------------------------------
    # THIS FILE IS GENERATED. DO NOT CHANGE IT.
    # ------------------------------------------------------------
    format: transcollect-catalog
    version: 1
    messages:
      'hello.world': 'hello.world'
      'say ''hi''': 'say ''hi'''  # app/views/a.php:17

Every key and value is written as a quoted scalar, so YAML never applies
implicit typing and parsing reproduces the exact original strings.
Rendering is hand-written (not yaml.dump) to keep one entry per line and
allow per-entry location comments.
"""

from __future__ import annotations

import os
from typing import Iterable, Mapping, Optional, Union, cast

import yaml

from transcollect.core.errors import CatalogLoadError
from transcollect.core.key_registry import SourceLocation

CATALOG_FORMAT = "transcollect-catalog"
CATALOG_VERSION = 1

_RULE = "# " + "-" * 60
GENERATED_BANNER = (_RULE, "# THIS FILE IS GENERATED. DO NOT CHANGE IT.", _RULE)
UPDATED_BANNER = ("# THIS FILE WAS UPDATED BY TRANSLATION COLLECTOR",)

# PyYAML only accepts simple (implicit) keys up to this many characters.
_MAX_SIMPLE_KEY = 1000

_SHORT_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\v": "\\v",
    "\f": "\\f",
    "\r": "\\r",
    "\x1b": "\\e",
}


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _is_plain_char(ch: str) -> bool:
    # Excludes tabs, YAML line breaks (\x85, \u2028, \u2029), the BOM and every
    # other character PyYAML's reader refuses in a stream.
    return ch == " " or ch.isprintable()


def _escape_char(ch: str) -> str:
    if ch in _SHORT_ESCAPES:
        return _SHORT_ESCAPES[ch]
    if _is_plain_char(ch):
        return ch
    code = ord(ch)
    if code <= 0xFF:
        return f"\\x{code:02X}"
    if code <= 0xFFFF:
        return f"\\u{code:04X}"
    return f"\\U{code:08X}"


def quote_scalar(value: str) -> str:
    """Render a string as a YAML quoted scalar that parses back unchanged.

    Single quotes are used when every character is printable; anything else
    (tabs, line breaks, control characters) uses double quotes with escapes.

    >>> quote_scalar("say 'hi'")
    "'say ''hi'''"
    >>> quote_scalar("a\\tb")
    '"a\\\\tb"'
    """
    if all(_is_plain_char(ch) for ch in value):
        return "'" + value.replace("'", "''") + "'"
    return '"' + "".join(_escape_char(ch) for ch in value) + '"'


def _comment_text(text: str) -> str:
    return "".join(ch if _is_plain_char(ch) else "?" for ch in text)


def _render_entry(key: str, value: str, comment: Optional[str]) -> str:
    quoted_key = quote_scalar(key)
    quoted_value = quote_scalar(value)
    suffix = f"  # {_comment_text(comment)}" if comment is not None else ""
    if len(quoted_key) > _MAX_SIMPLE_KEY:
        return f"  ? {quoted_key}\n  : {quoted_value}{suffix}\n"
    return f"  {quoted_key}: {quoted_value}{suffix}\n"


def dump_catalog(
    entries: Iterable[tuple[str, str]],
    locations: Optional[Mapping[str, Union[SourceLocation, str]]] = None,
    banner: Iterable[str] = GENERATED_BANNER,
) -> str:
    """Render (key, value) pairs as catalog text, in the given order.

    Args:
        entries: Ordered (key, value) pairs
        locations: When given, each entry whose key has a location gets a
            trailing ``# path:offset`` comment
        banner: Comment lines written before the document body

    Returns:
        Complete catalog file content
    """
    lines = [f"{line}\n" for line in banner]
    lines.append(f"format: {CATALOG_FORMAT}\n")
    lines.append(f"version: {CATALOG_VERSION}\n")

    body = []
    for key, value in entries:
        comment = None
        if locations is not None and key in locations:
            comment = str(locations[key])
        body.append(_render_entry(key, value, comment))

    if body:
        lines.append("messages:\n")
        lines.extend(body)
    else:
        lines.append("messages: {}\n")
    return "".join(lines)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_catalog_text(text: str, source: Optional[str] = None) -> dict[str, str]:
    """Parse catalog text into an ordered key -> value dict.

    Args:
        text: Catalog file content
        source: File name used in error messages

    Raises:
        CatalogLoadError: If the text is not valid YAML or not a version 1
            catalog mapping strings to strings.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        line = None
        column = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1  # 0-indexed -> 1-indexed
            column = mark.column + 1
        raise CatalogLoadError(f"YAML syntax error: {e}", path=source, line=line, column=column) from e

    if data is None:
        raise CatalogLoadError("Catalog file is empty", path=source)
    if not isinstance(data, dict):
        raise CatalogLoadError(
            f"Catalog must be a mapping (got {type(data).__name__})", path=source
        )

    fmt = data.get("format")
    if fmt != CATALOG_FORMAT:
        raise CatalogLoadError(f"Unknown catalog format: {fmt!r}", path=source)
    version = data.get("version")
    if isinstance(version, bool) or version != CATALOG_VERSION:
        raise CatalogLoadError(f"Unsupported catalog version: {version!r}", path=source)

    if "messages" not in data:
        raise CatalogLoadError("Missing 'messages' key", path=source)
    messages = data["messages"]
    if messages is None:
        return {}
    if not isinstance(messages, dict):
        raise CatalogLoadError(
            f"'messages' must be a mapping (got {type(messages).__name__})", path=source
        )

    for key, value in messages.items():
        if not isinstance(key, str):
            raise CatalogLoadError(f"Catalog key {key!r} is not a string", path=source)
        if not isinstance(value, str):
            raise CatalogLoadError(
                f"Value of catalog key {key!r} is not a string (got {type(value).__name__})",
                path=source,
            )
    return cast(dict[str, str], messages)


def load_catalog(path: Union[str, os.PathLike[str]]) -> dict[str, str]:
    """Load a catalog file.

    Raises:
        CatalogLoadError: If the file cannot be read or parsed.
    """
    source = os.fspath(path)
    try:
        with open(path, encoding="utf-8", errors="surrogateescape") as f:
            text = f.read()
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalog: {e}", path=source) from e
    return load_catalog_text(text, source=source)
