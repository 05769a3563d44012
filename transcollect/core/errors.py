"""
transcollect exception hierarchy.

Provides a base exception class with user-facing messages and debug context,
plus specialized subclasses for the scan, catalog and write stages.
"""

from typing import Any, Dict, Optional


class CollectorError(Exception):
    """Root of every error the collector raises on purpose.

    ``user_message`` is what the CLI may print as-is; ``context`` carries
    the paths and values that help when debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.user_message = message if user_message is None else user_message
        self.context = dict(context) if context else {}


class ScanError(CollectorError):
    """Scan root is missing, not a directory, or not readable."""


class ConfigError(CollectorError):
    """Configuration file could not be loaded."""


class WriteError(CollectorError):
    """Dump or merged catalog could not be written."""


class CatalogLoadError(CollectorError):
    """An existing catalog is not valid YAML or not a catalog mapping.

    ``line`` and ``column`` (1-indexed) come from the YAML parser and are
    None for structural problems such as a missing ``messages`` key.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.path = path
        self.line = line
        self.column = column
        super().__init__(
            message,
            context={"path": path, "line": line, "column": column},
        )

    def __str__(self) -> str:
        text = super().__str__()
        if self.path:
            text = f"{self.path}: {text}"
        if self.line is not None:
            loc = f"line {self.line}"
            if self.column is not None:
                loc += f", column {self.column}"
            return f"{text} ({loc})"
        return text
