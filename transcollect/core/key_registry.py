"""
KeyRegistry for accumulating discovered translation keys.

This module provides:
- SourceLocation value type (relative path + byte offset)
- KeyRegistry: deduplicated, first-discovery-ordered key collection with
  last-seen locations and duplicate tracking
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class SourceLocation:
    """Where a key was found.

    Attributes:
        path: File path relative to the project root (POSIX separators).
        offset: Byte offset of the captured key in the raw file content.
    """

    path: str
    offset: int

    def __str__(self) -> str:
        return f"{self.path}:{self.offset}"


class KeyRegistry:
    """Deduplicated collection of translation keys for one scan root.

    Iteration order is the order keys were first discovered across the
    whole scan. A key counts as a duplicate from its second sighting on,
    whether the repeat is in the same file or another one.

    Usage:
        registry = KeyRegistry()
        registry.record("hello.world", SourceLocation("app/a.php", 6))
        for key, value in registry.entries():
            ...
    """

    def __init__(self) -> None:
        # dict preserves insertion order: first sighting fixes the position
        self._values: dict[str, str] = {}
        self._locations: dict[str, SourceLocation] = {}
        self._duplicates: list[str] = []

    def record(self, key: str, location: SourceLocation) -> bool:
        """Record one sighting of a key.

        Args:
            key: Translation key (empty string is legal)
            location: Where this sighting happened

        Returns:
            True if the key was new, False if it was a duplicate.
        """
        is_new = key not in self._values
        if is_new:
            self._values[key] = key
        else:
            self._duplicates.append(key)
        self._locations[key] = location
        return is_new

    def keys_in_order(self) -> list[str]:
        """Unique keys in first-discovery order (a fresh list each call)."""
        return list(self._values)

    def location_of(self, key: str) -> SourceLocation:
        """Most recently recorded location of a key.

        Raises:
            KeyError: If the key was never recorded.
        """
        return self._locations[key]

    def value_of(self, key: str) -> str:
        """Catalog value of a key (the key itself)."""
        return self._values[key]

    def entries(self) -> Iterator[tuple[str, str]]:
        """Yield (key, value) pairs in discovery order."""
        return iter(list(self._values.items()))

    def locations(self) -> dict[str, SourceLocation]:
        """Copy of the key -> last location mapping."""
        return dict(self._locations)

    @property
    def duplicates(self) -> tuple[str, ...]:
        """Keys in the order their repeat sightings occurred."""
        return tuple(self._duplicates)

    @property
    def duplicate_count(self) -> int:
        return len(self._duplicates)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys_in_order())

    def __repr__(self) -> str:
        return f"KeyRegistry(keys={len(self._values)}, duplicates={len(self._duplicates)})"
