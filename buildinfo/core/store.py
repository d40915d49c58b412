"""In-memory property store accumulating build information entries."""

from collections.abc import Iterator
from typing import Optional


class PropertyStore:
    """
    Deduplicated string-to-string mapping with sorted iteration.

    Keys are unique: putting an existing key overwrites its value. Iteration
    order is ascending lexicographic order of key, independent of insertion
    order, so that the rendered file is stable across builds.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def put(self, key: str, value: Optional[str]) -> None:
        """
        Insert or overwrite an entry.

        Args:
            key: Property name
            value: Property value (None is stored as an empty string)
        """
        self._entries[key] = "" if value is None else value

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._entries.get(key, default)

    def entries_sorted_by_key(self) -> Iterator[tuple[str, str]]:
        """
        Iterate over (key, value) pairs in ascending key order.

        Each call returns a fresh iterator, so the sequence can be restarted.
        """
        for key in sorted(self._entries):
            yield key, self._entries[key]

    def as_dict(self) -> dict[str, str]:
        """Return a sorted plain dict copy of the store."""
        return dict(self.entries_sorted_by_key())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return self.entries_sorted_by_key()

    def __repr__(self) -> str:
        return f"PropertyStore({self.as_dict()!r})"
