"""Ordered key/value collections with stable, id-based addressing.

Rows are addressed by id, never by index: removing row 2 must not redirect an
edit meant for row 3. Unknown ids are ignored so late callbacks for rows that
were already removed are harmless.
"""

from __future__ import annotations

import itertools
import uuid
from dataclasses import replace
from typing import Any, Callable, Iterator

from .models import ENTRY_FIELDS, Entry

IdFactory = Callable[[], Any]


class CounterIds:
    """Monotonic integer ids. Never repeats within one instance."""

    __slots__ = ("_counter",)

    def __init__(self, start: int = 1) -> None:
        self._counter = itertools.count(start)

    def __call__(self) -> int:
        return next(self._counter)


def uuid_ids() -> str:
    """Random UUID4 ids, for lists that are merged across sessions."""
    return uuid.uuid4().hex


class KeyValueList:
    """Ordered sequence of Entry with add/update/remove by id."""

    __slots__ = ("_entries", "_id_factory")

    def __init__(
        self,
        pairs: list[tuple[str, str]] | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self._entries: list[Entry] = []
        self._id_factory = id_factory or CounterIds()
        for key, value in pairs or ():
            self.add(key, value)

    def add(self, key: str = "", value: str = "") -> Entry:
        """Append a new entry with a fresh id and return it."""
        entry = Entry(id=self._id_factory(), key=key, value=value)
        self._entries.append(entry)
        return entry

    def update(self, entry_id: Any, field: str, new_value: str) -> None:
        """Replace one field ("key" or "value") of the entry with entry_id, in place.

        No-op when no entry has that id.
        """
        if field not in ENTRY_FIELDS:
            raise ValueError(f"field must be one of {ENTRY_FIELDS}, got {field!r}")
        for idx, entry in enumerate(self._entries):
            if entry.id == entry_id:
                self._entries[idx] = replace(entry, **{field: new_value})
                return

    def remove(self, entry_id: Any) -> None:
        """Remove the entry with entry_id. No-op when absent."""
        self._entries = [e for e in self._entries if e.id != entry_id]

    def get(self, entry_id: Any) -> Entry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def clear(self) -> None:
        self._entries = []

    def non_empty(self) -> list[Entry]:
        """Entries whose key is not blank, in order."""
        return [e for e in self._entries if e.key.strip()]

    def pairs(self) -> list[tuple[str, str]]:
        return [(e.key, e.value) for e in self._entries]

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyValueList):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"KeyValueList({self._entries!r})"
