"""Unit tests for KeyValueList and id generators."""

from __future__ import annotations

import pytest

from reqbuilder.entries import CounterIds, KeyValueList, uuid_ids
from reqbuilder.models import Entry


def _list(*pairs: tuple[str, str]) -> KeyValueList:
    return KeyValueList(list(pairs), id_factory=CounterIds())


def test_counter_ids_are_monotonic() -> None:
    gen = CounterIds()
    assert [gen() for _ in range(3)] == [1, 2, 3]
    assert CounterIds(start=10)() == 10


def test_uuid_ids_unique() -> None:
    assert len({uuid_ids() for _ in range(100)}) == 100


def test_add_appends_empty_entry_with_fresh_id() -> None:
    kv = _list(("a", "1"))
    entry = kv.add()
    assert entry.key == "" and entry.value == ""
    assert kv.entries[-1] == entry
    assert len({e.id for e in kv}) == len(kv) == 2


def test_rapid_adds_never_collide() -> None:
    kv = KeyValueList()
    for _ in range(1000):
        kv.add()
    assert len({e.id for e in kv}) == 1000


def test_update_replaces_only_named_field_in_place() -> None:
    kv = _list(("a", "1"), ("b", "2"), ("c", "3"))
    target = kv.entries[1]
    kv.update(target.id, "value", "changed")
    assert kv.entries[1] == Entry(id=target.id, key="b", value="changed")
    kv.update(target.id, "key", "bb")
    assert kv.entries[1] == Entry(id=target.id, key="bb", value="changed")
    assert [e.key for e in kv] == ["a", "bb", "c"]


def test_update_unknown_id_is_noop() -> None:
    kv = _list(("a", "1"), ("b", "2"))
    before = kv.entries
    kv.update(999, "key", "x")
    assert kv.entries == before


def test_update_rejects_unknown_field() -> None:
    kv = _list(("a", "1"))
    with pytest.raises(ValueError, match="field must be one of"):
        kv.update(kv.entries[0].id, "id", "x")


def test_remove_by_id_keeps_others_and_order() -> None:
    kv = _list(("a", "1"), ("b", "2"), ("c", "3"))
    first, second, third = kv.entries
    kv.remove(second.id)
    assert kv.entries == (first, third)


def test_remove_unknown_id_is_noop() -> None:
    kv = _list(("a", "1"))
    before = kv.entries
    kv.remove(42)
    assert kv.entries == before


def test_add_then_remove_restores_list() -> None:
    kv = _list(("a", "1"), ("b", "2"))
    before = kv.entries
    added = kv.add("x", "y")
    kv.remove(added.id)
    assert kv.entries == before


def test_edit_after_removing_earlier_row_hits_intended_row() -> None:
    kv = _list(("a", "1"), ("b", "2"), ("c", "3"))
    row2, row3 = kv.entries[1], kv.entries[2]
    kv.remove(row2.id)
    kv.update(row3.id, "value", "edited")
    assert kv.get(row3.id) == Entry(id=row3.id, key="c", value="edited")
    assert kv.entries[0].value == "1"


def test_duplicate_and_empty_keys_allowed() -> None:
    kv = _list(("a", "1"), ("a", "2"), ("", "3"))
    assert len(kv) == 3
    assert [e.key for e in kv.non_empty()] == ["a", "a"]


def test_non_empty_ignores_whitespace_keys() -> None:
    kv = _list(("  ", "x"), ("k", "v"))
    assert kv.non_empty() == [kv.entries[1]]


def test_clear_and_pairs() -> None:
    kv = _list(("a", "1"), ("b", "2"))
    assert kv.pairs() == [("a", "1"), ("b", "2")]
    kv.clear()
    assert len(kv) == 0


def test_equality_by_content() -> None:
    assert _list(("a", "1")) == _list(("a", "1"))
    assert _list(("a", "1")) != _list(("a", "2"))
