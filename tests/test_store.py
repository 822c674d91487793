"""Tests for the JSON entry list."""

import json
from pathlib import Path

import pytest

from ob_blog.core.types import Entry
from ob_blog.store import EntryStore, StoreError, new_entry_id


def test_load_missing_file_gives_empty_store(tmp_path: Path):
    store = EntryStore.load(tmp_path / "entries.json")

    assert store.entries == []


def test_save_and_load_round_trip(tmp_path: Path):
    path = tmp_path / "entries.json"
    store = EntryStore(path)
    store.add(Entry(id="a", name="Café", author="Zoë"))
    store.add(Entry(id="b", name="Two", published=True, date="2026-01-01", image="https://i/x.png"))
    store.save()

    text = path.read_text(encoding="utf-8")
    assert "Café" in text
    assert text.endswith("\n")

    loaded = EntryStore.load(path)
    assert [e.id for e in loaded.entries] == ["a", "b"]
    assert loaded.get("b").image == "https://i/x.png"
    assert [e.id for e in loaded.published()] == ["b"]
    assert [e.id for e in loaded.drafts()] == ["a"]


def test_load_sets_aside_malformed_records(tmp_path: Path):
    path = tmp_path / "entries.json"
    path.write_text(
        json.dumps({"entries": [{"id": "ok", "name": "Fine"}, {"name": "no id"}, "junk", {"id": "", "name": "x"}]}),
        encoding="utf-8",
    )

    store = EntryStore.load(path)

    assert [e.id for e in store.entries] == ["ok"]
    assert store.entries[0].published is False
    assert store.unreadable == [{"name": "no id"}, "junk", {"id": "", "name": "x"}]


def test_load_rejects_invalid_json(tmp_path: Path):
    path = tmp_path / "entries.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreError):
        EntryStore.load(path)


def test_save_keeps_unreadable_records(tmp_path: Path):
    path = tmp_path / "entries.json"
    path.write_text(
        json.dumps({"entries": [{"id": "a", "name": "Good"}, {"id": "b", "title": "Hand edited"}]}),
        encoding="utf-8",
    )

    store = EntryStore.load(path)
    assert [e.id for e in store.entries] == ["a"]
    store.add(Entry(id="c", name="New"))
    store.save()

    saved = json.loads(path.read_text(encoding="utf-8"))["entries"]
    assert [record["id"] for record in saved] == ["a", "c", "b"]
    assert saved[2] == {"id": "b", "title": "Hand edited"}


def test_load_rejects_non_utf8_file(tmp_path: Path):
    path = tmp_path / "entries.json"
    path.write_bytes(b'{"entries": [{"id": "a", "name": "\xff\xfe"}]}')

    with pytest.raises(StoreError):
        EntryStore.load(path)


def test_add_rejects_duplicate_ids(tmp_path: Path):
    store = EntryStore(tmp_path / "entries.json", [Entry(id="a", name="A")])

    with pytest.raises(ValueError):
        store.add(Entry(id="a", name="Again"))


def test_replace_and_remove(tmp_path: Path):
    store = EntryStore(tmp_path / "entries.json", [Entry(id="a", name="A"), Entry(id="b", name="B")])

    store.replace(Entry(id="a", name="A2", published=True))
    assert store.entries[0].name == "A2"

    assert store.remove("a").name == "A2"
    assert store.remove("a") is None
    with pytest.raises(KeyError):
        store.replace(Entry(id="zzz", name="missing"))


def test_new_entry_ids_are_unique():
    ids = {new_entry_id() for _ in range(100)}

    assert len(ids) == 100
