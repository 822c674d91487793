"""
JSON-backed list of blog entries.

The file holds ``{"entries": [...]}`` in creation order. Records that do not
parse as entries are kept aside in ``unreadable`` and written back unchanged
by ``save``, so a hand-edited record is never lost. The file itself must
parse: unreadable JSON raises ``StoreError`` so a broken list is never
silently replaced by an empty one.
"""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any

from .core.types import Entry


class StoreError(Exception):
    """The entry list could not be read."""


def new_entry_id() -> str:
    """Return a fresh, never-reused entry id."""
    return uuid.uuid4().hex


class EntryStore:
    """In-memory view of the entry list file.

    Attributes:
        path: Location of the JSON file
        entries: Entries in creation order
        unreadable: Raw records that could not be parsed, saved back as-is
    """

    def __init__(self, path: Path, entries: list[Entry] | None = None, unreadable: list[Any] | None = None):
        self.path = path
        self.entries: list[Entry] = list(entries or [])
        self.unreadable: list[Any] = list(unreadable or [])

    @classmethod
    def load(cls, path: Path) -> "EntryStore":
        if not path.exists():
            return cls(path)

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            raise StoreError(f"Entry list {path} is not UTF-8 text: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StoreError(f"Entry list {path} is not valid JSON: {exc}") from exc

        if isinstance(raw, dict):
            raw = raw.get("entries", [])
        if not isinstance(raw, list):
            raise StoreError(f"Entry list {path} has no entries array")

        entries: list[Entry] = []
        unreadable: list[Any] = []
        for item in raw:
            entry = _normalize_entry(item)
            if entry is None:
                unreadable.append(item)
            else:
                entries.append(entry)
        return cls(path, entries, unreadable)

    def save(self) -> Path:
        payload = {"entries": [entry.to_dict() for entry in self.entries] + self.unreadable}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f"{json.dumps(payload, ensure_ascii=False, indent=2)}\n", encoding="utf-8")
        return self.path

    def add(self, entry: Entry) -> None:
        if self.get(entry.id) is not None:
            raise ValueError(f"Duplicate entry id: {entry.id}")
        self.entries.append(entry)

    def get(self, entry_id: str) -> Entry | None:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def replace(self, entry: Entry) -> None:
        """Swap in an updated copy of an existing entry, keeping its position."""
        for idx, current in enumerate(self.entries):
            if current.id == entry.id:
                self.entries[idx] = entry
                return
        raise KeyError(entry.id)

    def remove(self, entry_id: str) -> Entry | None:
        for idx, entry in enumerate(self.entries):
            if entry.id == entry_id:
                return self.entries.pop(idx)
        return None

    def published(self) -> list[Entry]:
        return [entry for entry in self.entries if entry.published]

    def drafts(self) -> list[Entry]:
        return [entry for entry in self.entries if not entry.published]


def _normalize_entry(item: Any) -> Entry | None:
    if not isinstance(item, dict):
        return None
    if not isinstance(item.get("id"), str) or not isinstance(item.get("name"), str):
        return None
    if not item["id"]:
        return None
    return Entry.from_dict(item)
