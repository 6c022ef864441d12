"""
Transport-agnostic note store seam.

The sync engine only talks to this interface. Every method is blocking and
may raise; the engine runs calls off the event loop and logs failures.

  - list(owner_id)             -> notes for one owner
  - insert(note, owner_id)     -> add a row
  - patch(note_id, fields)     -> partial update, absent fields untouched
  - bulk_reorder(entries)      -> upsert ``order_index`` keyed by id
  - delete(note_id)            -> remove a row
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, Dict, List, Mapping, Protocol, Sequence, Tuple

from .domain import IndexPatch
from .models.dto import Note
from .ordering import sort_key

LOGGER = logging.getLogger(__name__)


class NoteStore(Protocol):
    """Remote keyed record store holding notes."""

    def list(self, owner_id: int) -> List[Note]: ...

    def insert(self, note: Note, owner_id: int) -> None: ...

    def patch(self, note_id: str, fields: Mapping[str, Any]) -> None: ...

    def bulk_reorder(self, entries: Sequence[IndexPatch]) -> None: ...

    def delete(self, note_id: str) -> None: ...


class MemoryNoteStore:
    """Dict-backed NoteStore, safe to call from executor threads."""

    def __init__(self) -> None:
        self._rows: Dict[str, Tuple[int, Note]] = {}
        self._lock = threading.Lock()

    def list(self, owner_id: int) -> List[Note]:
        with self._lock:
            notes = [n for (owner, n) in self._rows.values() if owner == owner_id]
        return sorted(notes, key=sort_key)

    def insert(self, note: Note, owner_id: int) -> None:
        with self._lock:
            if note.id in self._rows:
                raise KeyError(f"duplicate note id: {note.id}")
            self._rows[note.id] = (owner_id, note)

    def patch(self, note_id: str, fields: Mapping[str, Any]) -> None:
        with self._lock:
            row = self._rows.get(note_id)
            if row is None:
                LOGGER.debug("notes.memory.patch_missing id=%s", note_id)
                return
            owner, note = row
            self._rows[note_id] = (owner, dataclasses.replace(note, **fields))

    def bulk_reorder(self, entries: Sequence[IndexPatch]) -> None:
        with self._lock:
            for entry in entries:
                row = self._rows.get(entry.id)
                if row is None:
                    LOGGER.debug("notes.memory.reorder_missing id=%s", entry.id)
                    continue
                owner, note = row
                self._rows[entry.id] = (
                    owner,
                    dataclasses.replace(note, order_index=entry.order_index),
                )

    def delete(self, note_id: str) -> None:
        with self._lock:
            self._rows.pop(note_id, None)

    def get(self, note_id: str) -> Note:
        """Return the stored note; raises KeyError when absent."""
        with self._lock:
            return self._rows[note_id][1]
