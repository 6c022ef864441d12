"""
Optimistic synchronization of the in-memory note collection.

Every mutation is applied to memory synchronously and then forwarded to the
NoteStore on an executor. Store calls are fire-and-forget: they are not
ordered relative to each other, never retried, and a failure only logs and
flips ``status`` to ``SaveStatus.ERROR``. Memory stays the source of truth
for the rest of the session (last writer wins).

All methods must be called from the thread running the asyncio loop.
"""

from __future__ import annotations

import asyncio
import dataclasses
import functools
import logging
import uuid
from concurrent.futures import Executor
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from pynotesync.utils import now_ms

from . import ordering
from .editing import AUTOSAVE_DELAY, EditingSession
from .filtering import NoteFilter, discover_labels, sections, visible
from .models.dto import PATCHABLE_FIELDS, Note, NoteColor, SaveStatus
from .store import NoteStore

LOGGER = logging.getLogger(__name__)


class SyncEngine:
    """Owns the note collection for one owner and the open editing session."""

    def __init__(
        self,
        store: NoteStore,
        *,
        executor: Optional[Executor] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self._store = store
        self._executor = executor
        self._clock = clock
        self._notes: Dict[str, Note] = {}
        self._owner_id: Optional[int] = None
        self._editing: Optional[EditingSession] = None
        self._pending: Set[asyncio.Future] = set()
        self.status: SaveStatus = SaveStatus.SAVED

    # -------------------------- Read side ------------------------------------

    @property
    def owner_id(self) -> Optional[int]:
        return self._owner_id

    @property
    def local_only(self) -> bool:
        """True when no owner is set; nothing is persisted."""
        return self._owner_id is None

    @property
    def notes(self) -> List[Note]:
        """Snapshot of the collection in display order."""
        return sorted(self._notes.values(), key=ordering.sort_key)

    @property
    def executor(self) -> Optional[Executor]:
        """Executor store calls run on; ``None`` is the loop default."""
        return self._executor

    @property
    def editing(self) -> Optional[EditingSession]:
        return self._editing

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    def get(self, note_id: str) -> Optional[Note]:
        return self._notes.get(note_id)

    def visible(self, note_filter: NoteFilter = NoteFilter()) -> List[Note]:
        return visible(self._notes.values(), note_filter)

    def sections(
        self, note_filter: NoteFilter = NoteFilter()
    ) -> Tuple[List[Note], List[Note]]:
        return sections(self._notes.values(), note_filter)

    def labels(self) -> List[str]:
        return discover_labels(self._notes.values())

    # -------------------------- Loading --------------------------------------

    async def load(self, owner_id: Optional[int]) -> List[Note]:
        """Replace the collection with the owner's notes from the store.

        Without an owner the session is local-only. A failing store leaves
        the collection empty; there is no automatic retry.
        """
        if self._editing is not None:
            self._editing.discard()
        self._owner_id = owner_id
        self._notes = {}
        if owner_id is None:
            LOGGER.warning("No owner id supplied; notes will not be persisted")
            return []

        loop = asyncio.get_running_loop()
        try:
            fetched = await loop.run_in_executor(
                self._executor, self._store.list, owner_id
            )
        except Exception as exc:
            LOGGER.error("Failed to load notes for owner %s: %s", owner_id, exc)
            return []

        for note in fetched:
            if note.id in self._notes:
                LOGGER.warning("Duplicate note id %s in store listing", note.id)
            self._notes[note.id] = note
        LOGGER.info("Loaded %d notes for owner %s", len(self._notes), owner_id)
        return self.notes

    # -------------------------- Mutations ------------------------------------

    def create(
        self,
        title: str = "",
        content: str = "",
        color: NoteColor = NoteColor.DEFAULT,
        labels: Iterable[str] = (),
    ) -> Note:
        """Add a note in front of every indexed note and insert it remotely.

        The note stays in memory even if the insert fails.
        """
        note_id = str(uuid.uuid4())
        while note_id in self._notes:
            note_id = str(uuid.uuid4())
        now = self._clock()
        note = Note(
            id=note_id,
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
            color=NoteColor(color),
            labels=tuple(dict.fromkeys(labels)),
            order_index=ordering.assign_on_create(
                n.order_index for n in self._notes.values()
            ),
        )
        self._notes[note.id] = note
        LOGGER.debug("notes.sync.create id=%s order=%s", note.id, note.order_index)
        self._persist("insert", self._store.insert, note, self._owner_id)
        return note

    def update(self, note_id: str, **changes) -> Optional[Note]:
        """Merge ``changes`` into the note, refresh ``updated_at``, persist.

        Raises ValueError for field names that cannot be patched. Unknown ids
        are logged and ignored.
        """
        invalid = set(changes) - PATCHABLE_FIELDS
        if invalid:
            raise ValueError(f"Cannot patch note fields: {', '.join(sorted(invalid))}")
        current = self._notes.get(note_id)
        if current is None:
            LOGGER.warning("Update for unknown note %s ignored", note_id)
            return None

        if "labels" in changes:
            changes["labels"] = tuple(dict.fromkeys(changes["labels"]))
        if "color" in changes:
            changes["color"] = NoteColor(changes["color"])
        updated_at = max(self._clock(), current.created_at)
        merged = dataclasses.replace(current, updated_at=updated_at, **changes)
        self._notes[note_id] = merged
        if self._editing is not None and self._editing.note_id == note_id:
            self._editing.refresh(merged)

        LOGGER.debug("notes.sync.update id=%s fields=%s", note_id, sorted(changes))
        self._persist(
            "patch",
            self._store.patch,
            note_id,
            {**changes, "updated_at": updated_at},
        )
        return merged

    def soft_delete(self, note_id: str) -> Optional[Note]:
        if self._editing is not None and self._editing.note_id == note_id:
            self._editing.close()
        return self.update(note_id, is_trashed=True)

    def restore(self, note_id: str) -> Optional[Note]:
        return self.update(note_id, is_trashed=False)

    def purge(self, note_id: str) -> bool:
        """Remove a note for good, locally now and remotely in the background."""
        if self._notes.pop(note_id, None) is None:
            LOGGER.warning("Purge for unknown note %s ignored", note_id)
            return False
        if self._editing is not None and self._editing.note_id == note_id:
            self._editing.discard()
        self._persist("delete", self._store.delete, note_id)
        return True

    def reorder(
        self, from_pos: int, to_pos: int, note_filter: NoteFilter = NoteFilter()
    ) -> List[Note]:
        """Move a note within the displayed sequence and renumber it.

        Positions index ``visible(note_filter)``. Out-of-range positions are
        logged and ignored. A note stays in its pinned or unpinned section;
        a target across the boundary is clamped to the section edge. The bulk
        upsert is best effort.
        """
        shown = self.visible(note_filter)
        size = len(shown)
        if 0 <= from_pos < size and 0 <= to_pos < size:
            pinned = sum(1 for n in shown if n.is_pinned)
            lo, hi = (0, pinned - 1) if from_pos < pinned else (pinned, size - 1)
            clamped = min(max(to_pos, lo), hi)
            if clamped != to_pos:
                LOGGER.warning(
                    "Reorder target %d crosses the pinned section; using %d",
                    to_pos,
                    clamped,
                )
                to_pos = clamped
        try:
            sequence, patches = ordering.reorder(shown, from_pos, to_pos)
        except IndexError as exc:
            LOGGER.warning("Reorder ignored: %s", exc)
            return []

        for note in sequence:
            self._notes[note.id] = note
            if self._editing is not None and self._editing.note_id == note.id:
                self._editing.refresh(note)
        LOGGER.debug(
            "notes.sync.reorder %d -> %d (%d notes)", from_pos, to_pos, len(patches)
        )
        self._persist("bulk_reorder", self._store.bulk_reorder, patches)
        return sequence

    def toggle_pin(self, note_id: str) -> Optional[Note]:
        note = self._notes.get(note_id)
        if note is None:
            LOGGER.warning("Pin toggle for unknown note %s ignored", note_id)
            return None
        return self.update(note_id, is_pinned=not note.is_pinned)

    def toggle_archive(self, note_id: str) -> Optional[Note]:
        note = self._notes.get(note_id)
        if note is None:
            LOGGER.warning("Archive toggle for unknown note %s ignored", note_id)
            return None
        return self.update(note_id, is_archived=not note.is_archived)

    def set_color(self, note_id: str, color: NoteColor) -> Optional[Note]:
        return self.update(note_id, color=color)

    def add_label(self, note_id: str, label: str) -> Optional[Note]:
        note = self._notes.get(note_id)
        if note is None or label in note.labels:
            return note
        return self.update(note_id, labels=note.labels + (label,))

    def remove_label(self, note_id: str, label: str) -> Optional[Note]:
        note = self._notes.get(note_id)
        if note is None or label not in note.labels:
            return note
        return self.update(
            note_id, labels=tuple(lb for lb in note.labels if lb != label)
        )

    def duplicate(self, note_id: str) -> Optional[Note]:
        """Create a copy of a note as a new note at the front."""
        note = self._notes.get(note_id)
        if note is None:
            LOGGER.warning("Duplicate of unknown note %s ignored", note_id)
            return None
        return self.create(note.title, note.content, note.color, note.labels)

    # -------------------------- Editing --------------------------------------

    def open(self, note_id: str, *, delay: float = AUTOSAVE_DELAY) -> EditingSession:
        """Open a note for editing, closing (and saving) any other session.

        Raises KeyError for unknown ids.
        """
        note = self._notes[note_id]
        if self._editing is not None:
            if self._editing.note_id == note_id:
                return self._editing
            self._editing.close()
        self._editing = EditingSession(self, note, delay=delay)
        LOGGER.debug("notes.sync.open id=%s", note_id)
        return self._editing

    def close_editor(self) -> None:
        if self._editing is not None:
            self._editing.close()

    def _release(self, session: EditingSession) -> None:
        if self._editing is session:
            self._editing = None

    # -------------------------- Persistence ----------------------------------

    async def drain(self) -> None:
        """Wait for every in-flight store call. Never raises."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _persist(self, op: str, func, *args) -> None:
        if self._owner_id is None:
            LOGGER.debug("notes.sync.%s skipped (local-only session)", op)
            return
        loop = asyncio.get_running_loop()
        fut = loop.run_in_executor(self._executor, functools.partial(func, *args))
        self._pending.add(fut)
        self.status = SaveStatus.SAVING
        fut.add_done_callback(functools.partial(self._on_persisted, op))

    def _on_persisted(self, op: str, fut: asyncio.Future) -> None:
        self._pending.discard(fut)
        exc = None if fut.cancelled() else fut.exception()
        if fut.cancelled() or exc is not None:
            LOGGER.error("Store %s failed: %s", op, exc or "cancelled")
            self.status = SaveStatus.ERROR
            return
        LOGGER.debug("notes.sync.%s ok", op)
        if not self._pending:
            self.status = SaveStatus.SAVED
