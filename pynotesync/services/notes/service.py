"""
High-level Notes service.

Public API:
  - NotesService.open_session() -> list[Note]     (load the owner's notes)
  - NotesService.engine -> SyncEngine            (optimistic mutations)
  - NotesService.get(note_id) -> Note
  - NotesService.edit(note_id) -> EditingSession
  - NotesService.transform(note_id, op) -> bool  (AI text transforms)
  - NotesService.close()                          (flush editor, drain writes)
  - NotesService.raw -> NoteStore                (escape hatch)
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import List, Optional

from pynotesync.exceptions import AccessDeniedError
from pynotesync.services.base import BaseService

from .client import RestNoteStore
from .editing import AUTOSAVE_DELAY, EditingSession
from .models import Note
from .store import NoteStore
from .sync import SyncEngine
from .transform import TextTransformer, TransformOp

LOGGER = logging.getLogger(__name__)


# ----------------------------- Service Errors --------------------------------


class NotesError(Exception):
    """Base Notes service error."""


class NoteNotFound(NotesError):
    pass


class TransformUnavailable(NotesError):
    pass


# ----------------------------- NotesService ----------------------------------


class NotesService(BaseService):
    """
    Notes API for one owner. Uses a RestNoteStore under the hood unless a
    store is injected.
    """

    def __init__(
        self,
        service_root: str,
        session,
        *,
        api_key: str = "",
        owner_id: Optional[int] = None,
        store: Optional[NoteStore] = None,
        transformer: Optional[TextTransformer] = None,
        executor: Optional[Executor] = None,
        autosave_delay: float = AUTOSAVE_DELAY,
    ):
        super().__init__(service_root=service_root, session=session)
        self._raw: NoteStore = store or RestNoteStore(
            self.service_root, session, api_key
        )
        self._engine = SyncEngine(self._raw, executor=executor)
        self._owner_id = owner_id
        self._transformer = transformer
        self._autosave_delay = autosave_delay

    async def __aenter__(self) -> "NotesService":
        await self.open_session()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # -------------------------- Public API methods ---------------------------

    @property
    def engine(self) -> SyncEngine:
        return self._engine

    @property
    def raw(self) -> NoteStore:
        """
        Escape hatch: the NoteStore the engine persists through.
        """
        return self._raw

    async def open_session(self) -> List[Note]:
        """
        Load the owner's notes. Raises AccessDeniedError without an owner id.
        """
        if self._owner_id is None:
            LOGGER.warning("No owner identity; access denied")
            raise AccessDeniedError("An owner id is required to access notes")
        return await self._engine.load(self._owner_id)

    def get(self, note_id: str) -> Note:
        """
        Return a note from the loaded collection. Accepts a unique id prefix.
        Raises NoteNotFound if nothing (or more than one note) matches.
        """
        note = self._engine.get(note_id)
        if note is not None:
            return note
        candidates = [n for n in self._engine.notes if n.id.startswith(note_id)]
        if len(candidates) == 1:
            return candidates[0]
        LOGGER.warning(
            "Note not found: %s (%d prefix matches)", note_id, len(candidates)
        )
        raise NoteNotFound(f"Note not found: {note_id}")

    def edit(self, note_id: str) -> EditingSession:
        """Open a note for editing with the configured autosave delay."""
        note = self.get(note_id)
        return self._engine.open(note.id, delay=self._autosave_delay)

    async def transform(self, note_id: str, op: TransformOp) -> bool:
        """
        Apply an AI text transform to a note and save the result.
        Returns False when the transformer produced nothing.
        """
        if self._transformer is None:
            raise TransformUnavailable("No text transformer configured")
        session = self.edit(note_id)
        try:
            return await session.apply_transform(op, self._transformer)
        finally:
            session.close()

    async def close(self) -> None:
        """Flush the open editor and wait for in-flight writes."""
        self._engine.close_editor()
        await self._engine.drain()
