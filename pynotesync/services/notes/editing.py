"""
Editing session for a single open note.

Every edit updates the local draft immediately and restarts a quiet-period
timer; when the timer expires, or the session is closed, the draft is encoded
and handed to ``SyncEngine.update`` once. Both paths go through ``flush``.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from . import codec
from .domain import ChecklistItem, StructuredView
from .models.dto import Note
from .transform import TextTransformer, TransformOp

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from .sync import SyncEngine

LOGGER = logging.getLogger(__name__)

AUTOSAVE_DELAY = 1.0  # seconds of inactivity before a draft is saved


class Debouncer:
    """Debounced call using ``loop.call_later``. One pending call at most."""

    def __init__(self, callback: Callable[[], object], delay: float = AUTOSAVE_DELAY):
        self._callback = callback
        self._delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        """Schedule the callback after the delay. Resets if called again."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._delay, self._fire)

    def cancel(self) -> None:
        """Cancel any pending call."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def fire_now(self) -> None:
        """Run the callback immediately, cancelling any pending call."""
        self.cancel()
        self._callback()

    def _fire(self) -> None:
        self._handle = None
        self._callback()


class EditingSession:
    """Draft state for the note currently open for editing.

    ``note`` is the last known persisted-side snapshot (kept fresh by the
    engine); ``title`` and ``view`` are the draft.
    """

    def __init__(
        self, engine: "SyncEngine", note: Note, *, delay: float = AUTOSAVE_DELAY
    ):
        self._engine = engine
        self._note = note
        self.title: str = note.title
        self.view: StructuredView = codec.decode(note.content)
        self._debouncer = Debouncer(self.flush, delay)
        self._closed = False

    @property
    def note(self) -> Note:
        return self._note

    @property
    def note_id(self) -> str:
        return self._note.id

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def content(self) -> str:
        """The draft encoded as it would be stored."""
        return codec.encode(self.view)

    @property
    def dirty(self) -> bool:
        return self.title != self._note.title or self.content != self._note.content

    def refresh(self, note: Note) -> None:
        self._note = note

    # ----- edits -----

    def set_title(self, title: str) -> None:
        self.title = title
        self._changed()

    def set_body(self, text: str) -> None:
        self.view = dataclasses.replace(self.view, body_text=text, checklist_items=())
        self._changed()

    def set_checklist(self, items: Iterable[ChecklistItem]) -> None:
        self.view = dataclasses.replace(
            self.view, body_text="", checklist_items=tuple(items)
        )
        self._changed()

    def add_item(self, text: str, checked: bool = False) -> None:
        items = self.view.checklist_items + (ChecklistItem(text, checked),)
        self.set_checklist(items)

    def toggle_item(self, index: int) -> None:
        items = list(self.view.checklist_items)
        item = items[index]
        items[index] = dataclasses.replace(item, checked=not item.checked)
        self.set_checklist(items)

    def remove_item(self, index: int) -> None:
        items = list(self.view.checklist_items)
        del items[index]
        self.set_checklist(items)

    def toggle_checklist_mode(self) -> None:
        """Turn prose lines into unchecked items, or items back into lines."""
        if self.view.is_checklist:
            self.set_body("\n".join(item.text for item in self.view.checklist_items))
        else:
            lines = [ln for ln in self.view.body_text.split("\n") if ln.strip()]
            self.set_checklist(ChecklistItem(ln) for ln in lines)

    def add_image(self, uri: str) -> None:
        self.view = dataclasses.replace(self.view, images=self.view.images + (uri,))
        self._changed()

    def remove_image(self, index: int) -> None:
        images = list(self.view.images)
        del images[index]
        self.view = dataclasses.replace(self.view, images=tuple(images))
        self._changed()

    async def apply_transform(
        self, op: TransformOp, transformer: TextTransformer
    ) -> bool:
        """Run a text transform on the draft; ``False`` when nothing changed.

        Title generation replaces the title; every other operation replaces
        the body or checklist and keeps the attached images.
        """
        source = codec.encode(dataclasses.replace(self.view, images=()))
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            self._engine.executor, transformer.transform, source, op
        )
        if not result or self._closed:
            return False
        if op is TransformOp.GENERATE_TITLE:
            self.set_title(result)
            return True
        decoded = codec.decode(result)
        self.view = StructuredView(
            body_text=decoded.body_text,
            checklist_items=decoded.checklist_items,
            images=self.view.images + decoded.images,
        )
        self._changed()
        return True

    # ----- lifecycle -----

    def flush(self) -> bool:
        """Send the draft to the engine if it differs from the snapshot."""
        if self._closed or not self.dirty:
            return False
        LOGGER.debug("notes.editing.flush id=%s", self.note_id)
        self._engine.update(self.note_id, title=self.title, content=self.content)
        return True

    def close(self) -> None:
        """Cancel the pending timer, flush once, and detach from the engine."""
        if self._closed:
            return
        self._debouncer.cancel()
        self.flush()
        self._closed = True
        self._engine._release(self)

    def discard(self) -> None:
        """Detach without saving the draft."""
        self._debouncer.cancel()
        self._closed = True
        self._engine._release(self)

    def _changed(self) -> None:
        if self._closed:
            raise RuntimeError(f"editing session for {self.note_id} is closed")
        self._debouncer.trigger()
