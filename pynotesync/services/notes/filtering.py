"""Pure view filtering over a note collection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .models.dto import Note
from .ordering import sort_key


class ViewMode(str, Enum):
    NOTES = "notes"
    ARCHIVE = "archive"
    TRASH = "trash"


@dataclass(frozen=True)
class NoteFilter:
    """What the caller is currently displaying.

    A non-blank ``query`` replaces the view test; ``label`` narrows either.
    """

    view: ViewMode = ViewMode.NOTES
    label: Optional[str] = None
    query: str = ""


def _in_view(note: Note, view: ViewMode) -> bool:
    if view is ViewMode.TRASH:
        return note.is_trashed
    if view is ViewMode.ARCHIVE:
        return note.is_archived and not note.is_trashed
    return not note.is_archived and not note.is_trashed


def matches(note: Note, note_filter: NoteFilter) -> bool:
    query = note_filter.query.strip().lower()
    if query:
        ok = not note.is_trashed and (
            query in note.title.lower() or query in note.content.lower()
        )
    else:
        ok = _in_view(note, note_filter.view)
    if ok and note_filter.label is not None:
        ok = not note.is_trashed and note_filter.label in note.labels
    return ok


def sections(
    notes: Iterable[Note], note_filter: NoteFilter
) -> Tuple[List[Note], List[Note]]:
    """Split matching notes into (pinned, others), each in display order."""
    selected = sorted((n for n in notes if matches(n, note_filter)), key=sort_key)
    pinned = [n for n in selected if n.is_pinned]
    others = [n for n in selected if not n.is_pinned]
    return pinned, others


def visible(notes: Iterable[Note], note_filter: NoteFilter) -> List[Note]:
    pinned, others = sections(notes, note_filter)
    return pinned + others


def discover_labels(notes: Iterable[Note]) -> List[str]:
    """Distinct labels in first-seen order across the sorted collection."""
    seen: List[str] = []
    for note in sorted(notes, key=sort_key):
        if note.is_trashed:
            continue
        for label in note.labels:
            if label not in seen:
                seen.append(label)
    return seen
