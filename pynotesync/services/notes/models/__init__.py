"""Public exports for Notes service data models."""

from __future__ import annotations

from .dto import PATCHABLE_FIELDS, Note, NoteColor, SaveStatus
from .records import NotePatch, NoteRecord, ReorderEntry

__all__ = [
    "Note",
    "NoteColor",
    "SaveStatus",
    "PATCHABLE_FIELDS",
    "NoteRecord",
    "NotePatch",
    "ReorderEntry",
]
