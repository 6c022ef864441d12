"""Public API for the Notes service."""

from .domain import ChecklistItem, IndexPatch, StructuredView
from .editing import EditingSession
from .filtering import NoteFilter, ViewMode
from .models import Note, NoteColor, SaveStatus
from .service import NoteNotFound, NotesService
from .store import MemoryNoteStore, NoteStore
from .sync import SyncEngine
from .transform import GeminiTransformer, TextTransformer, TransformOp

__all__ = [
    "NotesService",
    "NoteNotFound",
    "SyncEngine",
    "EditingSession",
    "Note",
    "NoteColor",
    "SaveStatus",
    "NoteFilter",
    "ViewMode",
    "StructuredView",
    "ChecklistItem",
    "IndexPatch",
    "NoteStore",
    "MemoryNoteStore",
    "TextTransformer",
    "GeminiTransformer",
    "TransformOp",
]
