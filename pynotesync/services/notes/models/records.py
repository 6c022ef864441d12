"""
Wire models for rows of the remote ``notes`` table.

Column names are snake_case as stored; timestamps travel as ISO-8601 strings
and are held as epoch milliseconds on the Python side.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Dict, List, Mapping, Optional

from pydantic import (
    BeforeValidator,
    Field,
    PlainSerializer,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from pynotesync.utils import now_ms

from ..domain import IndexPatch
from ._base import RecordModel
from .dto import Note, NoteColor

LOGGER = logging.getLogger(__name__)

_DATETIME = TypeAdapter(datetime)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Older rows stored a CSS class (e.g. "bg-red-900/50") instead of the tag.
_LEGACY_COLOR_RE = re.compile(r"^bg-([a-z]+)-")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _to_millis_or_none(v):
    if v is None:
        return None
    if isinstance(v, bool):
        raise ValueError("Expected a timestamp, got a boolean")
    if isinstance(v, (int, float)):
        return int(v)
    if isinstance(v, str) and v.isdigit():
        return int(v)
    if not isinstance(v, (str, datetime)):
        raise ValueError("Expected ISO-8601 string or epoch milliseconds")
    # pydantic accepts any fraction length, unlike fromisoformat before 3.11
    try:
        dt = _DATETIME.validate_python(v)
    except ValidationError as exc:
        raise ValueError(f"Unparseable timestamp: {v!r}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def _millis_to_iso(v: Optional[int]) -> Optional[str]:
    if v is None:
        return None
    dt = datetime.fromtimestamp(v / 1000.0, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


IsoMillis = Annotated[
    Optional[int],
    BeforeValidator(_to_millis_or_none),
    PlainSerializer(_millis_to_iso, return_type=Optional[str], when_used="json"),
]


def _coerce_color(v: Any) -> NoteColor:
    if isinstance(v, NoteColor):
        return v
    if v is None:
        return NoteColor.DEFAULT
    raw = str(v).strip().lower()
    m = _LEGACY_COLOR_RE.match(raw)
    if m:
        raw = m.group(1)
    try:
        return NoteColor(raw)
    except ValueError:
        LOGGER.debug("notes.records.unknown_color %r -> default", v)
        return NoteColor.DEFAULT


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------


class NoteRecord(RecordModel):
    """A full row as returned by ``list`` and sent by ``insert``."""

    id: str
    user_id: Optional[int] = None
    title: str = ""
    content: str = ""
    color: NoteColor = NoteColor.DEFAULT
    is_pinned: bool = False
    is_archived: bool = False
    is_trashed: bool = False
    labels: List[str] = Field(default_factory=list)
    order_index: Optional[int] = None
    created_at: IsoMillis = None
    updated_at: IsoMillis = None

    @field_validator("color", mode="before")
    @classmethod
    def _color(cls, v):
        return _coerce_color(v)

    @field_validator("title", "content", mode="before")
    @classmethod
    def _text(cls, v):
        return "" if v is None else v

    @field_validator("is_pinned", "is_archived", "is_trashed", mode="before")
    @classmethod
    def _flag(cls, v):
        return False if v is None else v

    @field_validator("labels", mode="before")
    @classmethod
    def _labels(cls, v):
        return [] if v is None else list(v)

    @classmethod
    def from_note(cls, note: Note, owner_id: int) -> "NoteRecord":
        return cls(
            id=note.id,
            user_id=owner_id,
            title=note.title,
            content=note.content,
            color=note.color,
            is_pinned=note.is_pinned,
            is_archived=note.is_archived,
            is_trashed=note.is_trashed,
            labels=list(note.labels),
            order_index=note.order_index,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )

    def to_note(self, *, now: Optional[int] = None) -> Note:
        """Convert to the client DTO; missing timestamps become ``now``."""
        fallback = now if now is not None else now_ms()
        created = self.created_at if self.created_at is not None else fallback
        updated = self.updated_at if self.updated_at is not None else fallback
        return Note(
            id=self.id,
            title=self.title,
            content=self.content,
            created_at=created,
            updated_at=max(updated, created),
            color=self.color,
            is_pinned=self.is_pinned,
            is_archived=self.is_archived,
            is_trashed=self.is_trashed,
            labels=tuple(self.labels),
            order_index=self.order_index,
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class NotePatch(RecordModel):
    """Partial row; only explicitly set columns are sent."""

    title: Optional[str] = None
    content: Optional[str] = None
    color: Optional[NoteColor] = None
    is_pinned: Optional[bool] = None
    is_archived: Optional[bool] = None
    is_trashed: Optional[bool] = None
    labels: Optional[List[str]] = None
    order_index: Optional[int] = None
    updated_at: IsoMillis = None

    @field_validator("color", mode="before")
    @classmethod
    def _color(cls, v):
        return None if v is None else _coerce_color(v)

    @field_validator("labels", mode="before")
    @classmethod
    def _labels(cls, v):
        return None if v is None else list(v)

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "NotePatch":
        return cls.model_validate(dict(fields))

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class ReorderEntry(RecordModel):
    id: str
    order_index: int

    @classmethod
    def from_patch(cls, patch: IndexPatch) -> "ReorderEntry":
        return cls(id=patch.id, order_index=patch.order_index)


__all__ = ["NoteRecord", "NotePatch", "ReorderEntry", "IsoMillis"]
