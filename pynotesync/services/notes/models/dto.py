"""High-level Notes data transfer objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class NoteColor(str, Enum):
    """Fixed palette a note can be tagged with."""

    DEFAULT = "default"
    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    TEAL = "teal"
    BLUE = "blue"
    INDIGO = "indigo"
    PURPLE = "purple"
    PINK = "pink"


class SaveStatus(str, Enum):
    """Pending-write indicator; informational only."""

    SAVED = "saved"
    SAVING = "saving"
    ERROR = "error"


@dataclass(frozen=True)
class Note:
    """A single note as held in the client collection.

    ``content`` is the encoded text blob (see ``codec``); timestamps are epoch
    milliseconds.
    """

    id: str
    title: str
    content: str
    created_at: int
    updated_at: int
    color: NoteColor = NoteColor.DEFAULT
    is_pinned: bool = False
    is_archived: bool = False
    is_trashed: bool = False
    labels: Tuple[str, ...] = ()
    order_index: Optional[int] = None


# Fields a caller may change through ``SyncEngine.update``.
PATCHABLE_FIELDS = frozenset(
    {
        "title",
        "content",
        "color",
        "is_pinned",
        "is_archived",
        "is_trashed",
        "labels",
        "order_index",
    }
)
