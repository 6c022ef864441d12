# pynotesync/services/notes/domain.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ChecklistItem:
    text: str
    checked: bool = False


@dataclass(frozen=True)
class StructuredView:
    """Editable form of a note's encoded ``content`` field."""

    body_text: str = ""
    checklist_items: Tuple[ChecklistItem, ...] = ()
    images: Tuple[str, ...] = ()

    @property
    def is_checklist(self) -> bool:
        return bool(self.checklist_items)


@dataclass(frozen=True)
class IndexPatch:
    id: str
    order_index: int
