"""
Manual ordering of notes.

New notes take ``min(existing) - 1`` so they sort first without touching any
other row. A drag reorder renumbers the whole displayed sequence densely from
zero; the write amplification is accepted in exchange for integer indices
that never drift.
"""

from __future__ import annotations

import dataclasses
from typing import Iterable, List, Optional, Sequence, Tuple

from .domain import IndexPatch
from .models.dto import Note


def assign_on_create(existing_indices: Iterable[Optional[int]]) -> int:
    indexed = [i for i in existing_indices if i is not None]
    if not indexed:
        return -1
    return min(indexed) - 1


def reorder(
    sequence: Sequence[Note], from_pos: int, to_pos: int
) -> Tuple[List[Note], List[IndexPatch]]:
    """Move ``sequence[from_pos]`` to ``to_pos`` and renumber everything.

    Returns the new sequence (notes carry their new ``order_index``) and one
    IndexPatch per note, in sequence order. Raises IndexError for positions
    outside the sequence; negative positions are not accepted.
    """
    size = len(sequence)
    for pos in (from_pos, to_pos):
        if not 0 <= pos < size:
            raise IndexError(f"position {pos} out of range for {size} notes")

    moved = list(sequence)
    moved.insert(to_pos, moved.pop(from_pos))

    new_sequence: List[Note] = []
    patches: List[IndexPatch] = []
    for idx, note in enumerate(moved):
        if note.order_index != idx:
            note = dataclasses.replace(note, order_index=idx)
        new_sequence.append(note)
        patches.append(IndexPatch(id=note.id, order_index=idx))
    return new_sequence, patches


def sort_key(note: Note):
    """Order index ascending (unset last), then newest first."""
    return (
        note.order_index is None,
        note.order_index if note.order_index is not None else 0,
        -note.created_at,
    )
