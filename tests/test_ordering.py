"""Tests for manual note ordering."""

import unittest

from pynotesync.services.notes import IndexPatch, Note
from pynotesync.services.notes import ordering


def _note(note_id, order_index=None, created_at=0):
    return Note(
        id=note_id,
        title=note_id,
        content="",
        created_at=created_at,
        updated_at=created_at,
        order_index=order_index,
    )


class AssignOnCreateTest(unittest.TestCase):
    def test_empty_collection(self):
        self.assertEqual(ordering.assign_on_create([]), -1)

    def test_goes_before_minimum(self):
        self.assertEqual(ordering.assign_on_create([5, 2, 9]), 1)

    def test_unindexed_notes_ignored(self):
        self.assertEqual(ordering.assign_on_create([None, 3, None]), 2)
        self.assertEqual(ordering.assign_on_create([None]), -1)


class ReorderTest(unittest.TestCase):
    def test_move_first_to_last(self):
        seq = [_note("a"), _note("b"), _note("c")]
        new_seq, patches = ordering.reorder(seq, 0, 2)
        self.assertEqual([n.id for n in new_seq], ["b", "c", "a"])
        self.assertEqual([n.order_index for n in new_seq], [0, 1, 2])
        self.assertEqual(
            patches,
            [IndexPatch("b", 0), IndexPatch("c", 1), IndexPatch("a", 2)],
        )

    def test_same_position_renumbers(self):
        seq = [_note("a", 10), _note("b", 20)]
        new_seq, patches = ordering.reorder(seq, 1, 1)
        self.assertEqual([n.id for n in new_seq], ["a", "b"])
        self.assertEqual([p.order_index for p in patches], [0, 1])

    def test_out_of_range(self):
        seq = [_note("a"), _note("b")]
        for from_pos, to_pos in ((2, 0), (0, 2), (-1, 0)):
            with self.subTest(from_pos=from_pos, to_pos=to_pos):
                with self.assertRaises(IndexError):
                    ordering.reorder(seq, from_pos, to_pos)

    def test_input_is_not_modified(self):
        seq = [_note("a", 5), _note("b", 6)]
        ordering.reorder(seq, 0, 1)
        self.assertEqual([n.order_index for n in seq], [5, 6])


class SortKeyTest(unittest.TestCase):
    def test_index_then_newest_first(self):
        notes = [
            _note("old", None, created_at=1),
            _note("new", None, created_at=2),
            _note("second", 1),
            _note("first", -4),
        ]
        ordered = sorted(notes, key=ordering.sort_key)
        self.assertEqual([n.id for n in ordered], ["first", "second", "new", "old"])


if __name__ == "__main__":
    unittest.main()
