"""Tests for the notes table wire records."""

import os
import unittest
from unittest.mock import patch

from pynotesync.services.notes import Note, NoteColor
from pynotesync.services.notes.models import NotePatch, NoteRecord
from pynotesync.services.notes.models._base import _extra_mode

JAN_1_2024 = 1704067200000


class NoteRecordTest(unittest.TestCase):
    def test_row_to_note(self):
        rec = NoteRecord.model_validate(
            {
                "id": "n1",
                "user_id": 7,
                "title": None,
                "content": "body",
                "color": "bg-red-900/50",
                "is_pinned": None,
                "is_archived": True,
                "is_trashed": False,
                "labels": None,
                "order_index": 3,
                "created_at": "2024-01-01T00:00:00.000Z",
                "updated_at": "2024-01-01T00:00:01+00:00",
                "server_only_column": "ignored",
            }
        )
        note = rec.to_note()
        self.assertEqual(note.title, "")
        self.assertEqual(note.color, NoteColor.RED)
        self.assertFalse(note.is_pinned)
        self.assertTrue(note.is_archived)
        self.assertEqual(note.labels, ())
        self.assertEqual(note.created_at, JAN_1_2024)
        self.assertEqual(note.updated_at, JAN_1_2024 + 1000)

    def test_unknown_color_falls_back(self):
        rec = NoteRecord.model_validate({"id": "n1", "color": "chartreuse"})
        self.assertEqual(rec.color, NoteColor.DEFAULT)

    def test_missing_timestamps_and_clamp(self):
        rec = NoteRecord.model_validate(
            {"id": "n1", "created_at": JAN_1_2024, "updated_at": JAN_1_2024 - 5}
        )
        self.assertEqual(rec.to_note().updated_at, JAN_1_2024)
        bare = NoteRecord.model_validate({"id": "n2"}).to_note(now=42)
        self.assertEqual((bare.created_at, bare.updated_at), (42, 42))

    def test_payload(self):
        note = Note(
            id="n1",
            title="t",
            content="c",
            created_at=JAN_1_2024,
            updated_at=JAN_1_2024,
            color=NoteColor.TEAL,
            labels=("a", "b"),
            order_index=-1,
        )
        payload = NoteRecord.from_note(note, 7).to_payload()
        self.assertEqual(payload["user_id"], 7)
        self.assertEqual(payload["color"], "teal")
        self.assertEqual(payload["labels"], ["a", "b"])
        self.assertEqual(payload["created_at"], "2024-01-01T00:00:00.000Z")

    def test_fraction_lengths(self):
        base = JAN_1_2024 + 14 * 86400000 + 37845000  # 2024-01-15T10:30:45Z
        cases = {
            "2024-01-15T10:30:45.1+00:00": base + 100,
            "2024-01-15T10:30:45.12345+00:00": base + 123,
            "2024-01-15T10:30:45.123456Z": base + 123,
            "2024-01-15T10:30:45": base,
        }
        for raw, expected in cases.items():
            with self.subTest(raw=raw):
                rec = NoteRecord.model_validate({"id": "n1", "created_at": raw})
                self.assertEqual(rec.created_at, expected)

    def test_bad_timestamp(self):
        with self.assertRaises(ValueError):
            NoteRecord.model_validate({"id": "n1", "created_at": "yesterday"})


class NotePatchTest(unittest.TestCase):
    def test_only_set_fields(self):
        patch = NotePatch.from_fields(
            {"title": "x", "labels": ("a",), "updated_at": JAN_1_2024}
        )
        self.assertEqual(
            patch.to_payload(),
            {"title": "x", "labels": ["a"], "updated_at": "2024-01-01T00:00:00.000Z"},
        )

    def test_color_and_empty(self):
        self.assertEqual(
            NotePatch.from_fields({"color": NoteColor.PINK}).to_payload(),
            {"color": "pink"},
        )
        self.assertEqual(NotePatch.from_fields({}).to_payload(), {})


class ExtraModeTest(unittest.TestCase):
    def test_extra_mode(self):
        for raw, expected in (
            ("forbid", "forbid"),
            (" Allow ", "allow"),
            ("yes", "ignore"),
            ("", "ignore"),
        ):
            with self.subTest(raw=raw):
                with patch.dict(os.environ, {"PYNOTESYNC_EXTRA": raw}):
                    self.assertEqual(_extra_mode(), expected)


if __name__ == "__main__":
    unittest.main()
