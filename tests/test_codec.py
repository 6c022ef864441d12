"""Tests for the note content codec."""

import unittest

from pynotesync.services.notes import ChecklistItem, StructuredView
from pynotesync.services.notes import codec

PNG = "data:image/png;base64,AAA"


class CodecTest(unittest.TestCase):
    def test_image_only_encoding(self):
        view = StructuredView(images=(PNG,))
        raw = codec.encode(view)
        self.assertEqual(raw, "\n![Image](data:image/png;base64,AAA)")
        self.assertEqual(codec.decode(raw), view)

    def test_decode_checklist(self):
        view = codec.decode("- [x] Buy milk\n- [ ] Call Bob")
        self.assertTrue(view.is_checklist)
        self.assertEqual(view.body_text, "")
        self.assertEqual(
            view.checklist_items,
            (ChecklistItem("Buy milk", True), ChecklistItem("Call Bob", False)),
        )

    def test_round_trips(self):
        views = [
            StructuredView(),
            StructuredView(body_text="Just some prose"),
            StructuredView(body_text="Two\nlines", images=(PNG,)),
            StructuredView(
                checklist_items=(ChecklistItem("eggs"), ChecklistItem("jam", True)),
                images=(PNG, "data:image/jpeg;base64,/9j/4AAQ"),
            ),
        ]
        for view in views:
            with self.subTest(view=view):
                self.assertEqual(codec.decode(codec.encode(view)), view)

    def test_decode_empty_and_none(self):
        self.assertEqual(codec.decode(""), StructuredView())
        self.assertEqual(codec.decode(None), StructuredView())

    def test_stray_line_in_checklist_becomes_item(self):
        view = codec.decode("- [ ] one\nloose line\n- [x] two")
        texts = [item.text for item in view.checklist_items]
        self.assertEqual(texts, ["one", "loose line", "two"])
        self.assertFalse(view.checklist_items[1].checked)

    def test_non_data_image_link_stays_in_prose(self):
        raw = "see ![pic](https://example.com/a.png)"
        view = codec.decode(raw)
        self.assertEqual(view.body_text, raw)
        self.assertEqual(view.images, ())

    def test_encode_drops_blank_checklist_items(self):
        view = StructuredView(
            checklist_items=(
                ChecklistItem("a"),
                ChecklistItem("  "),
                ChecklistItem("b"),
            )
        )
        self.assertEqual(codec.encode(view), "- [ ] a\n- [ ] b")

    def test_encode_checklist_wins_over_body(self):
        view = StructuredView(
            body_text="ignored", checklist_items=(ChecklistItem("x"),)
        )
        self.assertEqual(codec.encode(view), "- [ ] x")

    def test_preview(self):
        self.assertEqual(codec.preview("- [x] done\n- [ ] todo"), "☑ done\n☐ todo")
        self.assertEqual(codec.preview("hello\n![Image](%s)" % PNG), "hello")
        self.assertEqual(codec.preview("abcdef", limit=4), "abc…")


if __name__ == "__main__":
    unittest.main()
