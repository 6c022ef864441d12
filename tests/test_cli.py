"""Tests for the pynotesync command line."""

import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from pynotesync.cli.main import app
from pynotesync.services.notes import MemoryNoteStore, Note, NotesService

OWNER = 7


def _note(note_id, title, content="", order_index=None, **kwargs):
    return Note(
        id=note_id,
        title=title,
        content=content,
        created_at=1,
        updated_at=1,
        order_index=order_index,
        **kwargs,
    )


class NotesCliTest(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.store = MemoryNoteStore()
        self.store.insert(
            _note("g1-aaaa", "Groceries", "- [ ] eggs\n- [ ] milk", 0), OWNER
        )
        self.store.insert(_note("w2-bbbb", "Work plan", "ship it", 1), OWNER)
        self.owner_id = OWNER
        patcher = patch(
            "pynotesync.cli.utils.session.get_service", side_effect=self._service
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def _service(self, owner_id=None):
        return NotesService(
            "https://example.supabase.co",
            MagicMock(),
            owner_id=self.owner_id,
            store=self.store,
        )

    def invoke(self, *args, **kwargs):
        return self.runner.invoke(app, ["notes", *args], **kwargs)

    def test_list(self):
        result = self.invoke("list")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Groceries", result.output)
        self.assertIn("Work plan", result.output)

    def test_list_empty_trash(self):
        result = self.invoke("list", "--view", "trash")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("No notes here yet", result.output)

    def test_add_checklist(self):
        result = self.invoke(
            "add", "Todo", "--item", "eggs", "--item", "jam", "--label", "home"
        )
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Created note", result.output)
        created = [n for n in self.store.list(OWNER) if n.title == "Todo"]
        self.assertEqual(len(created), 1)
        self.assertEqual(created[0].content, "- [ ] eggs\n- [ ] jam")
        self.assertEqual(created[0].labels, ("home",))
        self.assertEqual(created[0].order_index, -1)

    def test_add_with_image(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "pic.png")
            with open(path, "wb") as f:
                f.write(b"\x89PNG")
            result = self.invoke("add", "Photo", "--image", path)
        self.assertEqual(result.exit_code, 0, result.output)
        created = [n for n in self.store.list(OWNER) if n.title == "Photo"]
        self.assertIn("![Image](data:image/png;base64,", created[0].content)

    def test_add_blank_note(self):
        result = self.invoke("add")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Nothing to save", result.output)
        self.assertEqual(len(self.store.list(OWNER)), 2)

    def test_show(self):
        result = self.invoke("show", "g1")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Groceries", result.output)
        self.assertIn("eggs", result.output)

    def test_show_unknown(self):
        result = self.invoke("show", "nope")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Note not found", result.output)

    def test_edit(self):
        result = self.invoke("edit", "w2", "--title", "Plan B", "--body", "later")
        self.assertEqual(result.exit_code, 0, result.output)
        note = self.store.get("w2-bbbb")
        self.assertEqual((note.title, note.content), ("Plan B", "later"))

    def test_check(self):
        result = self.invoke("check", "g1", "2")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("marked done", result.output)
        self.assertEqual(self.store.get("g1-aaaa").content, "- [ ] eggs\n- [x] milk")

    def test_check_out_of_range(self):
        result = self.invoke("check", "g1", "5")
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(self.store.get("g1-aaaa").content, "- [ ] eggs\n- [ ] milk")

    def test_pin_archive_trash_restore(self):
        self.assertEqual(self.invoke("pin", "g1").exit_code, 0)
        self.assertTrue(self.store.get("g1-aaaa").is_pinned)
        self.assertEqual(self.invoke("archive", "g1").exit_code, 0)
        self.assertTrue(self.store.get("g1-aaaa").is_archived)
        self.assertEqual(self.invoke("trash", "g1").exit_code, 0)
        self.assertTrue(self.store.get("g1-aaaa").is_trashed)
        self.assertEqual(self.invoke("restore", "g1").exit_code, 0)
        self.assertFalse(self.store.get("g1-aaaa").is_trashed)

    def test_color_and_copy(self):
        self.assertEqual(self.invoke("color", "w2", "teal").exit_code, 0)
        self.assertEqual(self.store.get("w2-bbbb").color.value, "teal")
        result = self.invoke("copy", "w2")
        self.assertEqual(result.exit_code, 0, result.output)
        copies = [n for n in self.store.list(OWNER) if n.title == "Work plan"]
        self.assertEqual(len(copies), 2)

    def test_purge(self):
        result = self.invoke("purge", "g1", input="n\n")
        self.assertIn("Operation cancelled", result.output)
        self.store.get("g1-aaaa")

        result = self.invoke("purge", "g1", "--force")
        self.assertEqual(result.exit_code, 0, result.output)
        with self.assertRaises(KeyError):
            self.store.get("g1-aaaa")

    def test_move(self):
        result = self.invoke("move", "0", "1")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.store.get("w2-bbbb").order_index, 0)
        self.assertEqual(self.store.get("g1-aaaa").order_index, 1)

    def test_move_keeps_pinned_first(self):
        self.assertEqual(self.invoke("pin", "w2").exit_code, 0)
        result = self.invoke("move", "1", "0")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Pinned notes stay above the others", result.output)
        self.assertIn("to position 1", result.output)
        self.assertEqual(self.store.get("w2-bbbb").order_index, 0)
        self.assertEqual(self.store.get("g1-aaaa").order_index, 1)

    def test_move_out_of_range(self):
        result = self.invoke("move", "0", "9")
        self.assertEqual(result.exit_code, 1)

    def test_labels(self):
        result = self.invoke("labels", "g1", "--add", "home", "--add", "food")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(self.store.get("g1-aaaa").labels, ("home", "food"))
        result = self.invoke("labels", "g1", "--remove", "home")
        self.assertEqual(self.store.get("g1-aaaa").labels, ("food",))
        result = self.invoke("labels")
        self.assertIn("- food", result.output)

    def test_ai_without_transformer(self):
        result = self.invoke("ai", "g1", "summarize")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("No text transformer configured", result.output)

    def test_access_denied(self):
        self.owner_id = None
        result = self.invoke("list")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("owner id is required", result.output)


class ConfigCliTest(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        for name, value in (
            ("config_dir", self.tmp.name),
            ("config_path", os.path.join(self.tmp.name, "config.json")),
        ):
            patcher = patch(f"pynotesync.cli.utils.config.{name}", value)
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_set_and_show(self):
        with patch.dict(os.environ, {"PYNOTESYNC_OWNER_ID": ""}):
            result = self.runner.invoke(app, ["config", "set", "owner_id", "42"])
            self.assertEqual(result.exit_code, 0, result.output)
            result = self.runner.invoke(app, ["config", "show"])
        self.assertIn("42", result.output)
        self.assertIn("file", result.output)

    def test_set_unknown_key(self):
        result = self.runner.invoke(app, ["config", "set", "colour", "red"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unknown setting", result.output)


if __name__ == "__main__":
    unittest.main()
