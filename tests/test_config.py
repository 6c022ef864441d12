"""Tests for CLI configuration handling."""

import json
import os
import tempfile
import unittest
from unittest.mock import patch

from pynotesync.cli.utils import config
from pynotesync.exceptions import ConfigError

CLEAN_ENV = {name: "" for name in config.ENV_VARS.values()}


class ConfigTest(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, "sub", "config.json")
        for name, value in (
            ("config_dir", os.path.dirname(self.path)),
            ("config_path", self.path),
        ):
            patcher = patch.object(config, name, value)
            patcher.start()
            self.addCleanup(patcher.stop)
        env = patch.dict(os.environ, CLEAN_ENV)
        env.start()
        self.addCleanup(env.stop)

    def test_missing_file(self):
        self.assertEqual(config.load_config(), {})
        self.assertIsNone(config.get_setting("store_url"))
        self.assertEqual(config.get_setting("store_url", "x"), "x")

    def test_save_and_precedence(self):
        config.save_config({"store_url": "https://file", "owner_id": "3"})
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f)["store_url"], "https://file")
        self.assertEqual(oct(os.stat(self.path).st_mode & 0o777), oct(0o600))
        self.assertEqual(config.get_setting("store_url"), "https://file")
        with patch.dict(os.environ, {"PYNOTESYNC_STORE_URL": "https://env"}):
            self.assertEqual(config.get_setting("store_url"), "https://env")

    def test_owner_id(self):
        self.assertIsNone(config.get_owner_id())
        self.assertEqual(config.get_owner_id(9), 9)
        with patch.dict(os.environ, {"PYNOTESYNC_OWNER_ID": "12"}):
            self.assertEqual(config.get_owner_id(), 12)
        with patch.dict(os.environ, {"PYNOTESYNC_OWNER_ID": "bob"}):
            with self.assertRaises(ConfigError) as ctx:
                config.get_owner_id()
        self.assertEqual(ctx.exception.key, "owner_id")

    def test_autosave_delay(self):
        self.assertEqual(config.get_autosave_delay(), 1.0)
        with patch.dict(os.environ, {"PYNOTESYNC_AUTOSAVE_DELAY": "0.25"}):
            self.assertEqual(config.get_autosave_delay(), 0.25)

    def test_corrupt_file(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
