"""Unit tests for settings persistence."""

import json
import os
import shutil
import tempfile
import unittest

from kestrel.settings_persistence import CURSOR_COL, CURSOR_ROW, SettingsPersistence


class TestSettingsPersistence(unittest.TestCase):
    """Test settings persistence functionality."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.persistence = SettingsPersistence(config_dir=os.path.join(self.temp_dir, "config"))
        self.test_doc_path = os.path.join(self.temp_dir, "test_document.txt")

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_save_and_load_cursor(self):
        self.assertTrue(self.persistence.save_cursor(self.test_doc_path, 3, 7))
        self.assertEqual(self.persistence.load_cursor(self.test_doc_path), (3, 7))

    def test_survives_new_instance(self):
        self.persistence.save_cursor(self.test_doc_path, 1, 2)
        other = SettingsPersistence(config_dir=os.path.join(self.temp_dir, "config"))
        self.assertEqual(other.load_cursor(self.test_doc_path), (1, 2))

    def test_paths_are_normalized(self):
        self.persistence.save_cursor(self.test_doc_path, 4, 0)
        relative = os.path.relpath(self.test_doc_path)
        self.assertEqual(self.persistence.load_cursor(relative), (4, 0))

    def test_load_nonexistent_document(self):
        self.assertIsNone(self.persistence.load_cursor("/nonexistent/document.txt"))
        self.assertEqual(self.persistence.load_settings("/nonexistent/document.txt"), {})

    def test_none_document_path(self):
        self.assertFalse(self.persistence.save_settings(None, {CURSOR_ROW: 1}))
        self.assertEqual(self.persistence.load_settings(None), {})
        self.assertIsNone(self.persistence.load_cursor(None))

    def test_invalid_values_are_ignored(self):
        self.persistence.save_settings(self.test_doc_path, {CURSOR_ROW: "3", CURSOR_COL: 1})
        self.assertIsNone(self.persistence.load_cursor(self.test_doc_path))
        self.persistence.save_settings(self.test_doc_path, {CURSOR_ROW: True, CURSOR_COL: 1})
        self.assertIsNone(self.persistence.load_cursor(self.test_doc_path))
        self.persistence.save_settings(self.test_doc_path, {CURSOR_ROW: -1, CURSOR_COL: 1})
        self.assertIsNone(self.persistence.load_cursor(self.test_doc_path))

    def test_corrupt_settings_file(self):
        config_dir = os.path.join(self.temp_dir, "config")
        os.makedirs(config_dir)
        with open(os.path.join(config_dir, "settings.json"), 'w', encoding='utf-8') as f:
            f.write("{not json")
        with self.assertLogs('kestrel.settings_persistence', level='WARNING') as logs:
            self.assertEqual(self.persistence.load_settings(self.test_doc_path), {})
        self.assertIn(f"Could not load settings from {os.path.join(config_dir, 'settings.json')}", logs.output[0])

    def test_non_dict_settings_file(self):
        config_dir = os.path.join(self.temp_dir, "config")
        os.makedirs(config_dir)
        with open(os.path.join(config_dir, "settings.json"), 'w', encoding='utf-8') as f:
            json.dump([1, 2, 3], f)
        self.assertEqual(self.persistence.load_settings(self.test_doc_path), {})

    def test_unwritable_config_dir_returns_false(self):
        blocker = os.path.join(self.temp_dir, "blocker")
        with open(blocker, 'w', encoding='utf-8') as f:
            f.write("a file, not a directory")
        persistence = SettingsPersistence(config_dir=os.path.join(blocker, "config"))
        with self.assertLogs('kestrel.settings_persistence', level='WARNING'):
            self.assertFalse(persistence.save_cursor(self.test_doc_path, 0, 0))

    def test_other_settings_are_preserved(self):
        self.persistence.save_settings(self.test_doc_path, {"custom": "value"})
        self.persistence.save_cursor(self.test_doc_path, 2, 2)
        loaded = self.persistence.load_settings(self.test_doc_path)
        self.assertEqual(loaded, {"custom": "value", CURSOR_ROW: 2, CURSOR_COL: 2})


if __name__ == '__main__':
    unittest.main()
