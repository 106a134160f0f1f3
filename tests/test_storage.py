import os
import sqlite3
import tempfile
import unittest
from unittest.mock import patch

from soundshelf.core.storage import KeyValueStorage, StorageError


class KeyValueStorageTests(unittest.TestCase):
    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()
        self.db_path = os.path.join(self.tempdir.name, "nested", "library.db")
        self.storage = KeyValueStorage(self.db_path)

    def tearDown(self):
        self.tempdir.cleanup()

    def test_creates_parent_directory(self):
        self.assertTrue(os.path.exists(self.db_path))

    def test_missing_key_is_none(self):
        self.assertIsNone(self.storage.get_item("favorites"))

    def test_set_and_get(self):
        self.storage.set_item("favorites", '[{"id": "1"}]')
        self.assertEqual(self.storage.get_item("favorites"), '[{"id": "1"}]')

    def test_set_replaces_value(self):
        self.storage.set_item("playlists", "[]")
        self.storage.set_item("playlists", '[{"id": "2"}]')
        self.assertEqual(self.storage.get_item("playlists"), '[{"id": "2"}]')

    def test_unicode_round_trip(self):
        self.storage.set_item("favorites", '[{"displayTitle": "Björk – Jóga"}]')
        self.assertIn("Björk – Jóga", self.storage.get_item("favorites"))

    def test_keys_are_independent(self):
        self.storage.set_item("favorites", "[1]")
        self.storage.set_item("playlists", "[2]")
        self.storage.remove_item("playlists")

        self.assertEqual(self.storage.get_item("favorites"), "[1]")
        self.assertIsNone(self.storage.get_item("playlists"))
        self.assertEqual(self.storage.keys(), ["favorites"])

    def test_persists_across_instances(self):
        self.storage.set_item("favorites", "[]")
        reopened = KeyValueStorage(self.db_path)
        self.assertEqual(reopened.get_item("favorites"), "[]")

    def test_clear(self):
        self.storage.set_item("favorites", "[]")
        self.storage.clear()
        self.assertEqual(self.storage.keys(), [])

    def test_sqlite_errors_become_storage_errors(self):
        with patch("soundshelf.core.storage.sqlite3.connect", side_effect=sqlite3.OperationalError("locked")):
            with self.assertRaises(StorageError):
                self.storage.get_item("favorites")
            with self.assertRaises(StorageError):
                self.storage.set_item("favorites", "[]")


if __name__ == "__main__":
    unittest.main()
