"""Unit tests for userhub.core.artifacts: per-user text files."""

import stat
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from userhub.core.artifacts import ArtifactStore


class TestArtifactStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name) / "users"
        self.store = ArtifactStore(self.root)

    def test_path_is_id_dot_txt(self) -> None:
        self.assertEqual(self.store.path_for("abc"), self.root / "abc.txt")

    def test_write_creates_directory_and_file(self) -> None:
        self.store.write("abc", "note")
        self.assertEqual((self.root / "abc.txt").read_text(encoding="utf-8"), "note")
        self.assertTrue(self.store.exists("abc"))

    def test_write_overwrites(self) -> None:
        self.store.write("abc", "first")
        self.store.write("abc", "second")
        self.assertEqual(self.store.read("abc"), "second")

    def test_written_file_is_0644(self) -> None:
        self.store.write("abc", "note")
        mode = stat.S_IMODE((self.root / "abc.txt").stat().st_mode)
        self.assertEqual(mode, 0o644)

    def test_overwritten_file_keeps_0644(self) -> None:
        self.store.write("abc", "first")
        self.store.write("abc", "second")
        mode = stat.S_IMODE(self.store.path_for("abc").stat().st_mode)
        self.assertEqual(mode, 0o644)

    def test_write_leaves_no_temp_files(self) -> None:
        self.store.write("abc", "note")
        self.assertEqual([p.name for p in self.root.iterdir()], ["abc.txt"])

    def test_failed_write_keeps_previous_content(self) -> None:
        self.store.write("abc", "keep")
        with patch("userhub.core.artifacts.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(OSError):
                self.store.write("abc", "lost")
        self.assertEqual(self.store.read("abc"), "keep")
        self.assertEqual(self.store.list_ids(), ["abc"])

    def test_read_missing_returns_none(self) -> None:
        self.assertIsNone(self.store.read("nope"))

    def test_delete(self) -> None:
        self.store.write("abc", "note")
        self.assertTrue(self.store.delete("abc"))
        self.assertFalse(self.store.exists("abc"))

    def test_delete_missing_is_not_an_error(self) -> None:
        self.assertFalse(self.store.delete("nope"))

    def test_list_ids(self) -> None:
        self.assertEqual(self.store.list_ids(), [])
        self.store.write("b", "")
        self.store.write("a", "")
        self.assertEqual(self.store.list_ids(), ["a", "b"])

    def test_empty_data_is_stored(self) -> None:
        self.store.write("abc", "")
        self.assertTrue(self.store.exists("abc"))
        self.assertEqual(self.store.read("abc"), "")


if __name__ == "__main__":
    unittest.main()
