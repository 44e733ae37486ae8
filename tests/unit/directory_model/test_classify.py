"""Tests for per-entry classification and icon rules."""

from __future__ import annotations

import unittest
from pathlib import PurePosixPath

from fake_fs import FakeFileSystem

from lazydir.config import FileDialogConfig
from lazydir.directory_model import DirectoryEntry, Metadata, classify, gen_path_icon


def _file_system() -> FakeFileSystem:
    return FakeFileSystem(
        {
            "/d": "dir",
            "/d/sub": "dir",
            "/d/file.py": "file",
            "/d/fifo": "other",
            "/d/.env": "file",
        }
    )


class ClassifyTests(unittest.TestCase):
    def test_every_path_gets_exactly_one_kind(self) -> None:
        file_system = _file_system()
        file_system.broken.add(PurePosixPath("/d/locked"))
        config = FileDialogConfig()
        expected = {
            "/d/sub": (True, False),
            "/d/file.py": (False, False),
            "/d/fifo": (False, True),
            "/d/vanished": (False, True),
            "/d/locked": (False, True),
        }
        for raw_path, (is_dir, is_system_file) in expected.items():
            with self.subTest(path=raw_path):
                result = classify(config, PurePosixPath(raw_path), file_system)
                self.assertEqual(result.is_dir, is_dir)
                self.assertEqual(result.is_system_file, is_system_file)
                self.assertFalse(result.is_dir and result.is_system_file)

    def test_probe_errors_degrade_to_system_file_with_empty_metadata(self) -> None:
        file_system = _file_system()
        locked = PurePosixPath("/d/file.py")
        file_system.broken.add(locked)

        with self.assertLogs("lazydir.directory_model.classify", level="DEBUG") as captured:
            result = classify(FileDialogConfig(), locked, file_system)

        self.assertEqual(len(captured.records), 4)
        self.assertTrue(all(record.levelname == "DEBUG" for record in captured.records))
        self.assertIn("is_dir probe failed for /d/file.py", captured.output[0])

        self.assertTrue(result.is_system_file)
        self.assertFalse(result.is_hidden)
        self.assertEqual(result.metadata, Metadata())

    def test_hidden_flag_comes_from_file_system(self) -> None:
        result = classify(FileDialogConfig(), PurePosixPath("/d/.env"), _file_system())
        self.assertTrue(result.is_hidden)

    def test_each_question_is_asked_once(self) -> None:
        file_system = _file_system()
        path = PurePosixPath("/d/file.py")

        entry = DirectoryEntry.from_path(FileDialogConfig(), path, file_system)
        entry.selected = True
        _ = (entry.is_dir, entry.is_file, entry.is_hidden, entry.icon, entry.metadata)

        probes = [name for name, probed in file_system.probe_calls if probed == path]
        self.assertEqual(sorted(probes), ["is_dir", "is_file", "is_path_hidden", "metadata"])
        self.assertEqual(entry.metadata.size, 10)


class IconTests(unittest.TestCase):
    def test_defaults_depend_on_kind(self) -> None:
        config = FileDialogConfig(default_folder_icon="D", default_file_icon="F")
        self.assertEqual(gen_path_icon(config, PurePosixPath("/d/sub"), is_dir=True), "D")
        self.assertEqual(gen_path_icon(config, PurePosixPath("/d/fifo"), is_dir=False), "F")

    def test_first_matching_rule_wins(self) -> None:
        config = (
            FileDialogConfig()
            .set_file_icon("PY", lambda path: path.suffix == ".py")
            .set_file_icon("ANY", lambda path: True)
        )
        self.assertEqual(gen_path_icon(config, PurePosixPath("/d/file.py"), is_dir=False), "PY")
        self.assertEqual(gen_path_icon(config, PurePosixPath("/d/sub"), is_dir=True), "ANY")

    def test_entry_uses_configured_icon(self) -> None:
        config = FileDialogConfig().set_file_icon("PY", lambda path: path.suffix == ".py")
        entry = DirectoryEntry.from_path(config, PurePosixPath("/d/file.py"), _file_system())
        self.assertEqual(entry.icon, "PY")


if __name__ == "__main__":
    unittest.main()
