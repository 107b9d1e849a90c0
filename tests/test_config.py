"""
Unit tests for settings resolution.

Order: defaults <- JSON config file <- environment <- explicit overrides.
"""

import json
import tempfile
import unittest
from pathlib import Path

from coursecatalog.config import Settings, load_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = load_settings(env={})
        self.assertEqual(s, Settings())
        self.assertEqual(s.effective_notes_dir, "Notes")

    def test_config_file_then_env(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "config.json"
            p.write_text(
                json.dumps({"courses_root": "/data/Notes", "branch": "dev", "unknown": "ignored"}),
                encoding="utf-8",
            )
            s = load_settings(p, env={"COURSECATALOG_BRANCH": "release"})
            self.assertEqual(s.courses_root, "/data/Notes")
            self.assertEqual(s.branch, "release")
            self.assertEqual(s.effective_notes_dir, "Notes")

    def test_config_path_from_env(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "config.json"
            p.write_text(json.dumps({"repo": "me/notes"}), encoding="utf-8")
            s = load_settings(env={"COURSECATALOG_CONFIG": str(p)})
            self.assertEqual(s.repo, "me/notes")

    def test_broken_config_file_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "config.json"
            p.write_text("[1, 2", encoding="utf-8")
            self.assertEqual(load_settings(p, env={}), Settings())

    def test_invalid_policy_falls_back(self) -> None:
        s = load_settings(env={"COURSECATALOG_UNKNOWN_NAME": "guess"})
        self.assertEqual(s.unknown_name_policy, "placeholder")

    def test_updated_ignores_none(self) -> None:
        s = Settings().updated(courses_root="X", output_path=None, unknown_name_policy="folder")
        self.assertEqual(s.courses_root, "X")
        self.assertEqual(s.output_path, "courses.json")
        self.assertEqual(s.unknown_name_policy, "folder")
        self.assertEqual(s.notes_dir, "")


if __name__ == "__main__":
    unittest.main()
