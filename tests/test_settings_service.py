import unittest
from pathlib import Path
import tempfile

from backend.services.settings_service import (
    DEFAULT_SETTINGS,
    AppSettings,
    load_settings,
    settings_as_dict,
)


class SettingsServiceTests(unittest.TestCase):
    def test_missing_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            loaded, meta = load_settings(Path(tmp) / "settings.json")
            self.assertEqual(loaded, DEFAULT_SETTINGS)
            self.assertEqual(meta["source"], "defaults")
            self.assertIsNone(meta["error"])

    def test_file_values_override_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "settings.json"
            p.write_text('{"title": "Club Night", "log_level": "debug", "history_rounds": 5}', encoding="utf-8")

            loaded, meta = load_settings(p)
            self.assertEqual(meta["source"], "file")
            self.assertEqual(loaded.title, "Club Night")
            self.assertEqual(loaded.log_level, "DEBUG")
            self.assertEqual(loaded.history_rounds, 5)

    def test_invalid_values_fall_back(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "settings.json"
            p.write_text('{"log_level": "chatty"}', encoding="utf-8")

            loaded, meta = load_settings(p)
            self.assertEqual(loaded, DEFAULT_SETTINGS)
            self.assertTrue(meta["error"].startswith("validation_error"))

    def test_history_cannot_drop_below_recency_window(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "settings.json"
            p.write_text('{"history_rounds": 1}', encoding="utf-8")
            loaded, meta = load_settings(p)
            self.assertEqual(loaded.history_rounds, 3)
            self.assertEqual(meta["source"], "defaults")

    def test_broken_json_reports_read_error(self):
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "settings.json"
            p.write_text("{", encoding="utf-8")
            _, meta = load_settings(p)
            self.assertTrue(meta["error"].startswith("read_error"))

    def test_settings_as_dict_is_json_friendly(self):
        out = settings_as_dict(AppSettings(session_file=Path("data/session.json")))
        self.assertEqual(out["session_file"], str(Path("data/session.json")))


if __name__ == "__main__":
    unittest.main()
