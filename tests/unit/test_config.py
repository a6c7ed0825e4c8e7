import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from vbcli_core.config import AppConfig, load_config


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.api.board_url, "https://cloud.vestaboard.com")
            self.assertEqual(cfg.api.timeout_s, 15.0)
            self.assertEqual(cfg.compose.model, "flagship")

    def test_reads_user_edited_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {"api": {"timeout_s": 30}, "compose": {"model": "note"}}
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.compose.model, "note")
            self.assertEqual(cfg.api.timeout_s, 30.0)
            self.assertEqual(cfg.api.board_url, "https://cloud.vestaboard.com")

    def test_normalizes_bad_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "api": {"timeout_s": 9999, "compose_url": ""},
                "compose": {"model": "tablet", "align": "TOP", "justify": "sideways"},
                "unknown": {"x": 1},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.api.timeout_s, 120.0)
            self.assertEqual(cfg.api.compose_url, "https://vbml.vestaboard.com")
            self.assertEqual(cfg.compose.model, "flagship")
            self.assertEqual(cfg.compose.align, "top")
            self.assertEqual(cfg.compose.justify, "center")

    def test_corrupt_file_yields_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())


if __name__ == "__main__":
    unittest.main()
