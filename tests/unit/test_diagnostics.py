import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from vbcli_core.config import AppConfig
from vbcli_core.diagnostics import build_doctor_payload, redact


class DiagnosticsTests(unittest.TestCase):
    def test_redact_nested(self):
        data = {"api": {"token": "abc", "url": "x"}, "items": [{"password": "p"}]}
        out = redact(data)
        self.assertEqual(out["api"]["token"], "***REDACTED***")
        self.assertEqual(out["api"]["url"], "x")
        self.assertEqual(out["items"][0]["password"], "***REDACTED***")

    def test_doctor_reports_token_presence_only(self):
        with tempfile.TemporaryDirectory() as tmp:
            env = {"VBCLI_CONFIG_DIR": tmp, "VESTABOARD_TOKEN": "secret-value"}
            with patch.dict(os.environ, env):
                payload = build_doctor_payload(AppConfig())
            self.assertTrue(payload["token_present"])
            self.assertNotIn("secret-value", repr(payload))
            self.assertEqual(payload["config_path"], str(Path(tmp) / "config.json"))
            self.assertEqual(payload["config"]["compose"]["model"], "flagship")


if __name__ == "__main__":
    unittest.main()
