from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from movingimages_core.config import SmigConfig, load_smig_config


class SmigConfigTests(unittest.TestCase):
    def test_defaults_without_file(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            config = load_smig_config()
        self.assertEqual(config, SmigConfig())

    def test_reads_smig_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "movingimages.toml"
            path.write_text(
                '[smig]\nexecutable = "/opt/bin/smig"\ntimeout_s = 30\njsonfile_threshold = 1024\n',
                encoding="utf-8",
            )
            with mock.patch.dict(os.environ, {}, clear=True):
                config = load_smig_config(path)
        self.assertEqual(config, SmigConfig(executable="/opt/bin/smig", timeout_s=30.0, jsonfile_threshold=1024))

    def test_environment_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "movingimages.toml"
            path.write_text('[smig]\nexecutable = "/opt/bin/smig"\n', encoding="utf-8")
            env = {"MOVINGIMAGES_CONFIG": str(path), "MOVINGIMAGES_SMIG": "/custom/smig"}
            with mock.patch.dict(os.environ, env, clear=True):
                config = load_smig_config()
        self.assertEqual(config.executable, "/custom/smig")

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_smig_config("/nonexistent/movingimages.toml")

    def test_invalid_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "movingimages.toml"
            path.write_text('[smig]\ntimeout_s = "soon"\n', encoding="utf-8")
            with mock.patch.dict(os.environ, {}, clear=True):
                with self.assertRaises(ValueError):
                    load_smig_config(path)
        with self.assertRaises(ValueError):
            SmigConfig(timeout_s=0)


if __name__ == "__main__":
    unittest.main()
