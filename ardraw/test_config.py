"""
Tests for YAML configuration loading.
"""
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import yaml

from ardraw.config import CONFIG_ENV_VAR, Cfg, load_config
from ardraw.errors import ConfigError


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, data) -> Path:
        path = Path(self.tmp.name) / "config.yaml"
        path.write_text(yaml.safe_dump(data))
        return path

    def default_dict(self):
        with mock.patch.dict(os.environ, clear=False):
            os.environ.pop(CONFIG_ENV_VAR, None)
            cfg = load_config()
        return {
            "camera": vars(cfg.camera).copy(),
            "mediapipe": vars(cfg.mediapipe).copy(),
            "brush": vars(cfg.brush).copy(),
            "display": vars(cfg.display).copy(),
            "capture": vars(cfg.capture).copy(),
        }

    def test_packaged_defaults(self):
        """The shipped YAML matches the dataclass defaults."""
        with mock.patch.dict(os.environ, clear=False):
            os.environ.pop(CONFIG_ENV_VAR, None)
            cfg = load_config()

        self.assertEqual(cfg, Cfg())
        self.assertEqual(cfg.brush.color, "#00FFFF")
        self.assertEqual(cfg.brush.width, 4)
        self.assertEqual(len(cfg.brush.palette), 8)
        self.assertEqual(cfg.brush.sizes, [2, 4, 8, 12, 16])
        self.assertEqual((cfg.camera.width, cfg.camera.height), (1280, 720))
        self.assertEqual(cfg.mediapipe.max_num_hands, 2)

    def test_explicit_path(self):
        data = self.default_dict()
        data["display"]["mirror"] = False
        data["capture"]["directory"] = "out"

        cfg = load_config(self.write(data))
        self.assertFalse(cfg.display.mirror)
        self.assertEqual(cfg.capture.directory, "out")

    def test_env_var_override(self):
        data = self.default_dict()
        data["camera"]["index"] = 3
        path = self.write(data)

        with mock.patch.dict(os.environ, {CONFIG_ENV_VAR: str(path)}):
            cfg = load_config()
        self.assertEqual(cfg.camera.index, 3)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(Path(self.tmp.name) / "missing.yaml")

    def test_missing_section(self):
        data = self.default_dict()
        del data["brush"]
        with self.assertRaises(ConfigError):
            load_config(self.write(data))

    def test_unknown_key(self):
        data = self.default_dict()
        data["camera"]["zoom"] = 2
        with self.assertRaises(ConfigError):
            load_config(self.write(data))

    def test_invalid_brush_width(self):
        data = self.default_dict()
        data["brush"]["width"] = 0
        with self.assertRaises(ConfigError):
            load_config(self.write(data))


if __name__ == '__main__':
    unittest.main()
