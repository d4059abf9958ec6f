import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QApplication

import config_persistence
import main
from config import Config
from logging_utils import get_log_level, set_log_level
from patch_loader import PatchLoadError, create_device, parse_patch_export

_app = QApplication.instance() or QApplication([])


def _export():
    return parse_patch_export({
        "desc": {
            "meta": {"filename": "noise", "rnboversion": "1.3.4"},
            "parameters": [
                {"paramId": "onoff", "name": "On", "minimum": 0, "maximum": 1, "steps": 2, "initialValue": 0},
                {"paramId": "gain", "name": "Gain", "minimum": 0, "maximum": 1, "initialValue": 0.5},
            ],
        },
        "presets": [
            {"name": "Loud", "preset": {"onoff": {"value": 1}, "gain": {"value": 0.9}}},
        ],
    })


class TestPatchPanelWindow(unittest.TestCase):
    def setUp(self):
        self.window = main.PatchPanelWindow(Config())

    def test_attach_device(self):
        export = _export()
        device = create_device(export)

        panel = self.window.attach_device(device, export)

        self.assertEqual(self.window.title_label.text(), "noise (v1.3.4)")
        self.assertIsNone(self.window.no_param_label)
        self.assertEqual(panel.order, ["onoff", "gain"])
        self.assertFalse(self.window.preset_combo.isHidden())
        self.assertEqual(self.window.preset_combo.count(), 2)

    def test_preset_updates_widgets(self):
        export = _export()
        device = create_device(export)
        panel = self.window.attach_device(device, export)

        self.window.preset_combo.setCurrentIndex(1)

        self.assertEqual(device.get_parameter("onoff").value, 1)
        self.assertTrue(panel.registry.get("onoff").view.is_on())
        self.assertAlmostEqual(panel.registry.get("gain").view.display_value(), 0.9, places=6)

    def test_no_presets_hides_selector(self):
        export = _export()
        export.presets = []
        self.window.attach_device(create_device(export), export)
        self.assertTrue(self.window.preset_combo.isHidden())

    def test_attach_twice_rejected(self):
        export = _export()
        self.window.attach_device(create_device(export), export)
        with self.assertRaises(RuntimeError):
            self.window.attach_device(create_device(export), export)

    def test_load_error_banner(self):
        self.window.show_load_error(PatchLoadError("Could not read export.", path="export/patch.export.json"))
        self.assertFalse(self.window.error_banner.isHidden())
        self.assertIn("Couldn't load patcher export bundle", self.window.error_banner.text())
        self.assertIn("export/patch.export.json", self.window.error_banner.text())

    def test_close_detaches_and_saves(self):
        export = _export()
        device = create_device(export)
        panel = self.window.attach_device(device, export)

        with mock.patch.object(main, "save_config", return_value=True) as save:
            self.window.closeEvent(QCloseEvent())

        save.assert_called_once_with(self.window.config)
        self.assertFalse(panel.is_live)


    def test_runtime_log_level_not_saved(self):
        set_log_level("DEBUG")
        try:
            with tempfile.TemporaryDirectory() as tmpdir:
                cfg_file = Path(tmpdir) / "config.json"
                with mock.patch.object(config_persistence, "get_config_file", return_value=cfg_file):
                    self.window.closeEvent(QCloseEvent())
                with open(cfg_file, "r", encoding="utf-8") as f:
                    saved = json.load(f)
            self.assertEqual(get_log_level(), "DEBUG")
            self.assertEqual(saved["log_level"], "INFO")
        finally:
            set_log_level("INFO")


if __name__ == "__main__":
    unittest.main()
