# particlearea/tests/test_config.py
# Unit tests for core/config.py

import unittest
import dataclasses
import json
import os
import sys
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.config import DEFAULTS, MeasurementConfig, load_config


class TestDefaults(unittest.TestCase):

    def test_reference_values(self):
        self.assertEqual(DEFAULTS.border_width, 10)
        self.assertAlmostEqual(DEFAULTS.px_per_um, 2.4)
        self.assertEqual(DEFAULTS.gaussian_k, 3)
        self.assertEqual(DEFAULTS.adaptive_block, 3)
        self.assertEqual(DEFAULTS.adaptive_c, 1)
        self.assertEqual(DEFAULTS.median_k, 3)
        self.assertEqual(DEFAULTS.pad_value, 255)
        self.assertEqual(DEFAULTS.outline_color, (0, 255, 0))
        self.assertEqual(DEFAULTS.frame_strategy, "largest")

    def test_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            DEFAULTS.border_width = 3

    def test_with_overrides_returns_new(self):
        cfg = DEFAULTS.with_overrides(border_width=4)
        self.assertEqual(cfg.border_width, 4)
        self.assertEqual(DEFAULTS.border_width, 10)


class TestValidation(unittest.TestCase):

    def test_negative_border(self):
        with self.assertRaises(ValueError):
            MeasurementConfig(border_width=-1)

    def test_zero_border_allowed(self):
        self.assertEqual(MeasurementConfig(border_width=0).border_width, 0)

    def test_non_positive_scale(self):
        with self.assertRaises(ValueError):
            MeasurementConfig(px_per_um=0)

    def test_bad_kernel(self):
        with self.assertRaises(ValueError):
            MeasurementConfig(median_k=0)

    def test_bad_pad_value(self):
        with self.assertRaises(ValueError):
            MeasurementConfig(pad_value=300)

    def test_bad_frame_strategy(self):
        with self.assertRaises(ValueError):
            MeasurementConfig(frame_strategy="smallest")


class TestFromDict(unittest.TestCase):

    def test_known_keys(self):
        cfg = MeasurementConfig.from_dict({"border_width": 5, "outline_color": [255, 0, 0]})
        self.assertEqual(cfg.border_width, 5)
        self.assertEqual(cfg.outline_color, (255, 0, 0))

    def test_unknown_key_raises(self):
        with self.assertRaises(ValueError):
            MeasurementConfig.from_dict({"borderSize": 5})

    def test_as_dict_roundtrip(self):
        self.assertEqual(MeasurementConfig.from_dict(DEFAULTS.as_dict()), DEFAULTS)


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "config.json")

    def tearDown(self):
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, obj):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(obj, f)

    def test_overrides_on_top_of_defaults(self):
        self._write({"adaptive_block": 51, "result_path": "out.json"})
        cfg = load_config(self.path)
        self.assertEqual(cfg.adaptive_block, 51)
        self.assertEqual(cfg.result_path, "out.json")
        self.assertEqual(cfg.border_width, DEFAULTS.border_width)

    def test_numeric_strings_coerced(self):
        self._write({"border_width": "10", "px_per_um": "2.4"})
        cfg = load_config(self.path)
        self.assertIsInstance(cfg.border_width, int)
        self.assertEqual(cfg.border_width, 10)
        self.assertIsInstance(cfg.px_per_um, float)

    def test_non_numeric_value_rejected(self):
        self._write({"border_width": "wide"})
        with self.assertRaises(ValueError):
            load_config(self.path)

    def test_bad_outline_color_rejected(self):
        self._write({"outline_color": "green"})
        with self.assertRaises(ValueError):
            load_config(self.path)

    def test_non_object_rejected(self):
        self._write([1, 2, 3])
        with self.assertRaises(ValueError):
            load_config(self.path)

    def test_unknown_key_rejected(self):
        self._write({"nope": 1})
        with self.assertRaises(ValueError):
            load_config(self.path)

    def test_missing_file(self):
        with self.assertRaises(OSError):
            load_config(os.path.join(self.temp_dir, "missing.json"))


if __name__ == "__main__":
    unittest.main()
