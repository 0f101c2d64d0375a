#!/usr/bin/env python3
"""
Unit tests for loader options: YAML/JSON loading, validation and overrides.
"""

import json
import os
import sys
import tempfile
import unittest

import torch
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from rtnet.util.config import ConfigValidationError, LoaderOptions, load_loader_config, options_from_dict
from rtnet.util.device_manager import resolve_device, resolve_dtype


class TestLoaderOptions(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, name, text):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_defaults_are_permissive(self):
        options = LoaderOptions()
        self.assertFalse(options.strict)
        self.assertFalse(options.debug)
        self.assertEqual(options.torch_dtype, torch.get_default_dtype())

    def test_yaml_loader_section(self):
        path = self._write("loader.yaml", "loader:\n  strict: true\n  dtype: float64\n")
        options = load_loader_config(path)
        self.assertTrue(options.strict)
        self.assertEqual(options.torch_dtype, torch.float64)

    def test_json_config(self):
        path = self._write("loader.json", json.dumps({"debug": True}))
        self.assertTrue(load_loader_config(path).debug)

    def test_unknown_key(self):
        path = self._write("bad.yaml", "strictness: true\n")
        with self.assertRaises(ConfigValidationError) as ctx:
            load_loader_config(path)
        self.assertEqual(ctx.exception.field, "strictness")

    def test_bad_values(self):
        with self.assertRaises(ConfigValidationError):
            options_from_dict({"strict": "yes"})
        with self.assertRaises(ConfigValidationError):
            options_from_dict({"dtype": "int8"})

    def test_malformed_files_keep_cause(self):
        path = self._write("broken.json", "{strict: ")
        with self.assertRaises(ConfigValidationError) as ctx:
            load_loader_config(path)
        self.assertIsInstance(ctx.exception.__cause__, json.JSONDecodeError)
        path = self._write("broken.yaml", "loader: [strict\n")
        with self.assertRaises(ConfigValidationError) as ctx:
            load_loader_config(path)
        self.assertEqual(ctx.exception.field, "yaml_format")
        self.assertIsNotNone(ctx.exception.__cause__)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_loader_config(os.path.join(self.tmp.name, "missing.yaml"))

    def test_overrides_skip_none(self):
        base = LoaderOptions(strict=True)
        self.assertIs(base.with_overrides(strict=None), base)
        self.assertFalse(base.with_overrides(strict=False).strict)


class TestDeviceManager(unittest.TestCase):

    def test_resolve_dtype(self):
        self.assertEqual(resolve_dtype("float32"), torch.float32)
        self.assertEqual(resolve_dtype("torch.float64"), torch.float64)
        self.assertEqual(resolve_dtype(torch.float64), torch.float64)
        with self.assertRaises(ValueError):
            resolve_dtype(torch.int32)

    def test_resolve_cpu(self):
        self.assertEqual(resolve_device("cpu"), torch.device("cpu"))


if __name__ == "__main__":
    unittest.main()
