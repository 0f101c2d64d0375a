#!/usr/bin/env python3
"""
Unit tests for the loader's debug trace: emitted only when enabled, and
never changing what gets built.
"""

import os
import sys
import unittest
from unittest import mock

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from rtnet.back_end.serialization import parse_json
from rtnet.util import debug as debug_module
from rtnet.util.debug import debug_print


DOC = {"in_shape": [None, 4], "layers": [
    {"type": "dense", "shape": [None, 8],
     "weights": [[[0.0] * 8 for _ in range(4)], [0.0] * 8], "activation": "tanh"},
    {"type": "gru", "shape": [None, 8], "weights": []},
    {"type": "lstm", "shape": [None, 2], "activation": "relu",
     "weights": [[[0.0] * 8 for _ in range(8)], [[0.0] * 8 for _ in range(2)], [0.0] * 8]},
]}


class TestDebugTrace(unittest.TestCase):

    def test_trace_lines(self):
        with self.assertLogs("rtnet.debug", level="DEBUG") as logs:
            parse_json(DOC, debug=True)
        messages = [record.getMessage() for record in logs.records]
        self.assertEqual(messages[:5], [
            "# dimensions: 4",
            "Layer: dense",
            "  Dims: 8",
            "  activation: tanh",
            "Layer: gru",
        ])
        self.assertIn("  skipping unknown layer type: gru", messages)
        self.assertIn("  ignoring activation on lstm layer: relu", messages)

    def test_disabled_trace_emits_nothing(self):
        with mock.patch.object(debug_module.logger, "debug") as emit:
            parse_json(DOC)
            debug_print("hidden", False)
        emit.assert_not_called()

    def test_trace_does_not_change_result(self):
        with self.assertLogs("rtnet.debug", level="DEBUG"):
            traced = parse_json(DOC, debug=True)
        plain = parse_json(DOC)
        self.assertEqual([repr(l) for l in traced.layers], [repr(l) for l in plain.layers])


if __name__ == "__main__":
    unittest.main()
