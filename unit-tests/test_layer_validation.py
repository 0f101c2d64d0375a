#!/usr/bin/env python3
"""
Unit tests for the opt-in layer validators and the debug trace they emit.
"""

import os
import sys
import unittest
from unittest import mock

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from rtnet.back_end.core import DenseLayer, LSTMLayer, Model, ReLuActivation, TanhActivation
from rtnet.back_end.layer_validation import (
    check_activation, check_chain, check_dense, check_layer, check_lstm, check_model,
)
from rtnet.back_end.serialization import parse_json
from rtnet.util import debug as debug_module


def dense_entry(in_size, out_size, activation=None):
    entry = {
        "type": "dense",
        "shape": [None, out_size],
        "weights": [[[0.0] * out_size for _ in range(in_size)], [0.0] * out_size],
    }
    if activation:
        entry["activation"] = activation
    return entry


class TestLayerChecks(unittest.TestCase):

    def test_dense_agrees(self):
        self.assertTrue(check_dense(DenseLayer(4, 8), "dense", 8))
        self.assertTrue(check_dense(DenseLayer(4, 8), "time-distributed-dense", 8))

    def test_dense_wrong_type(self):
        with self.assertLogs("rtnet.debug", level="DEBUG") as logs:
            self.assertFalse(check_dense(DenseLayer(4, 8), "lstm", 8, debug=True))
        self.assertIn("Wrong layer type! Expected: Dense", logs.output[0])

    def test_dense_wrong_size(self):
        with self.assertLogs("rtnet.debug", level="DEBUG") as logs:
            self.assertFalse(check_dense(DenseLayer(4, 8), "dense", 7, debug=True))
        self.assertIn("Wrong layer size! Expected: 8", logs.output[0])

    def test_lstm(self):
        lstm = LSTMLayer(2, 3)
        self.assertTrue(check_lstm(lstm, "lstm", 3))
        self.assertFalse(check_lstm(lstm, "dense", 3))
        self.assertFalse(check_lstm(lstm, "lstm", 4))

    def test_activation(self):
        act = TanhActivation(5)
        self.assertTrue(check_activation(act, "tanh", 5))
        self.assertFalse(check_activation(act, "relu", 5))
        with self.assertLogs("rtnet.debug", level="DEBUG") as logs:
            self.assertFalse(check_activation(act, "tanh", 4, debug=True))
        self.assertIn("Wrong layer size! Expected: 5", logs.output[0])

    def test_check_layer_dispatch(self):
        self.assertTrue(check_layer(DenseLayer(2, 3), "dense", 3))
        self.assertTrue(check_layer(LSTMLayer(2, 3), "lstm", 3))
        self.assertTrue(check_layer(ReLuActivation(3), "relu", 3))
        self.assertFalse(check_layer(ReLuActivation(3), "dense", 3))

    def test_checks_are_silent_without_debug(self):
        with mock.patch.object(debug_module.logger, "debug") as emit:
            self.assertFalse(check_dense(DenseLayer(4, 8), "dense", 2))
        emit.assert_not_called()


class TestModelChecks(unittest.TestCase):

    def setUp(self):
        self.doc = {"in_shape": [4], "layers": [
            dense_entry(4, 8, "tanh"),
            {"type": "activation", "shape": [8], "activation": "relu"},
            {"type": "mystery", "shape": [8]},
            dense_entry(8, 2),
        ]}

    def test_loaded_model_matches_document(self):
        model = parse_json(self.doc)
        self.assertTrue(check_model(model, self.doc))
        self.assertTrue(check_chain(model))

    def test_document_with_different_width(self):
        model = parse_json(self.doc)
        other = dict(self.doc)
        other["layers"] = [dense_entry(4, 9, "tanh")] + self.doc["layers"][1:]
        self.assertFalse(check_model(model, other))

    def test_extra_layers_in_model(self):
        model = parse_json(self.doc)
        shorter = {"in_shape": [4], "layers": self.doc["layers"][:1]}
        self.assertFalse(check_model(model, shorter))

    def test_broken_chain(self):
        model = Model(4)
        model.add_layer(DenseLayer(4, 8))
        model.add_layer(DenseLayer(7, 2))
        with self.assertLogs("rtnet.debug", level="DEBUG") as logs:
            self.assertFalse(check_chain(model, debug=True))
        self.assertIn("Expected: 8", logs.output[0])

    def test_document_that_is_not_an_object(self):
        model = parse_json(self.doc)
        with self.assertLogs("rtnet.debug", level="DEBUG") as logs:
            self.assertFalse(check_model(model, ["not", "a", "document"], debug=True))
        self.assertIn("not an object", logs.output[0])
        self.assertFalse(check_model(model, {"in_shape": [4], "layers": "dense"}))

    def test_validators_do_not_modify_model(self):
        model = parse_json(self.doc)
        before = model.layers
        check_model(model, {"in_shape": [4], "layers": []})
        self.assertEqual(model.layers, before)


if __name__ == "__main__":
    unittest.main()
