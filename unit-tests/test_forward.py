#!/usr/bin/env python3
"""
Unit tests for running a loaded model: dense affine transform, activations,
LSTM state handling and Model bookkeeping.
"""

import os
import sys
import unittest

import torch
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from rtnet.back_end.core import (
    DenseLayer, ELuActivation, Model, ReLuActivation, SigmoidActivation, SoftmaxActivation, TanhActivation,
)
from rtnet.back_end.serialization import parse_json


class TestActivations(unittest.TestCase):

    def setUp(self):
        self.x = torch.tensor([-1.0, 0.0, 2.0])

    def test_pointwise(self):
        self.assertTrue(torch.allclose(TanhActivation(3)(self.x), torch.tanh(self.x)))
        self.assertTrue(torch.allclose(ReLuActivation(3)(self.x), torch.tensor([0.0, 0.0, 2.0])))
        self.assertTrue(torch.allclose(SigmoidActivation(3)(self.x), torch.sigmoid(self.x)))
        expected_elu = torch.tensor([torch.exp(torch.tensor(-1.0)).item() - 1.0, 0.0, 2.0])
        self.assertTrue(torch.allclose(ELuActivation(3)(self.x), expected_elu))

    def test_softmax_sums_to_one(self):
        y = SoftmaxActivation(3)(self.x)
        self.assertAlmostEqual(y.sum().item(), 1.0, places=6)

    def test_names(self):
        names = [cls(2).get_name() for cls in
                 (TanhActivation, ReLuActivation, SigmoidActivation, SoftmaxActivation, ELuActivation)]
        self.assertEqual(names, ["tanh", "relu", "sigmoid", "softmax", "elu"])


class TestModelForward(unittest.TestCase):

    def test_dense_matches_serialized_layout(self):
        # y[o] = sum_i x[i] * kernel[i][o] + b[o]
        kernel = [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
        doc = {"in_shape": [3], "layers": [
            {"type": "dense", "shape": [2], "weights": [kernel, [0.5, -0.5]], "activation": "relu"},
        ]}
        model = parse_json(doc)
        y = model.forward(torch.tensor([1.0, 0.0, -1.0]))
        self.assertTrue(torch.allclose(y, torch.tensor([0.0, 0.0])))
        y = model.forward(torch.tensor([1.0, 1.0, 1.0]))
        self.assertTrue(torch.allclose(y, torch.tensor([9.5, 11.5])))

    def test_lstm_state_and_reset(self):
        # zero weights, cell-gate bias 1: c = 0.5 * tanh(1) after one step
        bias = [0.0, 0.0, 1.0, 0.0]
        doc = {"in_shape": [1], "layers": [
            {"type": "lstm", "shape": [1], "weights": [[[0.0] * 4], [[0.0] * 4], bias]},
        ]}
        model = parse_json(doc)
        x = torch.tensor([0.3])

        c1 = 0.5 * torch.tanh(torch.tensor(1.0))
        h1 = 0.5 * torch.tanh(c1)
        self.assertTrue(torch.allclose(model.forward(x), h1.reshape(1)))

        c2 = 0.5 * c1 + 0.5 * torch.tanh(torch.tensor(1.0))
        h2 = 0.5 * torch.tanh(c2)
        self.assertTrue(torch.allclose(model.forward(x), h2.reshape(1)))

        model.reset()
        self.assertTrue(torch.allclose(model.forward(x), h1.reshape(1)))

    def test_wrong_input_width(self):
        model = Model(3)
        with self.assertRaises(ValueError):
            model.forward(torch.zeros(2))


class TestModelOwnership(unittest.TestCase):

    def test_layers_is_read_only_snapshot(self):
        model = Model(2)
        model.add_layer(TanhActivation(2))
        layers = model.layers
        self.assertIsInstance(layers, tuple)
        self.assertEqual(len(model), 1)

    def test_same_layer_cannot_be_added_twice(self):
        model = Model(2)
        layer = DenseLayer(2, 2)
        model.add_layer(layer)
        with self.assertRaises(ValueError):
            model.add_layer(layer)

    def test_next_in_size(self):
        model = Model(4)
        self.assertEqual(model.get_next_in_size(), 4)
        model.add_layer(DenseLayer(4, 6))
        self.assertEqual(model.get_next_in_size(), 6)


if __name__ == "__main__":
    unittest.main()
