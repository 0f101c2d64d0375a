#===- rtnet/back_end/__init__.py - RTNet Model Loading Backend ---------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Layer and Model data structures, weight reshaping, JSON loading and the
#   opt-in layer validators.
#
#===---------------------------------------------------------------------===#

"""
Example usage:
    >>> from rtnet.back_end import load_model_from_file, check_model
    >>> model = load_model_from_file("model.json", strict=True, debug=True)
    >>> y = model.forward(torch.zeros(model.in_size))
"""

# Core data structures
from .core import (
    Layer, DenseLayer, LSTMLayer, Activation,
    TanhActivation, ReLuActivation, SigmoidActivation, SoftmaxActivation, ELuActivation,
    Model,
)

# Errors
from .errors import ModelLoadError, StructureError, ShapeMismatch, UnknownLayerType, UnsupportedActivation

# Schema
from .layer_schema import LayerKind, ActivationKind, REGISTRY

# Weight reshaping
from .weights import load_dense, load_lstm, create_dense, create_lstm, to_matrix, to_vector

# Loading / writing
from .serialization import (
    LayerSpec, ModelSpec, LayerFactory, ModelSerializer, layer_dims,
    parse_json, load_model, load_model_from_file, load_model_from_string,
    save_model_to_file, save_model_to_string,
)

# Validation
from .layer_validation import check_dense, check_lstm, check_activation, check_layer, check_chain, check_model

__all__ = [
    # Core
    'Layer', 'DenseLayer', 'LSTMLayer', 'Activation',
    'TanhActivation', 'ReLuActivation', 'SigmoidActivation', 'SoftmaxActivation', 'ELuActivation',
    'Model',
    # Errors
    'ModelLoadError', 'StructureError', 'ShapeMismatch', 'UnknownLayerType', 'UnsupportedActivation',
    # Schema
    'LayerKind', 'ActivationKind', 'REGISTRY',
    # Weights
    'load_dense', 'load_lstm', 'create_dense', 'create_lstm', 'to_matrix', 'to_vector',
    # Serialization
    'LayerSpec', 'ModelSpec', 'LayerFactory', 'ModelSerializer', 'layer_dims',
    'parse_json', 'load_model', 'load_model_from_file', 'load_model_from_string',
    'save_model_to_file', 'save_model_to_string',
    # Validation
    'check_dense', 'check_lstm', 'check_activation', 'check_layer', 'check_chain', 'check_model',
]
