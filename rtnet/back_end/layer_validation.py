# layer_validation.py
"""
Opt-in checks that a constructed layer matches a declared type and width.

Nothing in the loader calls these. Every check returns a bool, reports the
expected value on the debug trace when it disagrees, and never raises or
touches the layer.
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping

from rtnet.back_end.core import Activation, DenseLayer, LSTMLayer, Layer, Model
from rtnet.back_end.layer_schema import ActivationKind, LayerKind
from rtnet.util.debug import debug_print


def _layer_dims(shape: Any) -> int:
    if not isinstance(shape, (list, tuple)) or not shape:
        return -1
    try:
        return int(shape[2]) * int(shape[3]) if len(shape) == 4 else int(shape[-1])
    except (TypeError, ValueError):
        return -1


def check_dense(dense: Layer, type_tag: str, layer_dims: int, debug: bool = False) -> bool:
    """Checks that a Dense layer has the given type tag and output width."""
    kind = LayerKind.from_tag(type_tag)
    if kind is None or not kind.is_dense or not isinstance(dense, DenseLayer):
        debug_print("Wrong layer type! Expected: Dense", debug)
        return False

    if layer_dims != dense.out_size:
        debug_print(f"Wrong layer size! Expected: {dense.out_size}", debug)
        return False

    return True


def check_lstm(lstm: Layer, type_tag: str, layer_dims: int, debug: bool = False) -> bool:
    """Checks that an LSTM layer has the given type tag and output width."""
    if type_tag != LayerKind.LSTM.value or not isinstance(lstm, LSTMLayer):
        debug_print("Wrong layer type! Expected: LSTM", debug)
        return False

    if layer_dims != lstm.out_size:
        debug_print(f"Wrong layer size! Expected: {lstm.out_size}", debug)
        return False

    return True


def check_activation(act_layer: Layer, activation_type: str, dims: int, debug: bool = False) -> bool:
    """Checks that an activation layer has the given name and width."""
    if dims != act_layer.out_size:
        debug_print(f"Wrong layer size! Expected: {act_layer.out_size}", debug)
        return False

    if activation_type != act_layer.get_name():
        debug_print(f"Wrong layer type! Expected: {act_layer.get_name()}", debug)
        return False

    return True


def check_layer(layer: Layer, type_tag: str, dims: int, debug: bool = False) -> bool:
    """
    Dispatch to the check matching ``layer``'s variant.

    For activation layers ``type_tag`` is the activation name ("tanh", ...).
    """
    if isinstance(layer, DenseLayer):
        return check_dense(layer, type_tag, dims, debug)
    if isinstance(layer, LSTMLayer):
        return check_lstm(layer, type_tag, dims, debug)
    if isinstance(layer, Activation):
        return check_activation(layer, type_tag, dims, debug)
    debug_print(f"Unknown layer variant {type(layer).__name__}", debug)
    return False


def check_chain(model: Model, debug: bool = False) -> bool:
    """Checks that each layer's input width equals the previous layer's output width."""
    width = model.in_size
    for i, layer in enumerate(model.layers):
        if layer.in_size != width:
            debug_print(f"Layer {i} ({layer.get_name()}): wrong input size! Expected: {width}", debug)
            return False
        width = layer.out_size
    return True


def _expected_layers(entry: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """(type_tag, dims) pairs a document entry should have produced, in order."""
    tag = entry.get("type")
    dims = _layer_dims(entry.get("shape"))
    activation = entry.get("activation") or ""
    kind = LayerKind.from_tag(tag) if isinstance(tag, str) else None

    if kind is None:
        return []
    if kind == LayerKind.ACTIVATION:
        if ActivationKind.from_name(activation) is None:
            return []
        return [{"tag": activation, "dims": None}]

    expected = [{"tag": tag, "dims": dims}]
    if kind.is_dense and ActivationKind.from_name(activation) is not None:
        expected.append({"tag": activation, "dims": dims})
    return expected


def check_model(model: Model, document: Mapping[str, Any], debug: bool = False) -> bool:
    """
    Walk a document's layer descriptions alongside a loaded model.

    Standalone activation entries are checked against the running width,
    since that is the width the loader gives them.
    """
    if not isinstance(document, Mapping) or not isinstance(document.get("layers", []), list):
        debug_print("Model description is not an object with a layer list", debug)
        return False

    layers = model.layers
    pos = 0
    width = model.in_size
    for index, entry in enumerate(document.get("layers", [])):
        if not isinstance(entry, Mapping):
            debug_print(f"Layer description {index} is not an object", debug)
            return False
        for expected in _expected_layers(entry):
            if pos >= len(layers):
                debug_print(f"Missing layer for description {index}! Expected: {expected['tag']}", debug)
                return False
            dims = width if expected["dims"] is None else expected["dims"]
            if not check_layer(layers[pos], expected["tag"], dims, debug):
                return False
            width = layers[pos].out_size
            pos += 1

    if pos != len(layers):
        debug_print(f"Model has {len(layers) - pos} layer(s) not described by the document", debug)
        return False
    return check_chain(model, debug)
