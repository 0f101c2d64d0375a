#===- rtnet/back_end/serialization.py - RTNet Model JSON Loading -------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   JSON loading of sequential models: document structure checks, type
#   dispatch to layer builders, and assembly of the owned layer sequence.
#   Also writes a Model back to the same document format.
#
#===---------------------------------------------------------------------===#

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, IO, List, Mapping, Optional, Union

import torch

from rtnet.back_end.core import (
    Activation, DenseLayer, ELuActivation, LSTMLayer, Layer, Model,
    ReLuActivation, SigmoidActivation, SoftmaxActivation, TanhActivation,
)
from rtnet.back_end.errors import StructureError, UnknownLayerType, UnsupportedActivation
from rtnet.back_end.layer_schema import ActivationKind, LayerKind, required_fields
from rtnet.back_end.weights import create_dense, create_lstm
from rtnet.util.config import LoaderOptions
from rtnet.util.debug import debug_print

logger = logging.getLogger(__name__)

ACTIVATIONS: Dict[ActivationKind, Callable[[int], Activation]] = {
    ActivationKind.TANH: TanhActivation,
    ActivationKind.RELU: ReLuActivation,
    ActivationKind.SIGMOID: SigmoidActivation,
    ActivationKind.SOFTMAX: SoftmaxActivation,
    ActivationKind.ELU: ELuActivation,
}


def _shape_list(shape: Any, field_name: str, index: Optional[int]) -> List[int]:
    if not isinstance(shape, (list, tuple)):
        raise StructureError(f"'{field_name}' must be an array", field=field_name, index=index)
    if not shape:
        raise StructureError(f"'{field_name}' must not be empty", field=field_name, index=index)
    for d in shape:
        # null entries (e.g. a None batch axis) are allowed anywhere but where the width is read
        if d is not None and (isinstance(d, bool) or not isinstance(d, int)):
            raise StructureError(f"'{field_name}' must contain integers, got {d!r}", field=field_name, index=index)
    return list(shape)


def layer_dims(shape: List[int], field_name: str = "shape", index: Optional[int] = None) -> int:
    """
    Effective width of a shape descriptor.

    4-D shapes (batch, height, width, channel) use width * channel; anything
    else uses the last element.
    """
    used = shape[2:] if len(shape) == 4 else shape[-1:]
    if None in used:
        raise StructureError(f"'{field_name}' has no size where the width is read: {shape}", field=field_name, index=index)
    dims = used[0] * used[1] if len(used) == 2 else used[0]
    if dims <= 0:
        raise StructureError(f"'{field_name}' does not give a positive width: {shape}", field=field_name, index=index)
    return dims


@dataclass
class LayerSpec:
    """One parsed layer description. Only lives for the duration of a load."""
    index: int
    type: str
    shape: List[int]
    weights: Any = None
    activation: str = ""

    @property
    def kind(self) -> Optional[LayerKind]:
        return LayerKind.from_tag(self.type)

    @property
    def dims(self) -> int:
        return layer_dims(self.shape, "shape", self.index)

    @property
    def traced_dims(self) -> Optional[int]:
        """Width for trace output; None where the shape gives none."""
        try:
            return self.dims
        except StructureError:
            return None

    @classmethod
    def from_dict(cls, index: int, entry: Any) -> "LayerSpec":
        if not isinstance(entry, Mapping):
            raise StructureError("layer description must be an object", index=index)
        for name in ("type", "shape"):
            if name not in entry:
                raise StructureError(f"missing required field '{name}'", field=name, index=index)
        if not isinstance(entry["type"], str):
            raise StructureError("'type' must be a string", field="type", index=index)

        activation = entry.get("activation")
        if activation is None:
            activation = ""
        if not isinstance(activation, str):
            raise StructureError("'activation' must be a string", field="activation", index=index)

        kind = LayerKind.from_tag(entry["type"])
        if kind is not None:
            for name in required_fields(kind):
                if name not in entry:
                    raise StructureError(f"missing required field '{name}'", field=name, index=index)

        return cls(
            index=index,
            type=entry["type"],
            shape=_shape_list(entry["shape"], "shape", index),
            weights=entry.get("weights"),
            activation=activation,
        )


@dataclass
class ModelSpec:
    """Parsed document root. Only lives for the duration of a load."""
    in_shape: List[int]
    layers: List[LayerSpec] = field(default_factory=list)

    @property
    def in_size(self) -> int:
        return layer_dims(self.in_shape, "in_shape")

    @classmethod
    def from_dict(cls, document: Any) -> "ModelSpec":
        if not isinstance(document, Mapping):
            raise StructureError("model document must be an object")
        for name in ("in_shape", "layers"):
            if name not in document:
                raise StructureError(f"missing required field '{name}'", field=name)
        if not isinstance(document["layers"], (list, tuple)):
            raise StructureError("'layers' must be an array", field="layers")

        return cls(
            in_shape=_shape_list(document["in_shape"], "in_shape", None),
            layers=[LayerSpec.from_dict(i, entry) for i, entry in enumerate(document["layers"])],
        )


class LayerFactory:
    """Builds the layers for one LayerSpec, dispatching on its LayerKind."""

    BUILDERS: Dict[LayerKind, str] = {
        LayerKind.DENSE: "_build_dense",
        LayerKind.TIME_DISTRIBUTED_DENSE: "_build_dense",
        LayerKind.LSTM: "_build_lstm",
        LayerKind.ACTIVATION: "_build_activation",
    }

    def __init__(self, options: LoaderOptions):
        self.options = options
        self.dtype = options.torch_dtype
        self.device = options.torch_device
        self._builders: Dict[LayerKind, Callable[[LayerSpec, int], List[Layer]]] = {
            kind: getattr(self, method) for kind, method in self.BUILDERS.items()
        }

    def create_activation(self, spec: LayerSpec, dims: int) -> Optional[Activation]:
        """Activation named by ``spec.activation`` at width ``dims``; None if the name is unknown."""
        kind = ActivationKind.from_name(spec.activation)
        if kind is None:
            if self.options.strict:
                raise UnsupportedActivation(f"unsupported activation '{spec.activation}'",
                                            field="activation", index=spec.index)
            debug_print(f"  skipping unsupported activation: {spec.activation}", self.options.debug)
            return None
        debug_print(f"  activation: {spec.activation}", self.options.debug)
        return ACTIVATIONS[kind](dims)

    def create_layers(self, spec: LayerSpec, in_size: int) -> List[Layer]:
        """Layers produced by one description, in model order. Empty for a skipped description."""
        kind = spec.kind
        if kind is None:
            if self.options.strict:
                raise UnknownLayerType(f"unknown layer type '{spec.type}'", field="type", index=spec.index)
            debug_print(f"  skipping unknown layer type: {spec.type}", self.options.debug)
            return []
        return self._builders[kind](spec, in_size)

    def _attached_activation(self, spec: LayerSpec, dims: int) -> List[Layer]:
        if not spec.activation:
            return []
        activation = self.create_activation(spec, dims)
        return [activation] if activation is not None else []

    def _build_dense(self, spec: LayerSpec, in_size: int) -> List[Layer]:
        dims = spec.dims
        dense = create_dense(in_size, dims, spec.weights, self.dtype, self.device, spec.index)
        return [dense] + self._attached_activation(spec, dims)

    def _build_lstm(self, spec: LayerSpec, in_size: int) -> List[Layer]:
        lstm = create_lstm(in_size, spec.dims, spec.weights, self.dtype, self.device, spec.index)
        if spec.activation:
            debug_print(f"  ignoring activation on lstm layer: {spec.activation}", self.options.debug)
        return [lstm]

    def _build_activation(self, spec: LayerSpec, in_size: int) -> List[Layer]:
        if not spec.activation:
            debug_print("  activation layer without an activation name", self.options.debug)
            return []
        if self.options.debug and spec.traced_dims != in_size:
            debug_print(f"  declared width {spec.traced_dims} differs from running width {in_size}", self.options.debug)
        return self._attached_activation(spec, in_size)


_missing_builders = set(LayerKind) - set(LayerFactory.BUILDERS)
if _missing_builders:
    raise RuntimeError(f"No builder for layer kinds: {sorted(k.value for k in _missing_builders)}")


def _resolve_options(options: Optional[LoaderOptions], overrides: Dict[str, Any]) -> LoaderOptions:
    return (options or LoaderOptions()).with_overrides(**overrides)


def parse_json(document: Any, options: Optional[LoaderOptions] = None, **overrides: Any) -> Model:
    """
    Creates a Model from an already parsed JSON document.

    Args:
        document: Mapping with "in_shape" and "layers"
        options: LoaderOptions; keyword overrides (strict, debug, dtype, device) win.
            With debug set, trace lines go to the ``rtnet.debug`` logger at DEBUG
            level; enable that logger to see them.

    Returns:
        A fully assembled Model

    Raises:
        StructureError: Missing/mistyped fields
        ShapeMismatch: Weights payload disagrees with the declared sizes
        UnknownLayerType, UnsupportedActivation: Only with strict=True
    """
    options = _resolve_options(options, overrides)
    debug = options.debug

    spec = ModelSpec.from_dict(document)
    n_dims = spec.in_size
    debug_print(f"# dimensions: {n_dims}", debug)

    model = Model(n_dims)
    factory = LayerFactory(options)

    for layer_spec in spec.layers:
        debug_print(f"Layer: {layer_spec.type}", debug)
        if debug and layer_spec.kind is not None:
            debug_print(f"  Dims: {layer_spec.traced_dims}", debug)
        for layer in factory.create_layers(layer_spec, model.get_next_in_size()):
            model.add_layer(layer)

    logger.debug(f"Assembled {model!r}")
    return model


def load_model(fp: IO[str], options: Optional[LoaderOptions] = None, **overrides: Any) -> Model:
    """Creates a Model from a JSON text stream."""
    try:
        document = json.load(fp)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StructureError(f"invalid JSON: {e}") from e
    return parse_json(document, options, **overrides)


def load_model_from_string(json_str: str, options: Optional[LoaderOptions] = None, **overrides: Any) -> Model:
    """Creates a Model from a JSON string."""
    try:
        document = json.loads(json_str)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise StructureError(f"invalid JSON: {e}") from e
    return parse_json(document, options, **overrides)


def load_model_from_file(filepath: Union[str, Path], options: Optional[LoaderOptions] = None,
                         **overrides: Any) -> Model:
    """Creates a Model from a JSON file."""
    with open(filepath, 'r', encoding='utf-8') as f:
        model = load_model(f, options, **overrides)
    logger.info(f"Model loaded from {filepath}: {model!r}")
    return model


class ModelSerializer:
    """Writes a Model back to the document format the loader reads."""

    @staticmethod
    def _tolist(tensor: torch.Tensor) -> List[Any]:
        return tensor.detach().cpu().tolist()

    @staticmethod
    def serialize_layer(layer: Layer, shape: List[Optional[int]]) -> Dict[str, Any]:
        if isinstance(layer, DenseLayer):
            return {
                "type": LayerKind.DENSE.value,
                "shape": shape,
                "weights": [ModelSerializer._tolist(layer.weights.t()), ModelSerializer._tolist(layer.bias)],
            }
        if isinstance(layer, LSTMLayer):
            return {
                "type": LayerKind.LSTM.value,
                "shape": shape,
                "weights": [ModelSerializer._tolist(layer.kernel),
                            ModelSerializer._tolist(layer.recurrent),
                            ModelSerializer._tolist(layer.bias)],
            }
        if isinstance(layer, Activation):
            return {"type": LayerKind.ACTIVATION.value, "shape": shape, "weights": [], "activation": layer.get_name()}
        raise TypeError(f"Cannot serialize layer of type {type(layer).__name__}")

    @staticmethod
    def serialize_model(model: Model) -> Dict[str, Any]:
        """
        Convert a Model to a JSON-serializable document.

        An activation directly following a Dense layer is folded into that
        layer's "activation" field; every other activation is written as its
        own "activation" entry.
        """
        entries: List[Dict[str, Any]] = []
        for layer in model.layers:
            shape = [None, None, layer.out_size]
            if (isinstance(layer, Activation) and entries
                    and entries[-1]["type"] == LayerKind.DENSE.value
                    and not entries[-1].get("activation")):
                entries[-1]["activation"] = layer.get_name()
                continue
            entries.append(ModelSerializer.serialize_layer(layer, shape))

        return {"in_shape": [None, None, model.in_size], "layers": entries}


def save_model_to_string(model: Model, indent: Optional[int] = 2) -> str:
    """Serialize a Model to a JSON string."""
    return json.dumps(ModelSerializer.serialize_model(model), indent=indent)


def save_model_to_file(model: Model, filepath: Union[str, Path], indent: Optional[int] = 2) -> None:
    """Save a Model to a JSON file."""
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(ModelSerializer.serialize_model(model), f, indent=indent)
    logger.info(f"Model saved to {filepath}")
