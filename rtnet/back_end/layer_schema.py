# layer_schema.py
"""
RTNet Layers: type tags + activation names + per-kind registry

WHAT THIS FILE PROVIDES:
1) LayerKind enum: every layer type tag the loader understands.
2) ActivationKind enum: every activation name the loader understands.
3) A flat REGISTRY listing, per kind, the document fields it needs and the
   weight groups its payload must contain.

HOW TO ADD A NEW LAYER KIND:
    1. Append a value to LayerKind (e.g., GRU = "gru").
    2. Add REGISTRY[LayerKind.GRU.value] = {...}.
    3. Add a builder to LayerFactory in serialization/serialization.py.
       The factory checks at import time that every kind has a builder.
"""

from __future__ import annotations
from typing import Dict, Any, List, Optional
import enum


# -------------------------------
# Layer type tags
# -------------------------------
class LayerKind(str, enum.Enum):
    DENSE = "dense"
    TIME_DISTRIBUTED_DENSE = "time-distributed-dense"
    LSTM = "lstm"
    ACTIVATION = "activation"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["LayerKind"]:
        """Look up a type tag; None for a tag this loader does not know."""
        try:
            return cls(tag)
        except ValueError:
            return None

    @property
    def is_dense(self) -> bool:
        return self in (LayerKind.DENSE, LayerKind.TIME_DISTRIBUTED_DENSE)


# -------------------------------
# Activation names
# -------------------------------
class ActivationKind(str, enum.Enum):
    TANH = "tanh"
    RELU = "relu"
    SIGMOID = "sigmoid"
    SOFTMAX = "softmax"
    ELU = "elu"

    @classmethod
    def from_name(cls, name: str) -> Optional["ActivationKind"]:
        """Look up an activation name; None for a name this loader does not know."""
        try:
            return cls(name)
        except ValueError:
            return None


# -------------------------------------------
# Per-kind document layout (easy to edit)
# -------------------------------------------
REGISTRY: Dict[str, Dict[str, Any]] = {
    LayerKind.DENSE.value:                  {"fields_required": ["type", "shape", "weights"], "fields_optional": ["activation"], "weight_groups": ["kernel", "bias"]},
    LayerKind.TIME_DISTRIBUTED_DENSE.value: {"fields_required": ["type", "shape", "weights"], "fields_optional": ["activation"], "weight_groups": ["kernel", "bias"]},
    LayerKind.LSTM.value:                   {"fields_required": ["type", "shape", "weights"], "fields_optional": ["activation"], "weight_groups": ["kernel", "recurrent", "bias"]},
    LayerKind.ACTIVATION.value:             {"fields_required": ["type", "shape"],            "fields_optional": ["weights", "activation"], "weight_groups": []},
}


def weight_groups(kind: LayerKind) -> List[str]:
    return REGISTRY[kind.value]["weight_groups"]


def required_fields(kind: LayerKind) -> List[str]:
    return REGISTRY[kind.value]["fields_required"]
