#===- rtnet/back_end/core.py - RTNet Core Data Structures --------------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Core data structures: the Layer variants (Dense, LSTM, activations) and
#   the Model that owns them in order.
#
#===---------------------------------------------------------------------===#

# core.py
import torch
from typing import Iterator, List, Optional, Tuple


class Layer:
    """Base class for all layers. ``in_size``/``out_size`` are fixed at construction."""

    name = "layer"

    def __init__(self, in_size: int, out_size: int):
        if in_size <= 0 or out_size <= 0:
            raise ValueError(f"{type(self).__name__} sizes must be positive, got ({in_size}, {out_size})")
        self.in_size = int(in_size)
        self.out_size = int(out_size)

    def get_name(self) -> str:
        return self.name

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        raise NotImplementedError

    def reset(self) -> None:
        """Clear any recurrent state. Stateless layers do nothing."""

    def __call__(self, x: torch.Tensor) -> torch.Tensor:
        return self.forward(x)

    def __repr__(self):
        return f"{type(self).__name__}(in_size={self.in_size}, out_size={self.out_size})"


def _set_once(layer: Layer, attr: str, value: torch.Tensor) -> None:
    if getattr(layer, attr) is not None:
        raise RuntimeError(f"{type(layer).__name__}.{attr.lstrip('_')} has already been set")
    setattr(layer, attr, value)


def _check_shape(layer: Layer, what: str, value: torch.Tensor, shape: Tuple[int, ...]) -> None:
    if tuple(value.shape) != shape:
        raise ValueError(f"{type(layer).__name__} {what} must have shape {shape}, got {tuple(value.shape)}")


class DenseLayer(Layer):
    """
    Fully connected layer: y = W x + b.

    ``weights`` is [out_size][in_size]; ``bias`` is [out_size].
    """

    name = "dense"

    def __init__(self, in_size: int, out_size: int):
        super().__init__(in_size, out_size)
        self._weights: Optional[torch.Tensor] = None
        self._bias: Optional[torch.Tensor] = None

    @property
    def weights(self) -> Optional[torch.Tensor]:
        return self._weights

    @property
    def bias(self) -> Optional[torch.Tensor]:
        return self._bias

    def set_weights(self, weights: torch.Tensor) -> None:
        _check_shape(self, "weights", weights, (self.out_size, self.in_size))
        _set_once(self, "_weights", weights)

    def set_bias(self, bias: torch.Tensor) -> None:
        _check_shape(self, "bias", bias, (self.out_size,))
        _set_once(self, "_bias", bias)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.mv(self._weights, x) + self._bias


class LSTMLayer(Layer):
    """
    LSTM layer over single frames, gates ordered (input, forget, cell, output).

    kernel ``W`` is [in_size][4*out_size], recurrent ``U`` is
    [out_size][4*out_size], bias ``b`` is [4*out_size].
    """

    name = "lstm"

    def __init__(self, in_size: int, out_size: int):
        super().__init__(in_size, out_size)
        self._W: Optional[torch.Tensor] = None
        self._U: Optional[torch.Tensor] = None
        self._b: Optional[torch.Tensor] = None
        self._h: Optional[torch.Tensor] = None
        self._c: Optional[torch.Tensor] = None

    @property
    def kernel(self) -> Optional[torch.Tensor]:
        return self._W

    @property
    def recurrent(self) -> Optional[torch.Tensor]:
        return self._U

    @property
    def bias(self) -> Optional[torch.Tensor]:
        return self._b

    def set_w_vals(self, kernel: torch.Tensor) -> None:
        _check_shape(self, "kernel", kernel, (self.in_size, 4 * self.out_size))
        _set_once(self, "_W", kernel)

    def set_u_vals(self, recurrent: torch.Tensor) -> None:
        _check_shape(self, "recurrent", recurrent, (self.out_size, 4 * self.out_size))
        _set_once(self, "_U", recurrent)

    def set_b_vals(self, bias: torch.Tensor) -> None:
        _check_shape(self, "bias", bias, (4 * self.out_size,))
        _set_once(self, "_b", bias)

    def reset(self) -> None:
        self._h = None
        self._c = None

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        if self._h is None:
            self._h = torch.zeros(self.out_size, dtype=self._W.dtype, device=self._W.device)
            self._c = torch.zeros_like(self._h)

        z = x @ self._W + self._h @ self._U + self._b
        i, f, g, o = torch.split(z, self.out_size)
        self._c = torch.sigmoid(f) * self._c + torch.sigmoid(i) * torch.tanh(g)
        self._h = torch.sigmoid(o) * torch.tanh(self._c)
        return self._h


class Activation(Layer):
    """Pointwise nonlinearity with equal input and output width."""

    def __init__(self, size: int):
        super().__init__(size, size)

    def __repr__(self):
        return f"{type(self).__name__}(size={self.out_size})"


class TanhActivation(Activation):
    name = "tanh"

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.tanh(x)


class ReLuActivation(Activation):
    name = "relu"

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.relu(x)


class SigmoidActivation(Activation):
    name = "sigmoid"

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.sigmoid(x)


class SoftmaxActivation(Activation):
    name = "softmax"

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.softmax(x, dim=-1)


class ELuActivation(Activation):
    name = "elu"

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return torch.nn.functional.elu(x, alpha=1.0)


class Model:
    """Ordered, exclusively owned sequence of layers."""

    def __init__(self, in_size: int):
        if in_size <= 0:
            raise ValueError(f"Model input size must be positive, got {in_size}")
        self.in_size = int(in_size)
        self._layers: List[Layer] = []

    def add_layer(self, layer: Layer) -> None:
        if any(layer is existing for existing in self._layers):
            raise ValueError(f"{layer!r} is already part of this model")
        self._layers.append(layer)

    def get_next_in_size(self) -> int:
        """Output width of the last layer, or the model input width when empty."""
        if not self._layers:
            return self.in_size
        return self._layers[-1].out_size

    @property
    def out_size(self) -> int:
        return self.get_next_in_size()

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return tuple(self._layers)

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(tuple(self._layers))

    def reset(self) -> None:
        for layer in self._layers:
            layer.reset()

    @torch.no_grad()
    def forward(self, x: torch.Tensor) -> torch.Tensor:
        if x.shape[-1] != self.in_size:
            raise ValueError(f"Expected input of width {self.in_size}, got {x.shape[-1]}")
        for layer in self._layers:
            x = layer(x)
        return x

    def __repr__(self):
        return f"Model(in_size={self.in_size}, out_size={self.out_size}, layers={len(self._layers)})"
