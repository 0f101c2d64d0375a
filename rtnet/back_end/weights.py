#===- rtnet/back_end/weights.py - Weight Reshaping ---------------------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Converts the nested numeric arrays of a layer's "weights" payload into
#   the tensor layouts each layer kind stores. Every nested length is checked
#   against the declared sizes before any value is read.
#
#   Dense:  kernel [in][out] is transposed to [out][in]; bias [out].
#   LSTM:   kernel [in][4*out] and recurrent [out][4*out] are copied as-is;
#           bias [4*out].
#
#===---------------------------------------------------------------------===#

from __future__ import annotations
import numbers
import numpy as np
import torch
from typing import Any, List, Optional, Sequence

from rtnet.back_end.core import DenseLayer, LSTMLayer
from rtnet.back_end.errors import ShapeMismatch, StructureError
from rtnet.back_end.layer_schema import LayerKind, weight_groups


def _check_number(value: Any, what: str, index: Optional[int]) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise StructureError(f"{what} must contain numbers, got {type(value).__name__}", field="weights", index=index)


def _check_list(values: Any, what: str, index: Optional[int]) -> None:
    if not isinstance(values, (list, tuple)):
        raise StructureError(f"{what} must be an array, got {type(values).__name__}", field="weights", index=index)


def to_vector(values: Any, length: int, what: str = "bias",
              dtype: torch.dtype = torch.float32, device: Optional[torch.device] = None,
              index: Optional[int] = None) -> torch.Tensor:
    """Validate a flat array of ``length`` numbers and copy it into a 1-D tensor."""
    _check_list(values, what, index)
    if len(values) != length:
        raise ShapeMismatch(f"{what} has length {len(values)}, expected {length}", field="weights", index=index)
    for v in values:
        _check_number(v, what, index)
    array = np.asarray(values, dtype=np.float64)
    return torch.from_numpy(array).to(dtype=dtype, device=device)


def to_matrix(values: Any, rows: int, cols: int, what: str = "kernel",
              dtype: torch.dtype = torch.float32, device: Optional[torch.device] = None,
              index: Optional[int] = None) -> torch.Tensor:
    """Validate a [rows][cols] nested array and copy it row-major into a 2-D tensor."""
    _check_list(values, what, index)
    if len(values) != rows:
        raise ShapeMismatch(f"{what} has {len(values)} rows, expected {rows}", field="weights", index=index)
    for r, row in enumerate(values):
        _check_list(row, f"{what}[{r}]", index)
        if len(row) != cols:
            raise ShapeMismatch(f"{what}[{r}] has length {len(row)}, expected {cols}", field="weights", index=index)
        for v in row:
            _check_number(v, what, index)
    array = np.asarray(values, dtype=np.float64).reshape(rows, cols)
    return torch.from_numpy(array).to(dtype=dtype, device=device)


def _groups(weights: Any, names: Sequence[str], kind: str, index: Optional[int]) -> List[Any]:
    _check_list(weights, f"{kind} weights", index)
    if len(weights) < len(names):
        raise StructureError(
            f"{kind} weights need {len(names)} groups ({', '.join(names)}), got {len(weights)}",
            field="weights", index=index)
    return list(weights[:len(names)])


def load_dense(dense: DenseLayer, weights: Any, dtype: torch.dtype = torch.float32,
               device: Optional[torch.device] = None, index: Optional[int] = None) -> None:
    """Load ``[kernel, bias]`` into a DenseLayer, transposing the kernel to [out][in]."""
    kernel, bias = _groups(weights, weight_groups(LayerKind.DENSE), "dense", index)
    matrix = to_matrix(kernel, dense.in_size, dense.out_size, "dense kernel", dtype, device, index)
    dense.set_weights(matrix.t().contiguous())
    dense.set_bias(to_vector(bias, dense.out_size, "dense bias", dtype, device, index))


def load_lstm(lstm: LSTMLayer, weights: Any, dtype: torch.dtype = torch.float32,
              device: Optional[torch.device] = None, index: Optional[int] = None) -> None:
    """Load ``[kernel, recurrent, bias]`` into an LSTMLayer without transposing."""
    kernel, recurrent, bias = _groups(weights, weight_groups(LayerKind.LSTM), "lstm", index)
    gates = 4 * lstm.out_size
    lstm.set_w_vals(to_matrix(kernel, lstm.in_size, gates, "lstm kernel", dtype, device, index))
    lstm.set_u_vals(to_matrix(recurrent, lstm.out_size, gates, "lstm recurrent", dtype, device, index))
    lstm.set_b_vals(to_vector(bias, gates, "lstm bias", dtype, device, index))


def create_dense(in_size: int, out_size: int, weights: Any, dtype: torch.dtype = torch.float32,
                 device: Optional[torch.device] = None, index: Optional[int] = None) -> DenseLayer:
    dense = DenseLayer(in_size, out_size)
    load_dense(dense, weights, dtype, device, index)
    return dense


def create_lstm(in_size: int, out_size: int, weights: Any, dtype: torch.dtype = torch.float32,
                device: Optional[torch.device] = None, index: Optional[int] = None) -> LSTMLayer:
    lstm = LSTMLayer(in_size, out_size)
    load_lstm(lstm, weights, dtype, device, index)
    return lstm
