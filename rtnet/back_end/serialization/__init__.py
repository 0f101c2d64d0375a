#===- rtnet/back_end/serialization/__init__.py - Serialization Package --====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Serialization package: loads sequential models from their JSON
#   description and writes loaded models back to the same format.
#
#===---------------------------------------------------------------------====#

from .serialization import (
    LayerSpec,
    ModelSpec,
    LayerFactory,
    ModelSerializer,
    layer_dims,
    parse_json,
    load_model,
    load_model_from_file,
    load_model_from_string,
    save_model_to_file,
    save_model_to_string,
)

__all__ = [
    # Document structure
    'LayerSpec',
    'ModelSpec',
    'layer_dims',
    # Loading
    'LayerFactory',
    'parse_json',
    'load_model',
    'load_model_from_file',
    'load_model_from_string',
    # Writing
    'ModelSerializer',
    'save_model_to_file',
    'save_model_to_string',
]
