#===- rtnet/back_end/errors.py - RTNet Load Errors ---------------------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Exception hierarchy raised while turning a model document into a Model.
#   StructureError and ShapeMismatch always abort a load; UnknownLayerType
#   and UnsupportedActivation are only raised in strict mode.
#
#===---------------------------------------------------------------------===#

from typing import Optional


class ModelLoadError(Exception):
    """Base error for model loading. Carries the offending field and layer index."""

    def __init__(self, message: str, field: Optional[str] = None, index: Optional[int] = None):
        self.message = message
        self.field = field
        self.index = index
        super().__init__(str(self))

    def __str__(self):
        where = []
        if self.index is not None:
            where.append(f"layer {self.index}")
        if self.field is not None:
            where.append(f"field '{self.field}'")
        if where:
            return f"{self.message} ({', '.join(where)})"
        return self.message


class StructureError(ModelLoadError):
    """A required field is missing or not of the expected container kind."""


class ShapeMismatch(ModelLoadError):
    """A weights payload disagrees with the declared layer sizes."""


class UnknownLayerType(ModelLoadError):
    """Unrecognised layer type tag (strict mode only)."""


class UnsupportedActivation(ModelLoadError):
    """Unrecognised activation name (strict mode only)."""
