#===- rtnet/util/__init__.py - RTNet Utility Package -----------------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Utility package: dtype/device resolution, loader configuration and the
#   debug trace channel.
#
#===---------------------------------------------------------------------===#

from .device_manager import get_default_device, get_default_dtype, resolve_dtype, resolve_device, get_current_settings
from .config import LoaderOptions, ConfigValidationError, load_loader_config, options_from_dict
from .debug import debug_print, setup_logging

__all__ = [
    'get_default_device', 'get_default_dtype', 'resolve_dtype', 'resolve_device', 'get_current_settings',
    'LoaderOptions', 'ConfigValidationError', 'load_loader_config', 'options_from_dict',
    'debug_print', 'setup_logging',
]
