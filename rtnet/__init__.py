#===- rtnet/__init__.py - RTNet Package --------------------------------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Loads small sequential networks (dense, LSTM, activations) from their
#   JSON description into a ready-to-run Model.
#
#===---------------------------------------------------------------------===#

from rtnet.back_end import *  # noqa: F401,F403
from rtnet.back_end import __all__ as _back_end_all
from rtnet.util.config import LoaderOptions, load_loader_config

__version__ = "0.1.0"

__all__ = list(_back_end_all) + ['LoaderOptions', 'load_loader_config']
