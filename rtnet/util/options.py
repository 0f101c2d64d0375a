#===- rtnet/util/options.py - RTNet Command-Line Options ---------------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Centralised definition of the command-line options for loading and
#   inspecting a model document.
#
#===---------------------------------------------------------------------===#

import argparse


def get_parser():

    parser = argparse.ArgumentParser(description='RTNet - load a sequential network from its JSON description')

    # Input
    parser.add_argument('--model', type=str, required=True,
                        help='Path to the model JSON document ({"in_shape": [...], "layers": [...]})')
    parser.add_argument('--config', type=str, default=None,
                        help='YAML/JSON file with loader options (strict, debug, dtype, device). Command-line flags override it')

    # Loader behaviour
    parser.add_argument('--strict', action='store_true', default=None,
                        help='Fail on unknown layer types and activation names instead of skipping them')
    parser.add_argument('--debug', action='store_true', default=None,
                        help='Print the per-layer loading trace')
    parser.add_argument('--dtype', type=str, default=None, choices=['float32', 'float64'],
                        help='Element type of the loaded weights')
    parser.add_argument('--device', type=str, default=None, choices=['cpu', 'cuda'],
                        help='Device the weights are placed on (falls back to cpu without CUDA)')

    # Post-load checks
    parser.add_argument('--check', action='store_true', default=False,
                        help='Cross-check every loaded layer against the document (type and width)')

    return parser
