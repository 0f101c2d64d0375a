#===- rtnet/back_end/examples/__init__.py - Examples Package -----------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Holds examples_config.yaml, the YAML description of the example model
#   documents written by rtnet.back_end.net_factory.NetFactory.
#
#===---------------------------------------------------------------------===#
