#===- rtnet/main.py - RTNet Entry Point --------------------------------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Command-line entry point: loads a model document, prints the layer
#   summary and optionally cross-checks the model against the document.
#
#===---------------------------------------------------------------------===#

import json
import logging
import sys

from rtnet.back_end.errors import ModelLoadError
from rtnet.back_end.layer_validation import check_model
from rtnet.back_end.serialization import parse_json
from rtnet.util.config import LoaderOptions, load_loader_config
from rtnet.util.debug import setup_logging
from rtnet.util.options import get_parser

logger = logging.getLogger(__name__)


def summarize(model) -> str:
    lines = [f"Model: in_size={model.in_size}, out_size={model.out_size}, {len(model)} layer(s)"]
    for i, layer in enumerate(model.layers):
        lines.append(f"  [{i}] {layer.get_name():<8} {layer.in_size} -> {layer.out_size}")
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = get_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    options = load_loader_config(args.config) if args.config else LoaderOptions()
    options = options.with_overrides(strict=args.strict, debug=args.debug, dtype=args.dtype, device=args.device)
    setup_logging("DEBUG" if options.debug else "INFO")

    try:
        with open(args.model, 'r', encoding='utf-8') as f:
            document = json.load(f)
        model = parse_json(document, options)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ModelLoadError) as e:
        logger.error(f"Failed to load {args.model}: {e}")
        return 1

    print(summarize(model))

    if args.check:
        # validator findings are always shown, even without --debug
        logging.getLogger("rtnet.debug").setLevel(logging.DEBUG)
        if not check_model(model, document, debug=True):
            logger.error("Model does not match its description")
            return 2
        print("Check passed")

    return 0


if __name__ == "__main__":
    sys.exit(main())
