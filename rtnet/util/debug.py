#===- rtnet/util/debug.py - RTNet Debug Trace --------------------------====#
# RTNet: Real-Time Network Loader
# Copyright (C) 2025– RTNet Team
#
# Licensed under the GNU Affero General Public License v3.0 or later (AGPLv3+).
# Distributed without any warranty; see <http://www.gnu.org/licenses/>.
#===---------------------------------------------------------------------===#
#
# Purpose:
#   Debug trace channel used by the loader and validator, plus the logging
#   setup shared by the command-line entry points.
#
#===---------------------------------------------------------------------===#

import logging
from typing import Optional

logger = logging.getLogger("rtnet.debug")


def debug_print(message: str, debug: bool) -> None:
    """
    Emit one trace line on the ``rtnet.debug`` logger when ``debug`` is set.

    Records go out at DEBUG level, so the host must enable that logger
    (``setup_logging("DEBUG")`` or ``logging.getLogger("rtnet.debug").setLevel(logging.DEBUG)``
    plus a handler) for them to appear.
    """
    if debug:
        logger.debug(message)


def setup_logging(level: str = "INFO", format_str: Optional[str] = None) -> None:
    """
    Setup logging configuration for the command-line tools.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_str: Custom format string for log messages
    """
    if format_str is None:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_str,
        handlers=[logging.StreamHandler()]
    )
