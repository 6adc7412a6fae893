"""A print-based logger for interactive flow analysis.

Standard Python logging disappears in Jupyter notebooks unless carefully
configured. Flow matrices are mostly explored in notebooks, so this module
prints to stdout with timestamps and level labels instead.

The threshold is read from the FLOWMAT_LOG_LEVEL environment variable
(DEBUG, INFO, WARNING or ERROR; default INFO) each time a message is
emitted, so it can be changed from a running session.

Usage:
    from flowmat.utils import get_logger
    log = get_logger("selection")
    log.info("Selected %d flows", 42)
"""

import os
import sys
from datetime import datetime

LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40}

LEVEL_VARIABLE = "FLOWMAT_LOG_LEVEL"


def current_level():
    """Numeric threshold below which messages are dropped."""
    name = os.environ.get(LEVEL_VARIABLE, "INFO").upper()
    return LEVELS.get(name, LEVELS["INFO"])


def get_logger(name, out=None):
    """Create a print-based logger.

    Parameters
    ----------
    name : str
        Logger name, displayed in every message header.
    out : file-like, optional
        Additional output stream (e.g., an open log file).

    Returns
    -------
    callable
        A log function with .debug, .info, .warning, .error methods.
    """
    prefix = f"flowmat:{name}"
    line_length = 72
    extra = [out] if out else []

    def _header(level, outputs):
        now = datetime.now().strftime("%H:%M:%S")
        for dest in outputs:
            print(f"{'_' * line_length}", file=dest)
            print(f"{prefix} {level} [{now}]", file=dest)

    def log(level, msg, args):
        if LEVELS[level] < current_level():
            return
        # resolved per call so that pytest's capsys sees the output
        outputs = [sys.stdout] + extra
        _header(level, outputs)
        for dest in outputs:
            try:
                print(msg % args, file=dest)
            except TypeError:
                print(msg, file=dest)

    log.debug = lambda msg, *args: log("DEBUG", msg, args)
    log.info = lambda msg, *args: log("INFO", msg, args)
    log.warning = lambda msg, *args: log("WARNING", msg, args)
    log.error = lambda msg, *args: log("ERROR", msg, args)
    log.name = prefix

    return log
