"""Logging setup for the ``petragrid`` command."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Send ``petragrid`` log records to stderr.

    Warnings only by default; *verbose* adds the per-group decode trace.
    Calling it again replaces the handler installed by the last call.
    """
    logger = logging.getLogger("petragrid")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(logger.handlers):
        if getattr(handler, "_petragrid_cli", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._petragrid_cli = True
    logger.addHandler(handler)
    return logger
