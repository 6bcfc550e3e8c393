"""Custom log levels for terminal traffic.

PROTOCOL sits just below INFO and shows one line per device exchange.
TRACE sits below that and adds hex dumps of every frame.
"""

from __future__ import annotations

import logging

TRACE = 15
PROTOCOL = 18
logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(PROTOCOL, "PROTOCOL")

LOG_FORMAT = "%(levelname)-8s %(name)s: %(message)s"


def _trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


logging.Logger.trace = _trace


def configure(verbose: bool = False) -> None:
    """Install the root handler: TRACE when verbose, PROTOCOL otherwise."""
    logging.basicConfig(level=TRACE if verbose else PROTOCOL, format=LOG_FORMAT)
