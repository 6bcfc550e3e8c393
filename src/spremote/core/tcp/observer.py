from __future__ import annotations

import logging

from spremote.core.tcp.logging import PROTOCOL

lg = logging.getLogger(__name__)


LINE_BYTES = 16


class LoggingObserver:
    """Connection observer that logs frame traffic via Python logging."""

    def _log_hex(self, prefix: str, data: bytes) -> None:
        """Log hex data, wrapping at LINE_BYTES bytes per line."""
        pad = " " * len(prefix)
        for i in range(0, len(data), LINE_BYTES):
            chunk = data[i : i + LINE_BYTES].hex(" ").upper()
            lg.trace("%s%s", prefix if i == 0 else pad, chunk)

    def update(self, event: str, *args) -> None:
        if event == "connect":
            lg.log(PROTOCOL, "connect %s:%d", args[0], args[1])

        elif event == "disconnect":
            lg.log(PROTOCOL, "disconnect")

        elif event == "command":
            self._log_hex(">> ", bytes(args[0]))

        elif event == "response":
            data = bytes(args[0])
            if data:
                self._log_hex("<< ", data)
            lg.trace("<< %d bytes", len(data))
