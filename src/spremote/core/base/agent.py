from __future__ import annotations

import logging
from collections.abc import Callable

from spremote.core.tcp.connection import Connection
from spremote.core.tcp.frame import decode_response, encode_frame

lg = logging.getLogger(__name__)


class Agent:
    """Agent that frames commands and runs one exchange per call.

    Protocol-specific operations live in standalone protocol classes
    that receive agent.transmit as a callable. Terminals construct the
    protocol objects they need.
    """

    def __init__(
        self,
        connection: Connection,
        on_command: Callable[[str], None] | None = None,
    ) -> None:
        self._connection = connection
        self._on_command = on_command

    @property
    def connection(self) -> Connection:
        return self._connection

    def transmit(self, command: str, tag_hex: str = "") -> str:
        """Send a command and return the decoded response text."""
        frame = encode_frame(command, tag_hex)
        if self._on_command is not None:
            self._on_command(command)
        lg.debug("sent: %s", command)
        response = decode_response(self._connection.exchange(frame))
        lg.debug("received: %s", response)
        return response
