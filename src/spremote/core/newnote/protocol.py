"""NewNote SP Remote protocol operations.

Each method maps to a single device command and uses the ``send_``
prefix. The class is standalone: it receives ``agent.transmit`` as a
callable and returns the decoded response text unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from spremote.core.newnote import commands
from spremote.core.newnote.messages import (
    ClosePeriodMessage,
    OpenPeriodMessage,
    PurchaseMessage,
    RefundMessage,
)
from spremote.core.newnote.responses import SUCCESS_CODE, STATUS_CODE_LENGTH, STATUS_CODE_OFFSET
from spremote.core.tcp.logging import PROTOCOL

lg = logging.getLogger(__name__)

_GREEN = "\033[32m"
_RED = "\033[31m"
_RESET = "\033[0m"


class NewNote:
    """Protocol operations for the NewNote SP Remote terminal."""

    def __init__(self, transmit: Callable[[str, str], str]) -> None:
        self._transmit = transmit

    def _send(self, label: str, command: str, tag_hex: str = "") -> str:
        resp = self._transmit(command, tag_hex)
        code = resp[STATUS_CODE_OFFSET : STATUS_CODE_OFFSET + STATUS_CODE_LENGTH]
        color = _GREEN if code == SUCCESS_CODE else _RED
        lg.log(PROTOCOL, "%s %s%s%s", label, color, code or "---", _RESET)
        return resp

    # -- commands --

    def send_terminal_status(self) -> str:
        """TERMINAL STATUS (M0001)."""
        return self._send("TERMINAL STATUS", commands.build_terminal_status())

    def send_open_period(self, message: OpenPeriodMessage) -> str:
        """OPEN PERIOD (S0001)."""
        command = commands.build_open_period(message)
        return self._send(f"OPEN PERIOD id={command[5:9]}", command)

    def send_close_period(self, message: ClosePeriodMessage) -> str:
        """CLOSE PERIOD (S0011)."""
        command = commands.build_close_period(message)
        return self._send(f"CLOSE PERIOD id={command[5:9]}", command)

    def send_purchase(self, message: PurchaseMessage) -> str:
        """PURCHASE (C0001) with the fixed EMV tag block appended."""
        command = commands.build_purchase(message)
        label = f"PURCHASE id={command[5:9]} amount={command[9:17]}"
        return self._send(label, command, commands.PURCHASE_TAGS)

    def send_refund(self, message: RefundMessage) -> str:
        """REFUND (C0021)."""
        command = commands.build_refund(message)
        return self._send(f"REFUND id={command[5:9]} amount={command[9:17]}", command)
