"""NewNote SP Remote terminal.

Each @handles method receives a typed Message and returns a typed
Result. Transport and protocol errors propagate; an unrecognised
failure code becomes a failed Result carrying the raw response.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from spremote.core.base import Agent, Terminal
from spremote.core.base.terminal import handles
from spremote.core.errors import UnknownResponseCode
from spremote.core.newnote import responses
from spremote.core.newnote.commands import AMOUNT_WIDTH, TRANSACTION_ID_WIDTH, pad_field
from spremote.core.newnote.messages import (
    ClosePeriodMessage,
    OpenPeriodMessage,
    PeriodResult,
    PurchaseMessage,
    PurchaseResult,
    RefundMessage,
    RefundResult,
    TerminalStatusMessage,
    TerminalStatusResult,
)
from spremote.core.newnote.protocol import NewNote
from spremote.core.newnote.receipt import match_printed_header, parse_receipt
from spremote.core.newnote.responses import Classification, UNKNOWN_ERROR

lg = logging.getLogger(__name__)


class NewNoteTerminal(Terminal):
    """Terminal for the NewNote SP Remote payment device."""

    def __init__(self, agent: Agent) -> None:
        super().__init__(agent)
        self._proto = NewNote(agent.transmit)

    @staticmethod
    def _outcome(
        raw: str, classifier: Callable[[str], Classification]
    ) -> tuple[Classification | None, str, str | None]:
        """Classify *raw*; return (classification, message, description)."""
        try:
            result = classifier(raw)
        except UnknownResponseCode as exc:
            lg.warning("unknown response code %r", responses.status_code(raw))
            return None, UNKNOWN_ERROR, exc.raw_message
        if result.success:
            return result, raw, result.description
        return result, result.description, raw

    @handles(TerminalStatusMessage)
    def _terminal_status(self, message: TerminalStatusMessage) -> TerminalStatusResult:
        raw = self._proto.send_terminal_status()
        status, text, description = self._outcome(raw, responses.classify_terminal_status)
        success = status is not None and status.success
        pos_id = responses.pos_identification(raw) if success else ""
        return TerminalStatusResult(
            success=success, message=text, description=description,
            pos_identification=pos_id,
        )

    @handles(OpenPeriodMessage)
    def _open_period(self, message: OpenPeriodMessage) -> PeriodResult:
        raw = self._proto.send_open_period(message)
        status, text, description = self._outcome(raw, responses.classify)
        return PeriodResult(
            success=status is not None and status.success,
            message=text, description=description,
        )

    @handles(ClosePeriodMessage)
    def _close_period(self, message: ClosePeriodMessage) -> PeriodResult:
        raw = self._proto.send_close_period(message)
        status, text, description = self._outcome(raw, responses.classify)
        return PeriodResult(
            success=status is not None and status.success,
            message=text, description=description,
        )

    @handles(PurchaseMessage)
    def _purchase(self, message: PurchaseMessage) -> PurchaseResult:
        raw = self._proto.send_purchase(message)
        status, text, description = self._outcome(raw, responses.classify)
        result = PurchaseResult(
            success=status is not None and status.success,
            message=text, description=description,
        )
        if not result.success:
            return result

        result.transaction_id = pad_field(
            "transaction_id", message.transaction_id, TRANSACTION_ID_WIDTH)
        result.amount = pad_field("amount", message.amount, AMOUNT_WIDTH)

        if message.print_on_device:
            header = match_printed_header(raw)
            if header is not None:
                result.terminal_id = header.terminal_id
                result.timestamp = header.timestamp
            return result

        parsed = parse_receipt(raw, message.receipt_width)
        if parsed is None:
            lg.info("no receipt text in response")
            return result
        result.terminal_id = parsed.header.terminal_id
        result.timestamp = parsed.header.timestamp
        result.receipt = parsed.receipt
        return result

    @handles(RefundMessage)
    def _refund(self, message: RefundMessage) -> RefundResult:
        raw = self._proto.send_refund(message)
        status, text, description = self._outcome(raw, responses.classify)
        success = status is not None and status.success
        return RefundResult(
            success=success, message=text, description=description,
            transaction_id=pad_field(
                "transaction_id", message.transaction_id, TRANSACTION_ID_WIDTH),
            amount=pad_field("amount", message.amount, AMOUNT_WIDTH),
        )
