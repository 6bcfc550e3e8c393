"""Command templates for the terminal's ASCII protocol.

Every command is a fixed-layout string. Numeric fields are zero-padded
on the left and never truncated: a value wider than its field raises
InvalidCommand.

    TerminalStatus  M0001
    OpenPeriod      S0001 id(4) supervisor(1) print(1) width(1)
    ClosePeriod     S0011 id(4) supervisor(1) print(1) width(1)
    Purchase        C0001 id(4) amount(8) 0 print(1) width(1) 00
    Refund          C0021 id(4) amount(8) 00000000

The supervisor flag is inverted on the wire: 0 means "use the
supervisor card".
"""

from __future__ import annotations

from spremote.core.errors import InvalidCommand
from spremote.core.newnote.messages import (
    RECEIPT_WIDTH_20,
    ClosePeriodMessage,
    OpenPeriodMessage,
    PurchaseMessage,
    RefundMessage,
)

TERMINAL_STATUS_COMMAND = "M0001"
OPEN_PERIOD_PREFIX = "S0001"
CLOSE_PERIOD_PREFIX = "S0011"
PURCHASE_PREFIX = "C0001"
REFUND_PREFIX = "C0021"

# Hex tag block appended raw after the purchase command.
PURCHASE_TAGS = "0B9F1C009A009F21009F4100"

TRANSACTION_ID_WIDTH = 4
AMOUNT_WIDTH = 8

PERIOD_COMMAND_LENGTH = 5 + TRANSACTION_ID_WIDTH + 3
PURCHASE_COMMAND_LENGTH = 5 + TRANSACTION_ID_WIDTH + AMOUNT_WIDTH + 5
REFUND_COMMAND_LENGTH = 5 + TRANSACTION_ID_WIDTH + AMOUNT_WIDTH + 8

_WIDTH_CODES: dict[int, str] = {
    RECEIPT_WIDTH_20: "0",
}


def pad_field(name: str, value: int | str, width: int) -> str:
    """Zero-pad a numeric field to *width* digits."""
    if isinstance(value, bool):
        raise InvalidCommand(f"{name} must be numeric, got {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise InvalidCommand(f"{name} must not be negative: {value}")
        text = str(value)
    else:
        text = value.strip()
    if not text.isascii() or not text.isdigit():
        raise InvalidCommand(f"{name} must be digits, got {value!r}")
    if len(text) > width:
        raise InvalidCommand(f"{name} exceeds {width} digits: {value!r}")
    return text.zfill(width)


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _width_code(width: int) -> str:
    code = _WIDTH_CODES.get(width)
    if code is None:
        raise InvalidCommand(f"unsupported receipt width: {width}")
    return code


def build_terminal_status() -> str:
    return TERMINAL_STATUS_COMMAND


def _build_period(prefix: str, message: OpenPeriodMessage | ClosePeriodMessage) -> str:
    return "".join([
        prefix,
        pad_field("transaction_id", message.transaction_id, TRANSACTION_ID_WIDTH),
        _flag(not message.use_supervisor_card),
        _flag(message.print_on_device),
        _width_code(message.receipt_width),
    ])


def build_open_period(message: OpenPeriodMessage) -> str:
    return _build_period(OPEN_PERIOD_PREFIX, message)


def build_close_period(message: ClosePeriodMessage) -> str:
    return _build_period(CLOSE_PERIOD_PREFIX, message)


def build_purchase(message: PurchaseMessage) -> str:
    return "".join([
        PURCHASE_PREFIX,
        pad_field("transaction_id", message.transaction_id, TRANSACTION_ID_WIDTH),
        pad_field("amount", message.amount, AMOUNT_WIDTH),
        "0",
        _flag(message.print_on_device),
        _width_code(message.receipt_width),
        "00",
    ])


def build_refund(message: RefundMessage) -> str:
    return "".join([
        REFUND_PREFIX,
        pad_field("transaction_id", message.transaction_id, TRANSACTION_ID_WIDTH),
        pad_field("amount", message.amount, AMOUNT_WIDTH),
        "00000000",
    ])
