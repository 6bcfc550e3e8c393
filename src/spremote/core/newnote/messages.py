"""Terminal messages and results.

Each operation has a Message/Result pair. The Message carries the input
parameters; the Result carries the typed output. Messages are frozen:
one is built per call and consumed by the command builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from spremote.core.base import Message, Result
from spremote.core.newnote.receipt import UNKNOWN_TIMESTAMP, ReceiptData

RECEIPT_WIDTH_20 = 20


@dataclass(frozen=True)
class TerminalStatusMessage(Message):
    """Ask the terminal whether it is initialised and in service."""


@dataclass
class TerminalStatusResult(Result):
    pos_identification: str = ""


@dataclass(frozen=True)
class OpenPeriodMessage(Message):
    """Open an accounting period."""

    transaction_id: int | str
    use_supervisor_card: bool = False
    print_on_device: bool = False
    receipt_width: int = RECEIPT_WIDTH_20


@dataclass(frozen=True)
class ClosePeriodMessage(Message):
    """Close the current accounting period."""

    transaction_id: int | str
    use_supervisor_card: bool = False
    print_on_device: bool = False
    receipt_width: int = RECEIPT_WIDTH_20


@dataclass
class PeriodResult(Result):
    """Outcome of an open or close period request."""


@dataclass(frozen=True)
class PurchaseMessage(Message):
    """Charge *amount* (minor currency units) on the terminal."""

    transaction_id: int | str
    amount: int | str
    print_on_device: bool = False
    receipt_width: int = RECEIPT_WIDTH_20


@dataclass
class PurchaseResult(Result):
    transaction_id: str = ""
    amount: str = ""
    terminal_id: str = ""
    timestamp: datetime = UNKNOWN_TIMESTAMP
    receipt: ReceiptData = field(default_factory=ReceiptData)


@dataclass(frozen=True)
class RefundMessage(Message):
    """Refund *amount* for a previous transaction."""

    transaction_id: int | str
    amount: int | str

    @classmethod
    def from_purchase(cls, result: PurchaseResult) -> RefundMessage:
        """Build a refund for the transaction carried by *result*."""
        return cls(transaction_id=result.transaction_id, amount=result.amount)


@dataclass
class RefundResult(Result):
    transaction_id: str = ""
    amount: str = ""
