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
from spremote.core.newnote.receipt import UNKNOWN_TIMESTAMP, ReceiptData
from spremote.core.newnote.terminal import NewNoteTerminal

__all__ = [
    "ClosePeriodMessage",
    "NewNote",
    "NewNoteTerminal",
    "OpenPeriodMessage",
    "PeriodResult",
    "PurchaseMessage",
    "PurchaseResult",
    "ReceiptData",
    "RefundMessage",
    "RefundResult",
    "TerminalStatusMessage",
    "TerminalStatusResult",
    "UNKNOWN_TIMESTAMP",
]
