"""Human-readable result formatting."""

from __future__ import annotations

from spremote.core.base import Result
from spremote.core.newnote import (
    UNKNOWN_TIMESTAMP,
    PurchaseResult,
    RefundResult,
    TerminalStatusResult,
)


def _indent(text: str, prefix: str = "    ") -> str:
    return "\n".join(prefix + line for line in text.splitlines())


def format_result(result: Result) -> str:
    """Format any operation result as an indented block of text."""
    lines = [f"  success:      {'yes' if result.success else 'no'}"]
    lines.append(f"  message:      {result.message}")
    if result.description:
        lines.append(f"  description:  {result.description}")

    if isinstance(result, TerminalStatusResult) and result.pos_identification:
        lines.append(f"  POS id:       {result.pos_identification}")

    if isinstance(result, (PurchaseResult, RefundResult)) and result.transaction_id:
        lines.append(f"  transaction:  {result.transaction_id}")
        lines.append(f"  amount:       {result.amount}")

    if isinstance(result, PurchaseResult) and result.success:
        lines.append(f"  terminal id:  {result.terminal_id or '(unknown)'}")
        stamp = result.timestamp
        lines.append(
            f"  timestamp:    {'(unknown)' if stamp == UNKNOWN_TIMESTAMP else stamp.isoformat(' ')}"
        )
        if result.receipt.merchant_copy:
            lines.append("  merchant copy:")
            lines.append(_indent(result.receipt.merchant_copy))
        if result.receipt.client_copy:
            lines.append("  client copy:")
            lines.append(_indent(result.receipt.client_copy))

    return "\n".join(lines)
