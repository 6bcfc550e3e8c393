# filename : main.py
# created  : 10/19/2026


import logging

from spremote.core.base import Agent, Message, Result
from spremote.core.newnote import (
    ClosePeriodMessage,
    NewNoteTerminal,
    OpenPeriodMessage,
    PurchaseMessage,
    RefundMessage,
    TerminalStatusMessage,
)
from spremote.core.tcp import Connection, Endpoint

lg = logging.getLogger(__name__)

COMMANDS = ("status", "open", "close", "purchase", "refund")


def build_message(
    command: str,
    transaction_id: str = "0001",
    amount: str | None = None,
    supervisor: bool = False,
    print_on_device: bool = False,
) -> Message:
    """Translate CLI arguments into the matching Message."""
    if command == "status":
        return TerminalStatusMessage()
    if command == "open":
        return OpenPeriodMessage(transaction_id, supervisor, print_on_device)
    if command == "close":
        return ClosePeriodMessage(transaction_id, supervisor, print_on_device)
    if command in ("purchase", "refund") and amount is None:
        raise ValueError(f"'{command}' requires an amount")
    if command == "purchase":
        return PurchaseMessage(transaction_id, amount, print_on_device)
    if command == "refund":
        return RefundMessage(transaction_id, amount)
    raise ValueError(f"unknown command: {command}")


def main(
    host: str,
    port: int,
    message: Message,
) -> Result:
    lg.debug("spremote v1")
    endpoint = Endpoint(host, port)
    agent = Agent(Connection(endpoint), on_command=lambda cmd: lg.info("sent: %s", cmd))
    terminal = NewNoteTerminal(agent)
    try:
        return terminal.send(message)
    except Exception as exc:
        terminal.on_error(exc)
        raise
