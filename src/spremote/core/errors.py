"""Exceptions raised by the terminal protocol stack."""

from __future__ import annotations


class SpRemoteError(Exception):
    """Base class for all terminal protocol errors."""


class ConfigurationError(SpRemoteError):
    """Invalid host or port."""


class InvalidCommand(SpRemoteError):
    """A request field does not fit its command template."""


class TransportError(SpRemoteError):
    """Connect, write, or read failure on the device socket."""


class ProtocolError(SpRemoteError):
    """Response too short for the offsets a message type requires."""


class UnknownResponseCode(SpRemoteError):
    """Failure code not present in the negative-response table."""

    def __init__(self, raw_message: str) -> None:
        super().__init__(f"unknown response code in {raw_message!r}")
        self.raw_message = raw_message


class ReceiptParseError(SpRemoteError):
    """Receipt text could not be recovered. Never leaves the parser."""
