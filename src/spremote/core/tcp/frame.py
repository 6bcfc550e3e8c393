"""Wire framing for the terminal's TCP protocol.

A request frame is a 2-byte big-endian length of the ASCII command,
followed by the command itself and, for some operations, a raw tag
block. The tag block carries no length of its own and is opaque here.

Responses are read to end-of-stream. The first 2 characters of the
decoded text echo the device status and are discarded.
"""

from __future__ import annotations

from spremote.core.errors import InvalidCommand

LENGTH_PREFIX_SIZE = 2
STATUS_ECHO_SIZE = 2
MAX_COMMAND_LENGTH = 0xFFFF


def encode_frame(command: str, tag_hex: str = "") -> bytes:
    """Build the request frame for *command* plus optional hex *tag_hex*."""
    try:
        payload = command.encode("ascii")
    except UnicodeEncodeError as exc:
        raise InvalidCommand(f"command is not ASCII: {command!r}") from exc
    if len(payload) > MAX_COMMAND_LENGTH:
        raise InvalidCommand(f"command too long: {len(payload)} bytes")

    buf = bytearray(len(payload).to_bytes(LENGTH_PREFIX_SIZE, "big"))
    buf.extend(payload)
    if tag_hex:
        try:
            buf.extend(bytes.fromhex(tag_hex))
        except ValueError as exc:
            raise InvalidCommand(f"invalid tag block: {tag_hex!r}") from exc
    return bytes(buf)


def decode_response(data: bytes) -> str:
    """Decode a complete response and drop the status-echo prefix."""
    text = data.decode("utf-8", errors="replace")
    return text[STATUS_ECHO_SIZE:]
