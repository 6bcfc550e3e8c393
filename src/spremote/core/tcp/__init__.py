from spremote.core.tcp.connection import DEFAULT_PORT, Connection, Endpoint
from spremote.core.tcp.frame import decode_response, encode_frame
from spremote.core.tcp.logging import PROTOCOL, TRACE

__all__ = [
    "Connection",
    "DEFAULT_PORT",
    "Endpoint",
    "PROTOCOL",
    "TRACE",
    "decode_response",
    "encode_frame",
]
