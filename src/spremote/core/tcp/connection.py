from __future__ import annotations

import logging
import socket
from dataclasses import dataclass

from spremote.core.errors import ConfigurationError, TransportError
from spremote.core.tcp.observer import LoggingObserver

lg = logging.getLogger(__name__)

DEFAULT_PORT = 15200
RECV_SIZE = 1024


@dataclass(frozen=True)
class Endpoint:
    """Host and port of the payment terminal."""

    host: str
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        if not isinstance(self.host, str) or not self.host.strip():
            raise ConfigurationError(f"invalid host: {self.host!r}")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ConfigurationError(f"invalid port: {self.port!r}")
        if not 1 <= self.port <= 0xFFFF:
            raise ConfigurationError(f"port out of range: {self.port}")


class Connection:
    """One-shot TCP exchange with the terminal.

    Every call to exchange() opens a fresh socket, writes the frame,
    reads until the device closes the stream, and closes the socket.
    There is no timeout: a silent device blocks the caller.
    """

    def __init__(self, endpoint: Endpoint, observer: LoggingObserver | None = None) -> None:
        self._endpoint = endpoint
        self._observer = observer or LoggingObserver()

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    def exchange(self, frame: bytes) -> bytes:
        host, port = self._endpoint.host, self._endpoint.port
        try:
            sock = socket.create_connection((host, port))
        except OSError as exc:
            raise TransportError(f"cannot connect to {host}:{port}: {exc}") from exc

        with sock:
            self._observer.update("connect", host, port)
            try:
                self._observer.update("command", frame)
                sock.sendall(frame)
                data = self._read_all(sock)
            except OSError as exc:
                raise TransportError(f"I/O error with {host}:{port}: {exc}") from exc
            self._observer.update("response", data)
        self._observer.update("disconnect")
        return data

    @staticmethod
    def _read_all(sock: socket.socket) -> bytes:
        buf = bytearray()
        while True:
            chunk = sock.recv(RECV_SIZE)
            if not chunk:
                break
            buf.extend(chunk)
        return bytes(buf)
