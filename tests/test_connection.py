from __future__ import annotations

import socket
import socketserver
import threading

import pytest

from spremote.core.base import Agent
from spremote.core.errors import ConfigurationError, TransportError
from spremote.core.tcp import Connection, Endpoint, encode_frame


class _DeviceHandler(socketserver.BaseRequestHandler):
    """Reads one frame of known size, answers, and closes the stream."""

    def handle(self):
        expected = self.server.expected_size
        buf = bytearray()
        while len(buf) < expected:
            chunk = self.request.recv(expected - len(buf))
            if not chunk:
                break
            buf.extend(chunk)
        self.server.received.append(bytes(buf))
        self.request.sendall(self.server.reply)


@pytest.fixture
def device():
    server = socketserver.TCPServer(("127.0.0.1", 0), _DeviceHandler)
    server.received = []
    server.reply = b""
    server.expected_size = 0
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


def _endpoint(server) -> Endpoint:
    host, port = server.server_address
    return Endpoint(host, port)


def test_exchange_over_loopback(device):
    frame = encode_frame("M0001")
    device.expected_size = len(frame)
    device.reply = b"\x00\x20" + b"M00010000INIT OK" + b"x" * 4000
    data = Connection(_endpoint(device)).exchange(frame)
    assert device.received == [frame]
    assert data == device.reply


def test_one_connection_per_call(device):
    frame = encode_frame("S00010001100")
    device.expected_size = len(frame)
    device.reply = b"00S00010000"
    agent = Agent(Connection(_endpoint(device)))
    assert agent.transmit("S00010001100") == "S00010000"
    assert agent.transmit("S00010001100") == "S00010000"
    assert device.received == [frame, frame]


def test_tag_block_reaches_device(device):
    frame = encode_frame("C000100010000036000000", "0B9F1C009A009F21009F4100")
    device.expected_size = len(frame)
    device.reply = b"00C00010000"
    Agent(Connection(_endpoint(device))).transmit(
        "C000100010000036000000", "0B9F1C009A009F21009F4100")
    assert device.received[0].endswith(bytes.fromhex("0B9F1C009A009F21009F4100"))


def test_connection_refused():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        port = probe.getsockname()[1]
    with pytest.raises(TransportError):
        Connection(Endpoint("127.0.0.1", port)).exchange(b"\x00\x05M0001")


def test_read_failure_is_transport_error(monkeypatch):
    class BrokenSocket:
        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def sendall(self, data):
            pass

        def recv(self, size):
            raise ConnectionResetError("reset by peer")

    monkeypatch.setattr(socket, "create_connection", lambda address: BrokenSocket())
    with pytest.raises(TransportError):
        Connection(Endpoint("terminal", 15200)).exchange(b"\x00\x05M0001")


@pytest.mark.parametrize("host,port", [
    ("", 15200),
    ("   ", 15200),
    (None, 15200),
    ("terminal", 0),
    ("terminal", 70000),
    ("terminal", "15200"),
    ("terminal", True),
])
def test_invalid_endpoint(host, port):
    with pytest.raises(ConfigurationError):
        Endpoint(host, port)


def test_default_port():
    assert Endpoint("terminal").port == 15200
