from __future__ import annotations

import ipaddress
import socket
import threading
import time

import pytest

from askhostname.scanners import udp_transport
from askhostname.scanners.udp_transport import UDPTransport
from askhostname.utils.error_handler import (
    SocketConnectError, SocketCreateError, SocketSendError, SocketTimeoutError
)

LOCALHOST = ipaddress.IPv4Address("127.0.0.1")


@pytest.fixture()
def udp_server():
    """Loopback UDP server; ``reply(request)`` returns the datagram to send back, or None."""
    servers = []

    def start(reply):
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        sock.bind(("127.0.0.1", 0))
        sock.settimeout(2.0)
        received = []

        def serve():
            try:
                data, peer = sock.recvfrom(2048)
            except OSError:
                return
            received.append(data)
            answer = reply(data)
            if answer is not None:
                sock.sendto(answer, peer)

        thread = threading.Thread(target=serve, daemon=True)
        thread.start()
        servers.append((sock, thread))
        return sock.getsockname()[1], received

    yield start

    for sock, thread in servers:
        thread.join(timeout=3)
        sock.close()


def test_reply_is_returned(udp_server):
    port, received = udp_server(lambda data: b"pong:" + data)
    reply = UDPTransport(timeout_ms=1000).send_and_receive(LOCALHOST, port, b"ping")
    assert reply == b"pong:ping"
    assert received == [b"ping"]


def test_long_reply_is_truncated_to_receive_buffer(udp_server):
    port, _ = udp_server(lambda data: b"x" * 400)
    reply = UDPTransport(timeout_ms=1000).send_and_receive(LOCALHOST, port, b"ping")
    assert reply == b"x" * udp_transport.RECV_BUFF_SIZE


def test_silent_host_returns_none_after_timeout(udp_server):
    port, received = udp_server(lambda data: None)
    started = time.monotonic()
    reply = UDPTransport(timeout_ms=200).send_and_receive(LOCALHOST, port, b"ping")
    elapsed = time.monotonic() - started

    assert reply is None
    assert received == [b"ping"]
    assert 0.15 <= elapsed < 2.0


def test_closed_port_returns_none():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()

    assert UDPTransport(timeout_ms=300).send_and_receive(LOCALHOST, port, b"ping") is None


@pytest.mark.parametrize("timeout_ms", [0, -5])
def test_invalid_timeout_is_rejected(timeout_ms):
    with pytest.raises(SocketTimeoutError):
        UDPTransport(timeout_ms=timeout_ms).send_and_receive(LOCALHOST, 9, b"ping")


def test_timeout_the_platform_cannot_represent_is_rejected():
    with pytest.raises(SocketTimeoutError):
        UDPTransport(timeout_ms=10 ** 13).send_and_receive(LOCALHOST, 9, b"ping")


def test_per_call_timeout_overrides_default():
    with pytest.raises(SocketTimeoutError):
        UDPTransport(timeout_ms=500).send_and_receive(LOCALHOST, 9, b"ping", timeout_ms=0)


class BrokenSocket:
    """Socket double failing at one chosen step."""

    fail_at = None
    closed = False

    def __init__(self, *args, **kwargs):
        if self.fail_at == "create":
            raise OSError("no sockets left")

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        BrokenSocket.closed = True
        return False

    def _maybe_fail(self, step):
        if self.fail_at == step:
            raise OSError(f"{step} failed")

    def bind(self, address):
        self._maybe_fail("bind")

    def connect(self, address):
        self._maybe_fail("connect")

    def settimeout(self, value):
        pass

    def send(self, data):
        self._maybe_fail("send")
        return len(data)

    def recv(self, size):
        self._maybe_fail("recv")
        return b"reply"


@pytest.mark.parametrize(
    "step, error",
    [
        ("create", SocketCreateError),
        ("bind", SocketCreateError),
        ("connect", SocketConnectError),
        ("send", SocketSendError),
    ],
)
def test_socket_failures_map_to_error_types(monkeypatch, step, error):
    monkeypatch.setattr(BrokenSocket, "fail_at", step)
    monkeypatch.setattr(udp_transport.socket, "socket", BrokenSocket)
    with pytest.raises(error):
        UDPTransport(timeout_ms=100).send_and_receive(LOCALHOST, 137, b"ping")


def test_receive_failure_is_folded_into_none(monkeypatch):
    monkeypatch.setattr(BrokenSocket, "fail_at", "recv")
    monkeypatch.setattr(BrokenSocket, "closed", False)
    monkeypatch.setattr(udp_transport.socket, "socket", BrokenSocket)
    assert UDPTransport(timeout_ms=100).send_and_receive(LOCALHOST, 137, b"ping") is None
    assert BrokenSocket.closed
