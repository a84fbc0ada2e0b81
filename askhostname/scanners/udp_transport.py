"""
One-shot UDP request/response transport.

Each call binds a fresh ephemeral socket, sends exactly one datagram and waits
at most the configured timeout for exactly one reply.
"""

import socket
from typing import Optional

from ..core.data_models import IPAddress
from ..utils.error_handler import (
    SocketConnectError, SocketCreateError, SocketSendError, SocketTimeoutError
)
from ..utils.logger import Logger

RECV_BUFF_SIZE = 256


class UDPTransport:
    """
    Sends a request to (address, port) and returns the reply, if any.

    Attributes:
        timeout_ms: Read and write timeout applied to every socket
        recv_buffer_size: Longest reply kept; longer datagrams are truncated
    """

    def __init__(self, timeout_ms: int, recv_buffer_size: int = RECV_BUFF_SIZE, logger: Optional[Logger] = None):
        self.timeout_ms = timeout_ms
        self.recv_buffer_size = recv_buffer_size
        self.logger = logger

    def _apply_timeout(self, sock: socket.socket, timeout_ms: int) -> None:
        # settimeout(0) would switch to non-blocking mode instead of failing
        if not timeout_ms or timeout_ms <= 0:
            raise SocketTimeoutError("invalid socket timeout", {"timeout_ms": timeout_ms})
        try:
            sock.settimeout(timeout_ms / 1000.0)
        except (ValueError, OverflowError, OSError) as e:
            raise SocketTimeoutError(f"cannot set socket timeout: {e}", {"timeout_ms": timeout_ms}) from e

    def send_and_receive(
        self,
        address: IPAddress,
        port: int,
        request: bytes,
        timeout_ms: Optional[int] = None,
    ) -> Optional[bytes]:
        """
        Send one request and wait for one reply.

        Args:
            address: Destination IPv4 address
            port: Destination UDP port
            request: Datagram to send
            timeout_ms: Overrides the transport timeout for this call

        Returns:
            The reply, or None if nothing usable arrived in time

        Raises:
            SocketCreateError, SocketConnectError, SocketTimeoutError, SocketSendError
        """
        if timeout_ms is None:
            timeout_ms = self.timeout_ms

        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        except OSError as e:
            raise SocketCreateError(f"cannot create UDP socket: {e}") from e

        with sock:
            try:
                sock.bind(("0.0.0.0", 0))
            except OSError as e:
                raise SocketCreateError(f"cannot bind UDP socket: {e}") from e

            try:
                sock.connect((str(address), port))
            except OSError as e:
                raise SocketConnectError(f"cannot connect to {address}:{port}: {e}") from e

            self._apply_timeout(sock, timeout_ms)

            try:
                sock.send(request)
            except OSError as e:
                raise SocketSendError(f"cannot send to {address}:{port}: {e}") from e

            try:
                return sock.recv(self.recv_buffer_size)
            except socket.timeout:
                return None
            except OSError as e:
                # ICMP port unreachable and friends look like silence to us
                if self.logger:
                    self.logger.debug(f"No reply from {address}:{port}", reason=e)
                return None
