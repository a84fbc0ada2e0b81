"""
Base scanner interface for askhostname.

A scanner pairs one protocol codec with the UDP transport: it builds the
request for an address, sends it and parses whatever comes back.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

from ..core.data_models import IPAddress
from .udp_transport import UDPTransport


class BaseScanner(ABC):
    """
    Abstract base class for the per-protocol scanners.

    Subclasses set ``protocol`` and ``port`` and implement the two codec
    hooks; ``query`` drives the exchange.
    """

    protocol: str = ""
    port: int = 0

    def __init__(self, transport: UDPTransport, logger=None, port: Optional[int] = None):
        """
        Initialize the base scanner.

        Args:
            transport: Transport used for every exchange
            logger: Logger instance for outputting query progress
            port: Destination port, defaults to the protocol's well-known port
        """
        self.transport = transport
        self.logger = logger
        if port is not None:
            self.port = port

    @abstractmethod
    def build_query(self, address: IPAddress) -> bytes:
        """Build the request datagram for ``address``."""
        pass

    @abstractmethod
    def parse_response(self, raw: bytes, request_len: int) -> Any:
        """
        Parse a reply.

        Raises:
            InvalidResponseError: If the reply is malformed
        """
        pass

    def query(self, address: IPAddress) -> Optional[Any]:
        """
        Query one host.

        Args:
            address: Host to ask

        Returns:
            Parsed answer, or None if the host did not answer in time
        """
        request = self.build_query(address)
        started = datetime.now()
        raw = self.transport.send_and_receive(address, self.port, request)
        elapsed = (datetime.now() - started).total_seconds()

        if raw is None:
            self._log_debug(f"{self.protocol}: no reply from {address} after {elapsed:.3f}s")
            return None

        self._log_debug(f"{self.protocol}: {len(raw)} bytes from {address} in {elapsed:.3f}s")
        return self.parse_response(raw, len(request))

    def _log_debug(self, message: str) -> None:
        """Log a debug message if logger is available."""
        if self.logger:
            self.logger.debug(message)
