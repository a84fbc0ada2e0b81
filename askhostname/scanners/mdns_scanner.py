"""
mDNS reverse lookup scanner.
"""

from typing import Optional

from .base_scanner import BaseScanner
from ..codec import mdns
from ..core.data_models import IPAddress


class MDNSScanner(BaseScanner):
    """Asks a host's mDNS responder for the PTR name of its address over UDP/5353."""

    protocol = "mdns"
    port = mdns.PORT

    def build_query(self, address: IPAddress) -> bytes:
        return mdns.build_query(address)

    def parse_response(self, raw: bytes, request_len: int) -> Optional[str]:
        return mdns.parse_response(raw, request_len)
