"""
NetBIOS NODE STATUS scanner.
"""

from typing import List

from .base_scanner import BaseScanner
from ..codec import nbns
from ..core.data_models import IPAddress, NBNSAnswer


class NBNSScanner(BaseScanner):
    """Asks a host for its registered NetBIOS names over UDP/137."""

    protocol = "nbns"
    port = nbns.PORT

    def build_query(self, address: IPAddress) -> bytes:
        return nbns.build_query()

    def parse_response(self, raw: bytes, request_len: int) -> List[NBNSAnswer]:
        return nbns.parse_response(raw, request_len)
