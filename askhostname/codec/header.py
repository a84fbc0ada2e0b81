"""
Query header shared by the NBNS and mDNS messages.

Both protocols reuse the 12-byte DNS header layout (RFC 1035 section 4.1.1,
RFC 1002 section 4.2.1.1): six unsigned 16-bit big-endian fields.
"""

import dataclasses
import random
import struct
from dataclasses import dataclass

from ..core.data_models import QueryKind

HEADER_FORMAT = "!HHHHHH"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)

# B flag set, as nbtscan and nbtstat send it
NBNS_FLAGS = 0x0010
MDNS_FLAGS = 0x0000


@dataclass
class QueryHeader:
    transaction_id: int
    flags: int
    qdcount: int = 1
    ancount: int = 0
    nscount: int = 0
    arcount: int = 0

    def to_bytes(self) -> bytes:
        return struct.pack(HEADER_FORMAT, *dataclasses.astuple(self))


def build_header(kind: QueryKind) -> bytes:
    """
    Build the header for a query of the given kind.

    NBNS gets a random transaction id. mDNS unicast queries carry a zero
    transaction id.
    """
    if kind is QueryKind.NBNS:
        header = QueryHeader(transaction_id=random.getrandbits(16), flags=NBNS_FLAGS)
    else:
        header = QueryHeader(transaction_id=0, flags=MDNS_FLAGS)
    return header.to_bytes()
