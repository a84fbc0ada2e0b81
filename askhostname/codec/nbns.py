"""
NetBIOS Name Service NODE STATUS codec (RFC 1002 sections 4.2.17, 4.2.18).

The request asks a host to list every NetBIOS name it has registered. The
reply echoes the request, then carries a TTL, the RDATA length, a name count,
the 18-byte name records and finally the adapter statistics, which start
with the MAC address.
"""

import string
import struct
from typing import List

from .header import build_header
from .reader import BufferUnderrun, ByteReader
from ..core.data_models import MacAddress, NameKind, NBNSAnswer, NetBIOSName, QueryKind
from ..utils.error_handler import InvalidResponseError

PORT = 137

# Encoded wildcard name "*" as sent by nbtscan and nbtstat.exe
QUESTION_NAME = b"\x20" + b"CK" + b"A" * 30 + b"\x00"
QTYPE_NBSTAT = 0x0021
QCLASS_IN = 0x0001

QUERY_SIZE = 12 + len(QUESTION_NAME) + 4
TTL_SIZE = 4
NAME_RECORD_SIZE = 18
NAME_SIZE = 15
MAC_SIZE = 6

GROUP_FLAG = 0x80
PERMANENT_FLAG = 0x02

PRINTABLE = frozenset((string.ascii_letters + string.digits + string.punctuation).encode("ascii"))


def build_query() -> bytes:
    """Build a NODE STATUS request. The result is always QUERY_SIZE bytes."""
    return build_header(QueryKind.NBNS) + QUESTION_NAME + struct.pack("!HH", QTYPE_NBSTAT, QCLASS_IN)


def classify_flags(flags: int) -> NameKind:
    if flags & (GROUP_FLAG | PERMANENT_FLAG) == GROUP_FLAG | PERMANENT_FLAG:
        return NameKind.PERMANENT_GROUP
    if flags & PERMANENT_FLAG:
        return NameKind.PERMANENT
    if flags & GROUP_FLAG:
        return NameKind.GROUP
    return NameKind.UNIQUE


def decode_name_record(chunk: bytes) -> NetBIOSName:
    """
    Decode one 18-byte name record.

    Bytes 0-14 hold the space padded name, byte 15 the suffix, byte 16 the
    flags and byte 17 is reserved. Bytes that are not letters, digits or
    punctuation (padding included) are dropped.
    """
    name = "".join(chr(b) for b in chunk[:NAME_SIZE] if b in PRINTABLE)
    return NetBIOSName(name=name, service=chunk[NAME_SIZE], kind=classify_flags(chunk[NAME_SIZE + 1]))


def parse_response(raw: bytes, request_len: int = QUERY_SIZE) -> List[NBNSAnswer]:
    """
    Parse a NODE STATUS response.

    Args:
        raw: Datagram as received
        request_len: Length of the request the response echoes

    Returns:
        Name records in wire order, followed by the MAC address when present

    Raises:
        InvalidResponseError: If the reply is truncated or holds no names
    """
    reader = ByteReader(raw)
    try:
        reader.skip(request_len + TTL_SIZE)
        data_size = reader.read_u16_be()
        name_count = reader.read_u8()
    except BufferUnderrun as e:
        raise InvalidResponseError("nbns", "response too short", {"length": len(raw)}) from e

    if reader.remaining < NAME_RECORD_SIZE:
        raise InvalidResponseError("nbns", "response too short", {"length": len(raw)})

    available = min(data_size, reader.remaining) // NAME_RECORD_SIZE
    if available < name_count:
        raise InvalidResponseError(
            "nbns",
            "truncated name list",
            {"declared": name_count, "available": available},
        )

    answers: List[NBNSAnswer] = [
        decode_name_record(reader.take(NAME_RECORD_SIZE)) for _ in range(name_count)
    ]
    if not answers:
        raise InvalidResponseError("nbns", "no names in response")

    if reader.remaining >= MAC_SIZE:
        answers.append(MacAddress(reader.take(MAC_SIZE)))

    return answers
