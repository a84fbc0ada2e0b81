"""
Multicast DNS reverse lookup codec (RFC 6762, RFC 1035 section 3.5).

The query is a plain PTR question for <d>.<c>.<b>.<a>.in-addr.arpa sent
unicast to the host's port 5353. The reply echoes the question and carries
one PTR answer whose RDATA is the host's .local name.
"""

import ipaddress
import struct
from typing import Optional

from .header import HEADER_SIZE, build_header
from .nbns import PRINTABLE
from .reader import BufferUnderrun, ByteReader
from ..core.data_models import IPAddress, QueryKind
from ..utils.error_handler import InvalidResponseError, Ipv6UnsupportedError

PORT = 5353

REVERSE_ZONE = b"\x07in-addr\x04arpa\x00"
QTYPE_PTR = 0x000C
QCLASS_IN = 0x0001

# answer name pointer (2) + type (2) + cache-flush/class (2) + TTL (4)
ANSWER_PREAMBLE_SIZE = 10
ANCOUNT_OFFSET = 6


def encode_reverse_name(ip: IPAddress) -> bytes:
    """
    Encode the in-addr.arpa name of an IPv4 address as DNS labels.

    >>> encode_reverse_name(ipaddress.IPv4Address("127.0.0.1"))
    b'\\x011\\x010\\x010\\x03127\\x07in-addr\\x04arpa\\x00'
    """
    if not isinstance(ip, ipaddress.IPv4Address):
        raise Ipv6UnsupportedError("mDNS reverse lookup needs an IPv4 address", {"address": ip})

    labels = bytearray()
    for octet in reversed(ip.packed):
        digits = str(octet).encode("ascii")
        labels.append(len(digits))
        labels += digits
    return bytes(labels) + REVERSE_ZONE


def _decode_labels(first_length: int, data: bytes) -> str:
    left = first_length
    chars = []
    for b in data:
        if left == 0:
            if b == 0:
                break
            left = b
            chars.append(".")
            continue
        left -= 1
        if b in PRINTABLE:
            chars.append(chr(b))
    return "".join(chars)


def decode_name(encoded: bytes) -> str:
    """Decode a length-prefixed label sequence into a dotted name."""
    if not encoded:
        return ""
    return _decode_labels(encoded[0], encoded[1:])


def build_query(ip: IPAddress) -> bytes:
    """
    Build a reverse PTR query.

    The length is HEADER_SIZE + the encoded name + 4, and the encoded name
    grows with the number of decimal digits in each octet.
    """
    return build_header(QueryKind.MDNS) + encode_reverse_name(ip) + struct.pack("!HH", QTYPE_PTR, QCLASS_IN)


def min_response_size(request_len: int) -> int:
    # answer preamble, answer size and the first label length
    return request_len + ANSWER_PREAMBLE_SIZE + 2 + 1


def parse_response(raw: bytes, request_len: int) -> Optional[str]:
    """
    Parse the PTR answer of a reverse lookup.

    Args:
        raw: Datagram as received
        request_len: Length of the request the response echoes

    Returns:
        The dotted domain name, or None if the reply carries no answer

    Raises:
        InvalidResponseError: If the reply is truncated or the name is empty
    """
    if len(raw) < max(min_response_size(request_len), HEADER_SIZE):
        raise InvalidResponseError("mdns", "response too short", {"length": len(raw)})

    reader = ByteReader(raw)
    # responder echoed the question without answering it
    if reader.peek_u16_be(ANCOUNT_OFFSET) == 0:
        return None

    try:
        reader.skip(request_len + ANSWER_PREAMBLE_SIZE)
        answer_size = reader.read_u16_be()
        first_length = reader.read_u8()
    except BufferUnderrun as e:
        raise InvalidResponseError("mdns", "response too short", {"length": len(raw)}) from e

    if answer_size < 2:
        raise InvalidResponseError("mdns", "answer too short", {"answer_size": answer_size})

    data = reader.take(min(answer_size - 2, reader.remaining))
    name = _decode_labels(first_length, data)
    if not name:
        raise InvalidResponseError("mdns", "empty domain name")
    return name
