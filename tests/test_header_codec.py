from __future__ import annotations

import struct

from askhostname.codec import header
from askhostname.codec.header import HEADER_SIZE, QueryHeader, build_header
from askhostname.core.data_models import QueryKind


def test_header_is_twelve_bytes():
    assert HEADER_SIZE == 12
    assert len(build_header(QueryKind.NBNS)) == 12
    assert len(build_header(QueryKind.MDNS)) == 12


def test_nbns_header_fields(monkeypatch):
    monkeypatch.setattr(header.random, "getrandbits", lambda bits: 0xBEEF)
    fields = struct.unpack("!HHHHHH", build_header(QueryKind.NBNS))
    assert fields == (0xBEEF, 0x0010, 1, 0, 0, 0)


def test_mdns_header_has_zero_id_and_flags():
    assert build_header(QueryKind.MDNS) == b"\x00\x00\x00\x00\x00\x01\x00\x00\x00\x00\x00\x00"


def test_query_header_packs_big_endian():
    raw = QueryHeader(transaction_id=0x1234, flags=0xABCD, qdcount=2, ancount=3, nscount=4, arcount=5).to_bytes()
    assert raw == bytes.fromhex("1234abcd0002000300040005")
