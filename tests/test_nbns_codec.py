from __future__ import annotations

import struct

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from askhostname.codec import nbns
from askhostname.core.data_models import MacAddress, NameKind, NetBIOSName
from askhostname.utils.error_handler import ErrorType, InvalidResponseError

from conftest import name_record, nbns_response


def test_query_has_fixed_size_and_layout():
    query = nbns.build_query()
    assert len(query) == nbns.QUERY_SIZE == 50
    assert query[12:46] == b"\x20CK" + b"A" * 30 + b"\x00"
    assert struct.unpack("!HH", query[46:50]) == (0x0021, 0x0001)


def test_parse_names_and_mac():
    raw = nbns_response([
        name_record("WORKSTATION", 0x00, 0x04),
        name_record("WORKGROUP", 0x00, 0x84),
        name_record("WORKSTATION", 0x20, 0x04),
    ])
    answers = nbns.parse_response(raw, nbns.QUERY_SIZE)

    assert answers[:3] == [
        NetBIOSName("WORKSTATION", 0x00, NameKind.UNIQUE),
        NetBIOSName("WORKGROUP", 0x00, NameKind.GROUP),
        NetBIOSName("WORKSTATION", 0x20, NameKind.UNIQUE),
    ]
    assert answers[3] == MacAddress(b"\x00\x11\x22\x33\x44\x55")
    assert str(answers[3]) == "00:11:22:33:44:55"


@pytest.mark.parametrize(
    "flags, kind",
    [
        (0x00, NameKind.UNIQUE),
        (0x04, NameKind.UNIQUE),
        (0x80, NameKind.GROUP),
        (0x84, NameKind.GROUP),
        (0x02, NameKind.PERMANENT),
        (0x82, NameKind.PERMANENT_GROUP),
        (0x86, NameKind.PERMANENT_GROUP),
        (0xFF, NameKind.PERMANENT_GROUP),
    ],
)
def test_flag_classification(flags, kind):
    assert nbns.classify_flags(flags) is kind
    raw = nbns_response([name_record("HOST", 0x00, flags)])
    assert nbns.parse_response(raw)[0].kind is kind


def test_non_printable_bytes_are_dropped():
    record = b"AB\x01C\xffD" + b" " * 9 + bytes([0x20, 0x04, 0x00])
    answers = nbns.parse_response(nbns_response([record]))
    assert answers[0].name == "ABCD"
    assert answers[0].service == 0x20


def test_mac_is_omitted_when_buffer_ends_after_names():
    answers = nbns.parse_response(nbns_response([name_record("HOST")], mac=None))
    assert answers == [NetBIOSName("HOST", 0x00, NameKind.UNIQUE)]


@pytest.mark.parametrize("length", [0, 12, 50, 54, 56, 57, 57 + 17])
def test_short_buffers_are_rejected(length):
    raw = nbns_response([name_record("HOST")])[:length]
    with pytest.raises(InvalidResponseError) as excinfo:
        nbns.parse_response(raw, nbns.QUERY_SIZE)
    assert excinfo.value.protocol == "nbns"
    assert excinfo.value.error_type is ErrorType.INVALID_RESPONSE_NBNS


def test_declared_count_larger_than_buffer_is_rejected():
    # count says 2, only one 18-byte record before the buffer ends
    raw = nbns_response([name_record("HOST")], mac=None, name_count=2)
    with pytest.raises(InvalidResponseError, match="truncated"):
        nbns.parse_response(raw)


def test_records_are_bounded_by_data_size():
    raw = nbns_response([name_record("ONE"), name_record("TWO")], data_size=18)
    with pytest.raises(InvalidResponseError):
        nbns.parse_response(raw)


def test_zero_names_is_an_error_even_with_statistics():
    raw = nbns_response([], name_count=0)
    assert len(raw) > nbns.QUERY_SIZE + 7 + 18
    with pytest.raises(InvalidResponseError, match="no names"):
        nbns.parse_response(raw)


@given(st.binary(max_size=300))
@settings(max_examples=300)
def test_parse_never_fails_with_anything_but_invalid_response(data):
    try:
        answers = nbns.parse_response(data)
    except InvalidResponseError:
        return
    assert any(isinstance(a, NetBIOSName) for a in answers)
