"""
Unit tests for the 80-byte header codec.

Coverage targets:
- Parsing the Bitcoin mainnet genesis header
- Compact difficulty decoding and work ordering
- Malformed input rejection
"""

import pytest

from headerdb.core.config import MAINNET
from headerdb.core.exceptions import InvalidHeaderError
from headerdb.core.header_codec import (
    HEADER_SIZE,
    NULL_HASH,
    bits_to_target,
    hash_decode,
    hash_encode,
    parse_header,
    serialize_header,
    work_from_bits,
)


def test_parse_mainnet_genesis():
    header = parse_header(MAINNET.genesis_header)
    assert header.hash == MAINNET.genesis_hash
    assert header.prev_hash == NULL_HASH
    assert header.merkle_root == "4a5e1e4baab89f3a32518a88c31bc87f618f76673e2cc77ab2127b7afdeda33b"
    assert header.version == 1
    assert header.timestamp == 1231006505
    assert header.bits == 0x1D00FFFF
    assert header.nonce == 2083236893
    assert header.raw_work == 0x100010001


def test_serialize_round_trips_fields():
    header = parse_header(MAINNET.genesis_header)
    raw = serialize_header(
        version=header.version,
        prev_hash=header.prev_hash,
        merkle_root=header.merkle_root,
        timestamp=header.timestamp,
        bits=header.bits,
        nonce=header.nonce,
    )
    assert raw == MAINNET.genesis_header
    assert len(raw) == HEADER_SIZE


def test_wrong_length_rejected():
    with pytest.raises(InvalidHeaderError) as exc_info:
        parse_header(b"\x00" * 79)
    assert exc_info.value.details["actual"] == 79

    with pytest.raises(InvalidHeaderError):
        parse_header("not bytes")


def test_bits_to_target():
    assert bits_to_target(0x1D00FFFF) == 0xFFFF << (8 * 26)
    assert bits_to_target(0x03123456) == 0x123456
    assert bits_to_target(0x02123456) == 0x1234
    assert bits_to_target(0x00000000) == 0


def test_bits_to_target_rejects_negative_and_overflow():
    with pytest.raises(InvalidHeaderError):
        bits_to_target(0x04923456)
    with pytest.raises(InvalidHeaderError):
        bits_to_target(0x2300FFFF)


def test_work_is_monotonic_in_difficulty():
    easy = work_from_bits(0x207FFFFF)
    medium = work_from_bits(0x1F7FFFFF)
    hard = work_from_bits(0x1D00FFFF)
    assert easy == 2
    assert medium == 512
    assert easy < medium < hard
    assert work_from_bits(0) == 0


def test_hash_encode_reverses_bytes():
    raw = bytes(range(32))
    assert hash_encode(raw) == raw[::-1].hex()
    assert hash_decode(hash_encode(raw)) == raw
    with pytest.raises(InvalidHeaderError):
        hash_decode("zz")
    with pytest.raises(InvalidHeaderError):
        hash_decode("00" * 31)
