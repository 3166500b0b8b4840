"""
Default 80-byte block header codec.

Parses and serializes Bitcoin-style headers and decodes the compact
difficulty ("bits") field into a comparable work value. The index only needs
an object exposing ``hash``, ``prev_hash``, ``raw_work`` and ``raw``, so this
module can be swapped for another parser.
"""

from __future__ import annotations

import hashlib
import struct
from dataclasses import dataclass

from .exceptions import InvalidHeaderError

HEADER_SIZE = 80  # bytes
NULL_HASH = "00" * 32

_HEADER_STRUCT = struct.Struct("<I32s32sIII")


def sha256d(data: bytes) -> bytes:
    """Double SHA-256."""
    return hashlib.sha256(hashlib.sha256(data).digest()).digest()


def hash_encode(raw_hash: bytes) -> str:
    """Render a 32-byte internal hash as display-order hex."""
    return raw_hash[::-1].hex()


def hash_decode(hex_hash: str) -> bytes:
    """Inverse of :func:`hash_encode`."""
    try:
        raw = bytes.fromhex(hex_hash)[::-1]
    except ValueError as e:
        raise InvalidHeaderError(f"Invalid hash hex: {hex_hash!r}") from e
    if len(raw) != 32:
        raise InvalidHeaderError(f"Hash must be 32 bytes (got {len(raw)})")
    return raw


def bits_to_target(bits: int) -> int:
    """Convert compact bits to the full target integer."""
    exponent = (bits >> 24) & 0xFF
    mantissa = bits & 0x007FFFFF
    if bits & 0x00800000 and mantissa:
        raise InvalidHeaderError(f"Negative compact target: {bits:#010x}")
    if exponent <= 3:
        target = mantissa >> (8 * (3 - exponent))
    else:
        target = mantissa << (8 * (exponent - 3))
    if target >> 256:
        raise InvalidHeaderError(f"Compact target overflows 256 bits: {bits:#010x}")
    return target


def work_from_bits(bits: int) -> int:
    """Expected number of hashes needed to meet the target encoded by ``bits``.

    Monotonic in difficulty: a smaller target always yields more work.
    """
    target = bits_to_target(bits)
    if target == 0:
        return 0
    return (1 << 256) // (target + 1)


@dataclass(frozen=True)
class ParsedHeader:
    """Decoded 80-byte header plus its hash and work."""

    version: int
    prev_hash: str
    merkle_root: str
    timestamp: int
    bits: int
    nonce: int
    hash: str
    raw_work: int
    raw: bytes


def serialize_header(
    version: int,
    prev_hash: str,
    merkle_root: str,
    timestamp: int,
    bits: int,
    nonce: int,
) -> bytes:
    """Pack header fields into the 80-byte wire form."""
    try:
        return _HEADER_STRUCT.pack(
            version,
            hash_decode(prev_hash),
            hash_decode(merkle_root),
            timestamp,
            bits,
            nonce,
        )
    except struct.error as e:
        raise InvalidHeaderError(f"Header field out of range: {e}") from e


def parse_header(raw: bytes) -> ParsedHeader:
    """Decode 80 serialized bytes.

    Raises:
        InvalidHeaderError: wrong length or undecodable difficulty
    """
    if not isinstance(raw, (bytes, bytearray, memoryview)):
        raise InvalidHeaderError(f"Header must be bytes, got {type(raw).__name__}")
    raw = bytes(raw)
    if len(raw) != HEADER_SIZE:
        raise InvalidHeaderError(
            f"Invalid header length: {len(raw)}",
            details={"expected": HEADER_SIZE, "actual": len(raw)},
        )
    version, prev_raw, merkle_raw, timestamp, bits, nonce = _HEADER_STRUCT.unpack(raw)
    return ParsedHeader(
        version=version,
        prev_hash=hash_encode(prev_raw),
        merkle_root=hash_encode(merkle_raw),
        timestamp=timestamp,
        bits=bits,
        nonce=nonce,
        hash=hash_encode(sha256d(raw)),
        raw_work=work_from_bits(bits),
        raw=raw,
    )
