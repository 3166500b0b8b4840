"""
Synthetic header chains for index tests.
"""

from itertools import count

from headerdb.core.config import NetworkParams
from headerdb.core.header_codec import NULL_HASH, parse_header, serialize_header

EASY_BITS = 0x207FFFFF  # work 2 per header
HARD_BITS = 0x1F7FFFFF  # work 512 per header

_nonces = count(1)


def make_header(prev_hash: str, bits: int = EASY_BITS, timestamp: int = 1_600_000_000):
    """Serialize and parse a synthetic header with a unique nonce."""
    raw = serialize_header(
        version=1,
        prev_hash=prev_hash,
        merkle_root="ab" * 32,
        timestamp=timestamp,
        bits=bits,
        nonce=next(_nonces),
    )
    return parse_header(raw)


class ChainBuilder:
    """Builds header branches on top of a shared synthetic genesis."""

    def __init__(self):
        self.genesis = make_header(NULL_HASH)
        self.params = NetworkParams(
            name="unittest",
            genesis_hash=self.genesis.hash,
            genesis_header=self.genesis.raw,
        )

    def branch(self, parent_hash: str, length: int, bits: int = EASY_BITS):
        headers = []
        prev = parent_hash
        for _ in range(length):
            header = make_header(prev, bits=bits)
            headers.append(header)
            prev = header.hash
        return headers


def add_all(idx, headers):
    """Add headers in order and return the reports."""
    return [idx.add(h) for h in headers]
