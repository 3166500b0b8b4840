"""
Block locators.

A locator is a list of hashes walking back from a tip: dense for the most
recent headers, then exponentially sparser, always ending with genesis. A
peer scans it for the first hash it knows to find where the two header sets
diverge without exchanging the whole chain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

from .header_node import HeaderNode

if TYPE_CHECKING:
    from .chain_index import ChainIndex

DENSE_ENTRIES = 10


def build_locator(
    start: Optional[HeaderNode],
    genesis_hash: str,
    dense_entries: int = DENSE_ENTRIES,
) -> List[str]:
    """Build a locator from ``start`` back to genesis.

    The stride is 1 for the first ``dense_entries`` hashes and doubles after
    each later entry. ``genesis_hash`` is always appended last, even when the
    walk already ended on it.
    """
    locator: List[str] = []
    step = 1
    node = start
    while node is not None:
        locator.append(node.hash)
        for _ in range(step):
            node = node.parent
            if node is None:
                break
        if len(locator) > dense_entries:
            step *= 2
    locator.append(genesis_hash)
    return locator


def find_locator_fork(index: "ChainIndex", locator: Iterable[str]) -> Optional[HeaderNode]:
    """Return the first locator entry that lies on ``index``'s best chain.

    Falls back to genesis when nothing matches; None only for an empty index.
    """
    for block_hash in locator:
        node = index.get(block_hash)
        if node is not None and index.is_on_best_chain(node):
            return node
    return index.genesis
