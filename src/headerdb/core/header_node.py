"""
Header index data entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

from .exceptions import InvalidHeaderError


@dataclass(frozen=True)
class HeaderNode:
    """A parsed header plus its position in the header tree.

    Created once by ChainIndex on successful insertion and never mutated.
    The key fields are copied out of ``header`` at insertion, so later changes
    to the caller's object do not reach the index. ``parent`` points toward
    genesis only; the index owns every node.
    """

    hash: str
    prev_hash: str
    raw_work: int
    height: int
    cumulative_work: int
    raw: Optional[bytes] = field(default=None, repr=False)
    header: Any = field(default=None, repr=False, compare=False)
    parent: Optional["HeaderNode"] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_header(cls, header: Any, parent: Optional["HeaderNode"] = None) -> "HeaderNode":
        """Snapshot ``header`` as a child of ``parent`` (genesis when None)."""
        raw_work = header.raw_work
        raw = getattr(header, "raw", None)
        return cls(
            hash=header.hash,
            prev_hash=header.prev_hash,
            raw_work=raw_work,
            height=parent.height + 1 if parent is not None else 0,
            cumulative_work=parent.cumulative_work + raw_work if parent is not None else raw_work,
            raw=bytes(raw) if raw is not None else None,
            header=header,
            parent=parent,
        )

    def iter_ancestors(self) -> Iterator["HeaderNode"]:
        """Yield this node, then each ancestor back to genesis."""
        node: Optional[HeaderNode] = self
        while node is not None:
            yield node
            node = node.parent

    def serialize(self) -> bytes:
        if self.raw is None:
            raise InvalidHeaderError(
                f"Header {self.hash} has no serialized form",
                details={"height": self.height},
            )
        return self.raw


@dataclass(frozen=True)
class ReorgReport:
    """Outcome of one insertion as seen by the best chain.

    ``connect_count`` blocks join the best chain and ``disconnect_count``
    blocks leave it. Both are zero when the best tip did not move.
    """

    previous_tip: Optional[HeaderNode]
    connect_count: int = 0
    disconnect_count: int = 0
    new_tip: Optional[HeaderNode] = None

    @property
    def changed_tip(self) -> bool:
        return self.connect_count > 0

    @property
    def is_reorg(self) -> bool:
        return self.disconnect_count > 0

    def to_dict(self) -> dict:
        return {
            "previous_tip": self.previous_tip.hash if self.previous_tip else None,
            "new_tip": self.new_tip.hash if self.new_tip else None,
            "connect_count": self.connect_count,
            "disconnect_count": self.disconnect_count,
        }
