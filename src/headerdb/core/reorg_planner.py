"""
Reorg planning.

Given the outgoing and incoming best tips, walk both back to their common
ancestor and count how many headers leave and join the best chain. The walk
stops at the fork point, so the cost is proportional to the depth of the
reorg rather than the length of the chain.
"""

from __future__ import annotations

from typing import Optional

from .header_node import HeaderNode, ReorgReport


def plan_reorg(old_tip: Optional[HeaderNode], new_tip: HeaderNode) -> ReorgReport:
    """Count connects and disconnects for moving the best tip to ``new_tip``.

    Args:
        old_tip: Current best tip, or None when no best chain exists yet
        new_tip: Header about to become the best tip

    Returns:
        ReorgReport with ``previous_tip`` set to ``old_tip``
    """
    connect = 0
    disconnect = 0
    new: Optional[HeaderNode] = new_tip
    old = old_tip

    if old is None:
        # First chain: everything back to genesis connects
        while new is not None:
            new = new.parent
            connect += 1
        return ReorgReport(previous_tip=old_tip, connect_count=connect, new_tip=new_tip)

    while new is not None and new.height > old.height:
        new = new.parent
        connect += 1

    while new is not None and old is not None and old.height > new.height:
        old = old.parent
        disconnect += 1

    while new is not None and old is not None and new is not old:
        new = new.parent
        connect += 1
        old = old.parent
        disconnect += 1

    return ReorgReport(
        previous_tip=old_tip,
        connect_count=connect,
        disconnect_count=disconnect,
        new_tip=new_tip,
    )


def find_fork_point(a: HeaderNode, b: HeaderNode) -> Optional[HeaderNode]:
    """Return the deepest common ancestor of ``a`` and ``b`` (possibly one of them)."""
    x: Optional[HeaderNode] = a
    y: Optional[HeaderNode] = b
    while x is not None and y is not None and x.height > y.height:
        x = x.parent
    while x is not None and y is not None and y.height > x.height:
        y = y.parent
    while x is not None and y is not None and x is not y:
        x = x.parent
        y = y.parent
    if x is None or y is None:
        return None
    return x
