"""
In-memory header tree with best-chain selection.

Every accepted header becomes a HeaderNode keyed by hash. The best tip is the
node with the most cumulative work; on ties the incumbent stays. Insertions
that move the best tip run the reorg planner and report how many headers left
and joined the best chain.

Not thread-safe: callers must serialize ``add`` and must not read while an
``add`` is in progress.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .config import IndexSettings, NetworkParams
from .exceptions import (
    DuplicateBlockError,
    InvalidGenesisError,
    OrphanBlockError,
)
from .header_codec import parse_header
from .header_node import HeaderNode, ReorgReport
from .locator import build_locator, find_locator_fork
from .reorg_planner import plan_reorg

logger = logging.getLogger(__name__)


class ChainIndex:
    """Hash-keyed header tree tracking the most-work chain."""

    def __init__(
        self,
        params: NetworkParams,
        settings: Optional[IndexSettings] = None,
        parser: Callable[[bytes], Any] = parse_header,
    ) -> None:
        self.params = params
        self.settings = settings or IndexSettings()
        self.parser = parser
        self.nodes_by_hash: Dict[str, HeaderNode] = {}
        self._best_tip: Optional[HeaderNode] = None
        self._genesis: Optional[HeaderNode] = None

    # --- Read accessors -----------------------------------------------------

    @property
    def genesis_hash(self) -> str:
        return self.params.genesis_hash

    @property
    def best_tip(self) -> Optional[HeaderNode]:
        return self._best_tip

    @property
    def genesis(self) -> Optional[HeaderNode]:
        return self._genesis

    @property
    def height(self) -> int:
        """Height of the best tip, -1 when empty."""
        return self._best_tip.height if self._best_tip else -1

    def get(self, block_hash: str) -> Optional[HeaderNode]:
        return self.nodes_by_hash.get(block_hash)

    def __getitem__(self, block_hash: str) -> HeaderNode:
        return self.nodes_by_hash[block_hash]

    def __contains__(self, block_hash: object) -> bool:
        return block_hash in self.nodes_by_hash

    def __len__(self) -> int:
        return len(self.nodes_by_hash)

    def is_on_best_chain(self, node: Union[HeaderNode, str]) -> bool:
        """True if ``node`` is the best tip or one of its ancestors."""
        if isinstance(node, str):
            found = self.get(node)
            if found is None:
                return False
            node = found
        tip = self._best_tip
        if tip is None or node.height > tip.height:
            return False
        walker: Optional[HeaderNode] = tip
        while walker is not None and walker.height > node.height:
            walker = walker.parent
        return walker is node

    def best_chain(self) -> List[HeaderNode]:
        """Best chain nodes, genesis first."""
        if self._best_tip is None:
            return []
        chain = list(self._best_tip.iter_ancestors())
        chain.reverse()
        return chain

    # --- Insertion ----------------------------------------------------------

    def add(self, header: Any) -> ReorgReport:
        """Insert a parsed header and re-select the best chain.

        Args:
            header: Object exposing ``hash``, ``prev_hash`` and ``raw_work``

        Returns:
            ReorgReport describing the best-chain change, if any

        Raises:
            DuplicateBlockError: hash already indexed
            InvalidGenesisError: first header is not the expected genesis
            OrphanBlockError: parent hash unknown
        """
        block_hash = header.hash
        if block_hash in self.nodes_by_hash:
            logger.debug(
                "Rejected duplicate header",
                extra={"event": "index.duplicate", "hash": block_hash},
            )
            raise DuplicateBlockError(
                f"Duplicate block {block_hash}",
                details={"hash": block_hash},
            )

        if not self.nodes_by_hash:
            if block_hash != self.genesis_hash:
                raise InvalidGenesisError(
                    f"Invalid genesis block {block_hash}, expected {self.genesis_hash}",
                    details={"hash": block_hash, "expected": self.genesis_hash},
                )
            node = HeaderNode.from_header(header)
            self._genesis = node
        else:
            prev_hash = header.prev_hash
            parent = self.nodes_by_hash.get(prev_hash)
            if parent is None:
                logger.debug(
                    "Rejected orphan header",
                    extra={"event": "index.orphan", "hash": block_hash, "prev_hash": prev_hash},
                )
                raise OrphanBlockError(
                    f"Orphan block {block_hash}; prev {prev_hash} not found",
                    details={"hash": block_hash, "prev_hash": prev_hash},
                )
            node = HeaderNode.from_header(header, parent)

        self.nodes_by_hash[node.hash] = node
        logger.debug(
            "Indexed header",
            extra={"event": "index.added", "hash": block_hash, "height": node.height},
        )

        old_tip = self._best_tip
        if old_tip is not None and node.cumulative_work <= old_tip.cumulative_work:
            return ReorgReport(previous_tip=old_tip, new_tip=old_tip)

        report = plan_reorg(old_tip, node)
        self._best_tip = node
        self._log_tip_change(report)
        return report

    def add_serialized(self, raw: bytes) -> ReorgReport:
        """Parse ``raw`` with the configured parser and insert it."""
        return self.add(self.parser(raw))

    def _log_tip_change(self, report: ReorgReport) -> None:
        new_tip = report.new_tip
        payload = {"event": "index.best_tip", "height": new_tip.height, **report.to_dict()}
        if report.is_reorg:
            payload["event"] = "index.reorg"
            logger.warning(
                "Chain reorganization: %d disconnected, %d connected",
                report.disconnect_count,
                report.connect_count,
                extra=payload,
            )
        else:
            logger.info("New best tip at height %d", new_tip.height, extra=payload)

    # --- Chain sync ---------------------------------------------------------

    def locator(self, start: Optional[HeaderNode] = None) -> List[str]:
        """Locator hashes from ``start`` (default: best tip) back to genesis."""
        if start is None:
            start = self._best_tip
        return build_locator(start, self.genesis_hash, self.settings.locator_dense_entries)

    def headers_after(self, locator: Iterable[str], limit: Optional[int] = None) -> List[HeaderNode]:
        """Best-chain nodes following the locator's fork point, oldest first."""
        if limit is None:
            limit = self.settings.headers_batch_max
        fork = find_locator_fork(self, locator)
        if fork is None or self._best_tip is None:
            return []
        result: List[HeaderNode] = []
        for node in self._best_tip.iter_ancestors():
            if node is fork:
                break
            result.append(node)
        result.reverse()
        return result[:limit]
