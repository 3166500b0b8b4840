"""
Flat-file header persistence.

The file is a bare sequence of fixed-size serialized headers in genesis-first
order: no magic, no framing. Loading replays every record through
``ChainIndex.add_serialized``; saving writes only the current best chain, so
side branches held in memory do not survive a save/load cycle.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .chain_index import ChainIndex
from .config import IndexSettings, NetworkParams
from .exceptions import CorruptFileError, HeaderDBError, get_error_context
from .header_codec import HEADER_SIZE

logger = logging.getLogger(__name__)


class HeaderStore:
    """Load and save a ChainIndex's best chain as fixed-size records."""

    record_size = HEADER_SIZE

    def __init__(self, index: ChainIndex):
        self.index = index

    @classmethod
    def open(
        cls,
        path: str,
        params: NetworkParams,
        settings: Optional[IndexSettings] = None,
    ) -> "HeaderStore":
        """Build a fresh index and load ``path`` into it if the file exists.

        The index is only returned after a complete load, so a failure never
        exposes a partially loaded index.
        """
        store = cls(ChainIndex(params, settings))
        if os.path.exists(path):
            store.load(path)
        return store

    def load(self, path: str) -> int:
        """Add every record in ``path`` to the index, in file order.

        Returns:
            Number of headers added

        Raises:
            CorruptFileError: size is not a multiple of the record size, or a
                record was cut short
            HeaderDBError: any insertion failure, which aborts the load;
                headers added before it stay indexed
        """
        size = self.record_size
        added = 0
        with open(path, "rb") as f:
            file_size = os.fstat(f.fileno()).st_size
            if file_size % size != 0:
                raise CorruptFileError(
                    f"Corrupted header db: {file_size} bytes is not a multiple of {size}",
                    details={"path": path, "file_size": file_size, "record_size": size},
                )
            while True:
                record = f.read(size)
                if not record:
                    break
                if len(record) < size:
                    raise CorruptFileError(
                        f"Truncated header record at offset {added * size}",
                        details={"path": path, "offset": added * size},
                    )
                try:
                    self.index.add_serialized(record)
                except HeaderDBError as e:
                    logger.error(
                        "Header load aborted",
                        extra={
                            "event": "store.load_failed",
                            "path": path,
                            "record": added,
                            **get_error_context(e),
                        },
                    )
                    raise
                added += 1

        logger.info(
            "Loaded %d headers",
            added,
            extra={"event": "store.loaded", "path": path, "height": self.index.height},
        )
        return added

    def save(self, path: str) -> int:
        """Write the best chain to ``path``, genesis first.

        Writes to a temporary sibling and renames it into place.

        Returns:
            Number of headers written
        """
        records = [node.serialize() for node in self.index.best_chain()]

        tmp_path = f"{path}.tmp"
        try:
            with open(tmp_path, "wb") as f:
                for record in records:
                    f.write(record)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error(
                "Header save failed",
                extra={"event": "store.save_failed", "path": path, **get_error_context(e)},
            )
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

        logger.info(
            "Saved %d headers",
            len(records),
            extra={"event": "store.saved", "path": path, "height": self.index.height},
        )
        return len(records)
