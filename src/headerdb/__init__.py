"""
headerdb - proof-of-work block header index

Keeps every received block header in memory, tracks the most-work chain,
reports reorganizations, builds chain-sync locators, and persists the best
chain as a flat file of 80-byte headers.
"""

from headerdb.core.chain_index import ChainIndex
from headerdb.core.config import MAINNET, REGTEST, TESTNET, IndexSettings, NetworkParams, get_network_params
from headerdb.core.exceptions import (
    ConfigurationError,
    CorruptFileError,
    DuplicateBlockError,
    HeaderDBError,
    InvalidGenesisError,
    InvalidHeaderError,
    OrphanBlockError,
)
from headerdb.core.header_node import HeaderNode, ReorgReport
from headerdb.core.header_store import HeaderStore

__version__ = "0.1.0"

__all__ = [
    "ChainIndex",
    "HeaderStore",
    "HeaderNode",
    "ReorgReport",
    "NetworkParams",
    "IndexSettings",
    "MAINNET",
    "TESTNET",
    "REGTEST",
    "get_network_params",
    "HeaderDBError",
    "DuplicateBlockError",
    "OrphanBlockError",
    "InvalidGenesisError",
    "InvalidHeaderError",
    "CorruptFileError",
    "ConfigurationError",
]
