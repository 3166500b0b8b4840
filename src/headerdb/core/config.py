"""
Header index configuration.

Network parameters (the expected genesis) and index tuning knobs. Values are
passed explicitly; the library reads no environment variables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from .exceptions import ConfigurationError
from .header_codec import parse_header


def _validate_hash(value: str, field_name: str) -> None:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string")
    if len(value) != 64:
        raise ConfigurationError(f"{field_name} must be 64 characters (got {len(value)})")
    try:
        int(value, 16)
    except ValueError as e:
        raise ConfigurationError(f"{field_name} must be a valid hexadecimal string: {e}") from e


@dataclass(frozen=True)
class NetworkParams:
    """Per-network constants consumed by the index."""

    name: str
    genesis_hash: str
    genesis_header: Optional[bytes] = None

    def __post_init__(self) -> None:
        _validate_hash(self.genesis_hash, "genesis_hash")
        object.__setattr__(self, "genesis_hash", self.genesis_hash.lower())
        if self.genesis_header is not None:
            parsed = parse_header(self.genesis_header)
            if parsed.hash != self.genesis_hash:
                raise ConfigurationError(
                    f"genesis_header hashes to {parsed.hash}, expected {self.genesis_hash}",
                    details={"network": self.name},
                )


@dataclass(frozen=True)
class IndexSettings:
    """Tunables for chain sync."""

    locator_dense_entries: int = 10
    headers_batch_max: int = 2000

    def __post_init__(self) -> None:
        if self.locator_dense_entries < 1:
            raise ConfigurationError("locator_dense_entries must be at least 1")
        if self.headers_batch_max < 1:
            raise ConfigurationError("headers_batch_max must be at least 1")


MAINNET = NetworkParams(
    name="mainnet",
    genesis_hash="000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f",
    genesis_header=bytes.fromhex(
        "01000000"
        "0000000000000000000000000000000000000000000000000000000000000000"
        "3ba3edfd7a7b12b27ac72c3e67768f617fc81bc3888a51323a9fb8aa4b1e5e4a"
        "29ab5f49"
        "ffff001d"
        "1dac2b7c"
    ),
)

TESTNET = NetworkParams(
    name="testnet",
    genesis_hash="000000000933ea01ad0ee984209779baaec3ced90fa3f408719526f8d77f4943",
)

REGTEST = NetworkParams(
    name="regtest",
    genesis_hash="0f9188f13cb7b2c71f2a335e3a4fc328bf5beb436012afca590b1a11466e2206",
)

NETWORKS: Dict[str, NetworkParams] = {
    MAINNET.name: MAINNET,
    TESTNET.name: TESTNET,
    REGTEST.name: REGTEST,
}


def get_network_params(name: str) -> NetworkParams:
    """Look up a preset by name (case-insensitive)."""
    try:
        return NETWORKS[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ConfigurationError(
            f"Unknown network: {name!r}",
            details={"known": sorted(NETWORKS)},
        ) from None
