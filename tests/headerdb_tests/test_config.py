"""
Tests for network parameters and index settings.
"""

import pytest

from headerdb.core.config import (
    MAINNET,
    NETWORKS,
    IndexSettings,
    NetworkParams,
    get_network_params,
)
from headerdb.core.exceptions import ConfigurationError


def test_presets_lookup_case_insensitive():
    assert get_network_params("mainnet") is MAINNET
    assert get_network_params(" MainNet ") is MAINNET
    assert set(NETWORKS) == {"mainnet", "testnet", "regtest"}


def test_unknown_network_raises():
    with pytest.raises(ConfigurationError) as exc_info:
        get_network_params("signet")
    assert "mainnet" in exc_info.value.details["known"]


def test_genesis_hash_validation():
    with pytest.raises(ConfigurationError):
        NetworkParams(name="bad", genesis_hash="abc")
    with pytest.raises(ConfigurationError):
        NetworkParams(name="bad", genesis_hash="zz" * 32)

    params = NetworkParams(name="upper", genesis_hash="AB" * 32)
    assert params.genesis_hash == "ab" * 32


def test_genesis_header_must_match_hash():
    with pytest.raises(ConfigurationError):
        NetworkParams(name="bad", genesis_hash="00" * 32, genesis_header=MAINNET.genesis_header)


def test_index_settings_validation():
    settings = IndexSettings()
    assert settings.locator_dense_entries == 10

    with pytest.raises(ConfigurationError):
        IndexSettings(locator_dense_entries=0)
    with pytest.raises(ConfigurationError):
        IndexSettings(headers_batch_max=0)
