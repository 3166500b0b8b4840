import pytest

from headerdb.core.chain_index import ChainIndex

from .chain_helpers import ChainBuilder


@pytest.fixture
def builder():
    return ChainBuilder()


@pytest.fixture
def index(builder):
    """Index holding only the synthetic genesis."""
    idx = ChainIndex(builder.params)
    idx.add(builder.genesis)
    return idx
