"""
Pytest configuration and shared fixtures for blockchainblock tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_block = _common.make_block
make_chain = _common.make_chain
make_vector_block = _common.make_vector_block
BOOK_REVIEWS = _common.BOOK_REVIEWS


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def genesis_block():
    """A genesis block carrying the book reviews payload."""
    return make_block()


@pytest.fixture
def book_reviews():
    """The leaves of genesis_block."""
    return list(BOOK_REVIEWS)


@pytest.fixture
def chain():
    """Four linked blocks without the accumulator."""
    return make_chain(length=4)


@pytest.fixture
def accumulated_chain():
    """Four linked blocks, each committing to the hashes before it."""
    return make_chain(length=4, accumulate=True)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove BLOCKCHAINBLOCK_* variables so config tests start from defaults."""
    for name in ["BLOCKCHAINBLOCK_FRAMING", "BLOCKCHAINBLOCK_LOG_LEVEL", "BLOCKCHAINBLOCK_LOG_FILE"]:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "regression: pinned digests shared with other implementations"
    )
