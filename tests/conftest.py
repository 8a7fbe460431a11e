"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Keeps HASHTREE_* environment variables from leaking into tests
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

from fixtures.common import (  # noqa: E402
    DEMO_ITEMS,
    FIVE_ITEMS,
    SEVEN_ITEMS,
    make_items,
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def five_items():
    """Five single-letter items: odd at the leaf level and one level up."""
    return list(FIVE_ITEMS)


@pytest.fixture
def seven_items():
    """Seven single-letter items: odd at two levels."""
    return list(SEVEN_ITEMS)


@pytest.fixture
def demo_items():
    """Items used by the reference demo run."""
    return list(DEMO_ITEMS)


@pytest.fixture
def byte_items():
    """Sixteen byte items."""
    return make_items(16)


@pytest.fixture(autouse=True)
def _clean_hashtree_env(monkeypatch):
    """Remove HASHTREE_* variables so config tests start from defaults."""
    for var in ("LOG_LEVEL", "LOG_FILE", "OUTPUT_FORMAT", "ITEM_ENCODING"):
        monkeypatch.delenv(f"HASHTREE_{var}", raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
