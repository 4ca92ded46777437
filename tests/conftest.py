"""
Pytest configuration and shared fixtures for the allow-list Merkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from ALLOWLIST_* environment variables
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from core.config import set_default_config  # noqa: E402


_ENV_VARS = (
    "ALLOWLIST_HASH_FUNCTION",
    "ALLOWLIST_LOG_LEVEL",
    "ALLOWLIST_LOG_FILE",
    "ALLOWLIST_TRACE",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Clear ALLOWLIST_* env vars and the cached default config."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def sample_ids():
    """Identifier list with one duplicate: 4 distinct leaves."""
    return [1, 1, 2, 3, 6]


@pytest.fixture
def odd_ids():
    """Three distinct identifiers: one odd node carried at layer 0."""
    return [1, 2, 3]
