"""
Pytest configuration and shared fixtures for auditpath tests.

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

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_leaves = _common.make_leaves
vector_leaves = _common.vector_leaves

from auditpath.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def reset_runtime_config(monkeypatch):
    """Isolate every test from AUDITPATH_* env vars and a previously set default config."""
    for name in [
        "AUDITPATH_MAX_WORKERS",
        "AUDITPATH_PARALLEL_THRESHOLD",
        "AUDITPATH_LOG_LEVEL",
        "AUDITPATH_LOG_FILE",
        "AUDITPATH_OUTPUT_FORMAT",
    ]:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def five_leaves():
    """The five reference leaf digests."""
    return vector_leaves(5)


@pytest.fixture
def three_leaves():
    """The first three reference leaf digests."""
    return vector_leaves(3)


@pytest.fixture
def generated_leaves():
    """Eleven generated leaf digests (a non power-of-two count)."""
    return make_leaves(11)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
