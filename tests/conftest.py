"""
Shared fixtures for the ShopGate test suite.

Helpers that build actors and snapshots live in each test module;
only fixtures are shared here.
"""

import pytest

from shopgate.bootstrap import build_policy_registry


@pytest.fixture(scope="session")
def registry():
    """The shipped, locked and self-checked registry."""
    return build_policy_registry()
