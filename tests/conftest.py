"""
Pytest Configuration and Fixtures

Shared fixtures for the credential hashing tests.
"""

import pytest

from credential_mod import CredentialHasher, HasherConfig


@pytest.fixture
def fast_config() -> HasherConfig:
    """Low iteration count so property tests stay quick."""
    return HasherConfig(iterations=10)


@pytest.fixture
def hasher(fast_config: HasherConfig) -> CredentialHasher:
    return CredentialHasher(fast_config)


@pytest.fixture
def salt(hasher: CredentialHasher) -> bytes:
    return hasher.generate_salt()
