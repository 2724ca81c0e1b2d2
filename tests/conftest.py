"""
votesig test fixtures
"""

import pytest

from votesig import DEFAULT_ENGINE, KeyPair

# Seed bytes 00 01 02 ... 1f
FIXED_SEED = bytes(range(32))


@pytest.fixture(scope="session")
def engine():
    """The process-wide Curve25519 engine."""
    return DEFAULT_ENGINE


@pytest.fixture(scope="session")
def fixed_keypair() -> KeyPair:
    """Deterministic key pair from the fixed seed."""
    return KeyPair.from_raw_seed(FIXED_SEED)


@pytest.fixture(scope="session")
def keypair() -> KeyPair:
    """A random key pair shared across the session."""
    return KeyPair.random()


@pytest.fixture(scope="session")
def other_keypair() -> KeyPair:
    """A second, unrelated random key pair."""
    return KeyPair.random()


@pytest.fixture(scope="session")
def ring_members():
    """Four random key pairs used as decoy ring members."""
    return [KeyPair.random() for _ in range(4)]
