"""
tests/conftest.py

Shared fixtures. RSA accounts are slow to generate, so tests share one
small deterministic account per session.
"""

import pytest

from mental_poker.client.client_crypto import PlayerCrypto
from mental_poker.client.client_logic import Player
from mental_poker.common.helpers import get_account_from_seed, get_secrets_from_seed


@pytest.fixture
def crypto():
    return PlayerCrypto()


@pytest.fixture
def secrets():
    return get_secrets_from_seed(1)


@pytest.fixture
def committed(secrets):
    """A player who knows all of their own secrets."""
    return Player(identity="alice-account-id", secrets=secrets)


@pytest.fixture
def peer(committed):
    """Another player's view of `committed`: hashes only."""
    return Player(identity=committed.identity, secret_hashes=committed.secret_hashes)


@pytest.fixture(scope="session")
def account():
    return get_account_from_seed(7, bits=1024)


@pytest.fixture(scope="session")
def other_account():
    return get_account_from_seed(8, bits=1024)
