"""Shared fixtures for relaycall tests."""

from __future__ import annotations

import pytest
from stellar_sdk import Keypair

from relaycall.models.config import RelayConfig
from relaycall.storage.sqlite import SQLiteQueueStorage
from relaycall.usecases.protocol_call import ProtocolCallUseCase

from tests.mocks import (
    MockActiveWallet,
    MockNonceGateway,
    MockPresenter,
    MockQueue,
    MockRelayer,
    MockUnsignedCallGateway,
    MockWallet,
)

TEST_NETWORK = "testnet"


def make_test_config(**overrides) -> RelayConfig:
    """Build a RelayConfig suitable for testing."""
    defaults = dict(
        relay_url="http://relay.test",
        request_timeout=5,
        network=TEST_NETWORK,
        keypair_secret=Keypair.random().secret,
        call_ttl=600,
        max_fee=1_000,
        db_path=":memory:",
    )
    defaults.update(overrides)
    return RelayConfig(**defaults)


@pytest.fixture
def test_config():
    return make_test_config()


@pytest.fixture
def keypair():
    return Keypair.random()


@pytest.fixture
async def storage():
    """Initialized in-memory SQLiteQueueStorage."""
    s = SQLiteQueueStorage(":memory:")
    await s.initialize()
    yield s
    await s.close()


@pytest.fixture
def mock_wallet():
    return MockWallet()


@pytest.fixture
def mock_active_wallet(mock_wallet):
    return MockActiveWallet(mock_wallet)


@pytest.fixture
def mock_nonce_gateway():
    return MockNonceGateway(nonce=7)


@pytest.fixture
def mock_call_gateway():
    return MockUnsignedCallGateway()


@pytest.fixture
def mock_relayer():
    return MockRelayer()


@pytest.fixture
def mock_queue():
    return MockQueue()


@pytest.fixture
def mock_presenter():
    return MockPresenter()


@pytest.fixture
def use_case(
    mock_active_wallet, mock_nonce_gateway, mock_call_gateway,
    mock_relayer, mock_queue, mock_presenter,
):
    """ProtocolCallUseCase wired to mocks."""
    return ProtocolCallUseCase(
        mock_active_wallet,
        mock_nonce_gateway,
        mock_call_gateway,
        mock_relayer,
        mock_queue,
        mock_presenter,
    )
