"""Shared fixtures: credentials, a mock wallet server and a client wired to it."""
import pytest

from gpay_wallet.client import GPayClient
from gpay_wallet.mocks.wallet_server import MockWalletServer
from gpay_wallet.models.credentials import Credentials

from signing_vectors import SCENARIO_PASSWORD, SCENARIO_SECRET


@pytest.fixture
def credentials():
    return Credentials(
        api_key="test_api_key_123",
        shared_secret=SCENARIO_SECRET,
        password=SCENARIO_PASSWORD,
    )


@pytest.fixture
def server(credentials):
    return MockWalletServer(credentials)


@pytest.fixture
def client(credentials, server):
    with GPayClient(
        credentials,
        environment="staging",
        session=server.session(),
        clock=lambda: 1700000000.5,
    ) as client:
        yield client
