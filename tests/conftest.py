"""Shared fixtures for the TestRail service tests."""
import pytest

from testrail_service.infrastructure.testrail.retry import RetryPolicy
from testrail_service.infrastructure.testrail.service import TestRailService
from tests.fakes import FakeTransport

BASE = "https://acme.testrail.com/index.php?/api/v2/"


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def sleeps():
    """Records the delays the retry policy asked for."""
    return []


@pytest.fixture
def service(transport, sleeps):
    return TestRailService(
        client_id='acme',
        username='qa@acme.com',
        password='secret',
        transport=transport,
        retry_policy=RetryPolicy(sleep=sleeps.append)
    )
