"""
Component Test Layer Configuration

Structure:
    tests/component/
    ├── golden/      Characterization of service behavior
    └── mocks/       Mock implementations

Usage:
    pytest tests/component -v
"""
import pytest

from tests.component.mocks import MockEventBus, MockHttpClient


@pytest.fixture
def mock_event_bus() -> MockEventBus:
    """Mock NATS event bus"""
    return MockEventBus()


@pytest.fixture
def mock_http_client() -> MockHttpClient:
    """Mock httpx client"""
    return MockHttpClient()
