"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (NATS, HTTP).
"""

from .nats_mock import MockEventBus
from .http_mock import MockHttpClient, MockHttpResponse

# Service-specific mocks live in tests/component/golden/{service}/mocks.py

__all__ = [
    'MockEventBus',
    'MockHttpClient',
    'MockHttpResponse',
]
