"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - unit/       : Unit tests (pure functions, no I/O)
    - component/  : Component tests (mocked dependencies)
    - integration/: In-process flows across services (mocked I/O)
    - api/        : HTTP surface through FastAPI's TestClient
"""
import os
import sys
from decimal import Decimal
from typing import Any, Dict, List

import pytest

# Set testing environment BEFORE any service imports
os.environ.setdefault("ENV", "testing")
os.environ["NATS_ENABLED"] = "false"
os.environ["EMAIL_ENABLED"] = "false"
os.environ["PAYMENT_LATENCY_SCALE"] = "0"

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)


# =============================================================================
# Test Data
# =============================================================================

def make_order_request_data(**overrides) -> Dict[str, Any]:
    """Order creation payload with the two-item basket used across tests"""
    data = {
        "customer_email": "jane@example.com",
        "customer_name": "Jane Doe",
        "items": [
            {"product_id": 1, "product_name": "A", "quantity": 2, "price": Decimal("9.99")},
            {"product_id": 2, "product_name": "B", "quantity": 1, "price": Decimal("5.00")},
        ],
        "shipping_address": "1 Main St, Springfield",
        "payment_method": "CREDIT_CARD",
    }
    data.update(overrides)
    return data


def make_order_event_data(order_id: int = 1, status: str = "CONFIRMED", **overrides) -> Dict[str, Any]:
    """Order event body as it appears on the wire"""
    data = {
        "orderId": order_id,
        "customerEmail": "jane@example.com",
        "customerName": "Jane Doe",
        "status": status,
        "totalAmount": "24.98",
        "items": [
            {"productId": 1, "productName": "A", "quantity": 2, "price": "9.99"},
            {"productId": 2, "productName": "B", "quantity": 1, "price": "5.00"},
        ],
        "shippingAddress": "1 Main St, Springfield",
        "paymentMethod": "CREDIT_CARD",
        "timestamp": "2026-01-01T12:00:00+00:00",
    }
    data.update(overrides)
    return data


@pytest.fixture
def order_request_data() -> Dict[str, Any]:
    return make_order_request_data()


@pytest.fixture
def order_event_data() -> Dict[str, Any]:
    return make_order_event_data()


# =============================================================================
# Assertion Helpers
# =============================================================================

class AssertionHelpers:
    """Common assertion helpers"""

    @staticmethod
    def assert_has_fields(data: Dict, fields: List[str]):
        missing = [f for f in fields if f not in data]
        assert not missing, f"Missing fields: {missing}"

    @staticmethod
    def assert_event_types(events: List[Dict], expected: List[str]):
        actual = [e.get("type") for e in events]
        assert actual == expected, f"Expected events {expected}, got {actual}"


@pytest.fixture
def assertions() -> AssertionHelpers:
    return AssertionHelpers()


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "golden: Characterization tests of current behavior")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "api: API contract tests")
