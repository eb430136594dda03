"""
Notification Service API Tests
"""
import asyncio

import pytest

from microservices.notification_service.events.models import OrderEvent
from microservices.notification_service.models import NotificationType
from tests.conftest import make_order_event_data

pytestmark = pytest.mark.api


def _seed(service, order_id=1, email="jane@example.com"):
    event = OrderEvent.model_validate(make_order_event_data(order_id=order_id, customerEmail=email))
    return asyncio.run(service.notify_order_event(NotificationType.ORDER_CREATED, event))


class TestNotificationApi:

    def test_health(self, notification_api):
        client, _ = notification_api
        assert client.get("/health").json()["service"] == "notification_service"

    def test_list_and_get(self, notification_api):
        client, service = notification_api
        notification = _seed(service)

        listed = client.get("/api/v1/notifications").json()
        fetched = client.get(f"/api/v1/notifications/{notification.id}").json()

        assert listed["count"] == 1
        assert fetched["subject"] == "Order Created - Order #1"
        assert fetched["status"] == "SENT"

    def test_by_order_and_customer(self, notification_api):
        client, service = notification_api
        _seed(service, order_id=1)
        _seed(service, order_id=2, email="sam@example.com")

        assert [n["order_id"] for n in client.get("/api/v1/notifications/order/2").json()] == [2]
        assert len(client.get("/api/v1/notifications/customer/jane@example.com").json()) == 1

    def test_missing_is_404(self, notification_api):
        client, _ = notification_api
        assert client.get("/api/v1/notifications/5").status_code == 404
