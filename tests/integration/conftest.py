"""
Integration Test Layer Configuration

The order, payment and notification services are wired together in-process:
payment hands completed payments straight to the order service, and events the
order service publishes are relayed to the notification handlers.
"""
from typing import Any, Dict, Optional

import pytest
import pytest_asyncio

from microservices.order_service.order_service import OrderService
from microservices.payment_service.payment_service import PaymentService
from microservices.notification_service.notification_service import NotificationService
from microservices.notification_service.events import NotificationEventHandlers, register_event_handlers
from tests.component.mocks import MockEventBus
from tests.component.golden.order_service.mocks import MockOrderRepository, MockInventoryClient
from tests.component.golden.payment_service.mocks import MockPaymentRepository
from tests.component.golden.notification_service.mocks import MockNotificationRepository, MockEmailClient


class InProcessOrderClient:
    """Payment -> order hand-off without HTTP"""

    def __init__(self, order_service: OrderService):
        self.order_service = order_service

    async def record_payment(self, order_id: int, payment_id: int) -> Optional[Dict[str, Any]]:
        order = await self.order_service.record_payment(order_id, payment_id)
        return order.model_dump(mode="json")


class Platform:
    """The three services plus the buses between them"""

    def __init__(self):
        self.order_bus = MockEventBus()
        self.notification_bus = MockEventBus()
        self.inventory = MockInventoryClient()
        self.order_repo = MockOrderRepository()
        self.payment_repo = MockPaymentRepository()
        self.notification_repo = MockNotificationRepository()
        self.email = MockEmailClient()

        self.orders = OrderService(
            repository=self.order_repo,
            event_bus=self.order_bus,
            inventory_client=self.inventory,
        )
        self.payments = PaymentService(
            repository=self.payment_repo,
            order_client=InProcessOrderClient(self.orders),
            latency_scale=0,
        )
        self.notifications = NotificationService(repository=self.notification_repo, email_client=self.email)
        self._relayed = 0

    async def start(self):
        await register_event_handlers(self.notification_bus, NotificationEventHandlers(self.notifications))

    async def relay_events(self) -> int:
        """Deliver every not-yet-relayed order event to the notification consumers"""
        pending = self.order_bus.published_events[self._relayed:]
        for event in pending:
            await self.notification_bus.simulate_event(event["type"], event["data"], event_id=event["id"])
        self._relayed += len(pending)
        return len(pending)


@pytest_asyncio.fixture
async def platform() -> Platform:
    platform = Platform()
    await platform.start()
    return platform
