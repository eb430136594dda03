"""
API Test Layer Configuration

Drives each service's FastAPI app through TestClient with the service's
dependency overridden by one built on in-memory mocks. The lifespan is not
run, so no database or NATS connection is attempted.
"""
import pytest
from fastapi.testclient import TestClient

from tests.component.mocks import MockEventBus
from tests.component.golden.order_service.mocks import MockOrderRepository, MockInventoryClient
from tests.component.golden.payment_service.mocks import MockPaymentRepository, MockOrderClient
from tests.component.golden.notification_service.mocks import MockNotificationRepository, MockEmailClient


@pytest.fixture
def order_api():
    from microservices.order_service import main
    from microservices.order_service.order_service import OrderService

    service = OrderService(
        repository=MockOrderRepository(),
        event_bus=MockEventBus(),
        inventory_client=MockInventoryClient(),
    )
    main.app.dependency_overrides[main.get_order_service] = lambda: service
    yield TestClient(main.app), service
    main.app.dependency_overrides.clear()


@pytest.fixture
def payment_api():
    from microservices.payment_service import main
    from microservices.payment_service.payment_service import PaymentService

    service = PaymentService(repository=MockPaymentRepository(), order_client=MockOrderClient(), latency_scale=0)
    main.app.dependency_overrides[main.get_payment_service] = lambda: service
    yield TestClient(main.app), service
    main.app.dependency_overrides.clear()


@pytest.fixture
def notification_api():
    from microservices.notification_service import main
    from microservices.notification_service.notification_service import NotificationService

    service = NotificationService(repository=MockNotificationRepository(), email_client=MockEmailClient())
    main.app.dependency_overrides[main.get_notification_service] = lambda: service
    yield TestClient(main.app), service
    main.app.dependency_overrides.clear()
