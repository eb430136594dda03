"""
Unit Tests for order_service models and event wire format
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from core.nats_client import EventType
from microservices.order_service.events.models import OrderEvent
from microservices.order_service.events.publishers import routing_for_status
from microservices.order_service.models import (
    Order, OrderCreateRequest, OrderItem, OrderStatus, TERMINAL_STATUSES
)
from microservices.notification_service.events.models import OrderEvent as ConsumedOrderEvent
from tests.conftest import make_order_request_data

pytestmark = pytest.mark.unit


def _order(status=OrderStatus.CONFIRMED) -> Order:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)
    return Order(
        id=12,
        customer_email="jane@example.com",
        customer_name="Jane Doe",
        items=[
            OrderItem(product_id=1, product_name="A", quantity=2, unit_price=Decimal("9.99")),
            OrderItem(product_id=2, product_name="B", quantity=1, unit_price=Decimal("5.00")),
        ],
        shipping_address="1 Main St",
        payment_method="CREDIT_CARD",
        status=status,
        total_amount=Decimal("24.98"),
        created_at=now,
        updated_at=now,
    )


class TestOrderItem:

    def test_subtotal(self):
        item = OrderItem(product_id=1, product_name="A", quantity=3, unit_price=Decimal("1.10"))
        assert item.subtotal == Decimal("3.30")

    def test_items_are_immutable(self):
        item = OrderItem(product_id=1, product_name="A", quantity=3, unit_price=Decimal("1.10"))
        with pytest.raises(ValidationError):
            item.quantity = 5

    @pytest.mark.parametrize("quantity,price", [(0, "1.00"), (1, "0"), (-1, "1.00")])
    def test_positive_quantity_and_price(self, quantity, price):
        with pytest.raises(ValidationError):
            OrderItem(product_id=1, product_name="A", quantity=quantity, unit_price=Decimal(price))


class TestOrderCreateRequest:

    def test_valid(self):
        request = OrderCreateRequest(**make_order_request_data())
        assert len(request.items) == 2

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            OrderCreateRequest(**make_order_request_data(customer_email="not-an-email"))

    def test_price_limited_to_cents(self):
        items = [{"product_id": 1, "product_name": "A", "quantity": 3, "price": Decimal("0.333")}]
        with pytest.raises(ValidationError):
            OrderCreateRequest(**make_order_request_data(items=items))

    def test_whole_and_cent_prices_accepted(self):
        items = [
            {"product_id": 1, "product_name": "A", "quantity": 1, "price": Decimal("10")},
            {"product_id": 2, "product_name": "B", "quantity": 1, "price": "0.50"},
        ]
        request = OrderCreateRequest(**make_order_request_data(items=items))
        assert [item.price for item in request.items] == [Decimal("10"), Decimal("0.50")]


class TestOrderStatus:

    def test_terminal_statuses(self):
        assert TERMINAL_STATUSES == {OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.FAILED}
        assert OrderStatus.DELIVERED.is_terminal
        assert not OrderStatus.PAID.is_terminal

    @pytest.mark.parametrize("status,routing", [
        (OrderStatus.PAID, EventType.ORDER_PAID),
        (OrderStatus.SHIPPED, EventType.ORDER_SHIPPED),
        (OrderStatus.DELIVERED, EventType.ORDER_DELIVERED),
        (OrderStatus.CONFIRMED, None),
        (OrderStatus.CANCELLED, None),
    ])
    def test_routing_for_status(self, status, routing):
        assert routing_for_status(status) == routing


class TestOrderEventWireFormat:

    def test_camel_case_fields(self):
        wire = OrderEvent.from_order(_order()).to_wire()

        assert set(wire) == {
            "orderId", "customerEmail", "customerName", "status", "totalAmount",
            "items", "shippingAddress", "paymentMethod", "timestamp",
        }
        assert wire["orderId"] == 12
        assert wire["status"] == "CONFIRMED"
        assert wire["totalAmount"] == "24.98"
        assert wire["items"][0] == {"productId": 1, "productName": "A", "quantity": 2, "price": "9.99"}

    def test_timestamp_is_iso_8601(self):
        wire = OrderEvent.from_order(_order()).to_wire()
        assert datetime.fromisoformat(wire["timestamp"].replace("Z", "+00:00")).tzinfo is not None

    def test_consumer_reads_producer_payload(self):
        wire = OrderEvent.from_order(_order(OrderStatus.PAID)).to_wire()

        consumed = ConsumedOrderEvent.model_validate(wire)

        assert consumed.order_id == 12
        assert consumed.total_amount == Decimal("24.98")
        assert consumed.payment_method == "CREDIT_CARD"
        assert consumed.items[1].product_name == "B"
