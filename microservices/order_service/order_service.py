"""
Order Service Business Logic

Order lifecycle: creation, status updates, payment recording, and the events and
side effects each transition triggers.
"""

import asyncio
import logging
import weakref
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .models import (
    Order, OrderCreateRequest, OrderItem, OrderStatus, SUPPORTED_PAYMENT_METHODS
)
from .protocols import (
    OrderRepositoryProtocol,
    EventBusProtocol,
    InventoryClientProtocol,
    OrderNotFoundError,
    OrderValidationError,
    OrderServiceError,
)
from .events.publishers import (
    publish_order_created,
    publish_order_confirmed,
    publish_order_paid,
    publish_order_event,
    routing_for_status,
)

logger = logging.getLogger(__name__)


class OrderService:
    """
    Order management business logic service

    Every write to an order goes through a per-order lock, so updates to the same
    order are applied one at a time in this process. Events are published only
    after the write they describe has been persisted.
    """

    def __init__(
        self,
        repository: OrderRepositoryProtocol,
        event_bus: Optional[EventBusProtocol] = None,
        inventory_client: Optional[InventoryClientProtocol] = None,
    ):
        """
        Initialize Order Service

        Args:
            repository: Order repository (dependency injection)
            event_bus: NATS event bus instance (optional)
            inventory_client: Stock adjustment client used on delivery (optional)
        """
        self.repository = repository
        self.event_bus = event_bus
        self.inventory_client = inventory_client
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()

        logger.info("✅ OrderService initialized")

    def _order_lock(self, order_id: int) -> asyncio.Lock:
        lock = self._locks.get(order_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[order_id] = lock
        return lock

    # Order Lifecycle Operations

    async def create_order(self, request: OrderCreateRequest) -> Order:
        """
        Create a new order

        Persists the order as PENDING and announces it, then confirms it and
        announces the confirmation.

        Raises:
            OrderValidationError: empty item list or unknown payment method
        """
        payment_method = self._validate_order_create_request(request)

        items = [
            OrderItem(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.price,
            )
            for item in request.items
        ]
        total_amount = sum((item.subtotal for item in items), Decimal("0"))

        order = await self.repository.create_order(
            customer_email=str(request.customer_email),
            customer_name=request.customer_name,
            items=items,
            shipping_address=request.shipping_address,
            payment_method=payment_method,
            total_amount=total_amount,
            status=OrderStatus.PENDING,
        )
        logger.info(f"Order created: {order.id} for {order.customer_email} total={order.total_amount}")

        await publish_order_created(self.event_bus, order)

        async with self._order_lock(order.id):
            confirmed = await self.repository.update_order(
                order.id,
                status=OrderStatus.CONFIRMED,
                expected_version=order.version,
            )
            if confirmed is None:
                raise OrderServiceError(f"Order {order.id} disappeared before confirmation")

        logger.info(f"Order confirmed: {confirmed.id}")
        await publish_order_confirmed(self.event_bus, confirmed)

        return confirmed

    async def update_order_status(self, order_id: int, new_status: OrderStatus) -> Order:
        """
        Set an order's status.

        Any transition is accepted. Moving into DELIVERED for the first time
        schedules stock adjustment for every item; PAID, SHIPPED and DELIVERED
        are announced on the bus.
        """
        async with self._order_lock(order_id):
            existing = await self.repository.get_order(order_id)
            if not existing:
                raise OrderNotFoundError(f"Order not found: {order_id}")

            previous_status = existing.status
            order = await self.repository.update_order(
                order_id,
                status=new_status,
                expected_version=existing.version,
            )
            if order is None:
                raise OrderNotFoundError(f"Order not found: {order_id}")

        logger.info(f"Order {order_id} status {previous_status.value} -> {new_status.value}")

        if new_status == OrderStatus.DELIVERED and previous_status != OrderStatus.DELIVERED:
            self._notify_inventory(order)

        event_type = routing_for_status(new_status)
        if event_type:
            await publish_order_event(self.event_bus, order, event_type)

        return order

    async def record_payment(self, order_id: int, payment_id: int) -> Order:
        """Attach a payment to an order and mark it PAID"""
        async with self._order_lock(order_id):
            existing = await self.repository.get_order(order_id)
            if not existing:
                raise OrderNotFoundError(f"Order not found: {order_id}")

            order = await self.repository.update_order(
                order_id,
                status=OrderStatus.PAID,
                payment_id=payment_id,
                expected_version=existing.version,
            )
            if order is None:
                raise OrderNotFoundError(f"Order not found: {order_id}")

        logger.info(f"Payment {payment_id} recorded for order {order_id}")
        await publish_order_paid(self.event_bus, order)
        return order

    # Order Query Operations

    async def get_order(self, order_id: int) -> Order:
        """Get order by ID"""
        order = await self.repository.get_order(order_id)
        if not order:
            raise OrderNotFoundError(f"Order not found: {order_id}")
        return order

    async def list_orders(self, limit: int = 50, offset: int = 0) -> List[Order]:
        """List orders"""
        return await self.repository.list_orders(limit=limit, offset=offset)

    async def get_orders_by_customer(self, customer_email: str) -> List[Order]:
        """Get orders for a customer"""
        return await self.repository.get_orders_by_customer(customer_email)

    # Service Operations

    async def health_check(self) -> Dict[str, Any]:
        """Health check for the service"""
        publish_failures = getattr(self.event_bus, "publish_failures", 0) if self.event_bus else 0
        try:
            await self.repository.list_orders(limit=1, offset=0)
            return {
                "status": "healthy",
                "database": "connected",
                "event_bus": "connected" if self.event_bus else "disabled",
                "publish_failures": publish_failures,
                "timestamp": datetime.utcnow()
            }
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return {
                "status": "unhealthy",
                "database": "disconnected",
                "event_bus": "connected" if self.event_bus else "disabled",
                "publish_failures": publish_failures,
                "error": str(e),
                "timestamp": datetime.utcnow()
            }

    # Private Helper Methods

    def _notify_inventory(self, order: Order) -> None:
        if not self.inventory_client:
            logger.warning(f"Inventory client not configured, stock not adjusted for order {order.id}")
            return
        try:
            self.inventory_client.notify_delivered(order)
        except Exception as e:
            logger.error(f"Failed to schedule stock updates for order {order.id}: {e}")

    def _validate_order_create_request(self, request: OrderCreateRequest) -> str:
        """Validate order creation request, returning the normalised payment method"""
        if not request.items:
            raise OrderValidationError("Order must contain at least one item")

        payment_method = (request.payment_method or "").upper()
        if payment_method not in SUPPORTED_PAYMENT_METHODS:
            raise OrderValidationError(f"Unsupported payment method: {request.payment_method}")

        return payment_method
