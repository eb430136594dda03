"""
Order Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, List, Optional, Protocol, runtime_checkable
from decimal import Decimal

# Import only models (no I/O dependencies)
from .models import Order, OrderItem, OrderStatus


# ============================================================================
# Custom Exceptions - defined here to avoid importing repository
# ============================================================================

class OrderServiceError(Exception):
    """Base exception for order service errors"""
    pass


class OrderNotFoundError(OrderServiceError):
    """Order not found error"""
    pass


class OrderValidationError(OrderServiceError):
    """Order validation error"""
    pass


class OrderConcurrencyError(OrderServiceError):
    """Order was modified by another writer since it was read"""
    pass


# ============================================================================
# Repository Protocol
# ============================================================================

@runtime_checkable
class OrderRepositoryProtocol(Protocol):
    """
    Interface for Order Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    async def create_order(
        self,
        customer_email: str,
        customer_name: str,
        items: List[OrderItem],
        shipping_address: str,
        payment_method: str,
        total_amount: Decimal,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Persist a new order with its items"""
        ...

    async def get_order(self, order_id: int) -> Optional[Order]:
        """Get order by ID"""
        ...

    async def update_order(
        self,
        order_id: int,
        status: Optional[OrderStatus] = None,
        payment_id: Optional[int] = None,
        expected_version: Optional[int] = None,
    ) -> Optional[Order]:
        """
        Update order status/payment. Returns None if the order does not exist;
        raises OrderConcurrencyError when expected_version no longer matches.
        """
        ...

    async def list_orders(self, limit: int = 50, offset: int = 0) -> List[Order]:
        """List orders, newest first"""
        ...

    async def get_orders_by_customer(self, customer_email: str) -> List[Order]:
        """Get orders placed by a customer"""
        ...


# ============================================================================
# Event Bus Protocol
# ============================================================================

@runtime_checkable
class EventBusProtocol(Protocol):
    """Interface for Event Bus - no I/O imports"""

    async def publish_event(self, event: Any) -> bool:
        """Publish an event"""
        ...


# ============================================================================
# Client Protocols
# ============================================================================

@runtime_checkable
class InventoryClientProtocol(Protocol):
    """Interface for the stock adjustment side effect"""

    def notify_delivered(self, order: Order) -> List[Any]:
        """Schedule one stock decrement per item without waiting for any of them"""
        ...
