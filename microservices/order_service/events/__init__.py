"""
Order Service Events Module

Exports all event-related functionality for order service
"""

from .models import OrderEvent, OrderEventItem

from .publishers import (
    STATUS_ROUTING,
    routing_for_status,
    publish_order_event,
    publish_order_created,
    publish_order_confirmed,
    publish_order_paid,
)

__all__ = [
    # Event Models
    "OrderEvent",
    "OrderEventItem",
    # Publishers
    "STATUS_ROUTING",
    "routing_for_status",
    "publish_order_event",
    "publish_order_created",
    "publish_order_confirmed",
    "publish_order_paid",
]
