"""
Order Service Event Publishers

Functions to publish order lifecycle events. Publishing always happens after the
order state was persisted; a failed publish is logged and never rolled back.
"""

import logging
from typing import Dict, Optional

from core.nats_client import Event, EventType, ServiceSource
from ..models import Order, OrderStatus
from .models import OrderEvent

logger = logging.getLogger(__name__)


# Status changes that announce themselves on the bus
STATUS_ROUTING: Dict[OrderStatus, EventType] = {
    OrderStatus.PAID: EventType.ORDER_PAID,
    OrderStatus.SHIPPED: EventType.ORDER_SHIPPED,
    OrderStatus.DELIVERED: EventType.ORDER_DELIVERED,
}


def routing_for_status(status: OrderStatus) -> Optional[EventType]:
    """Routing key for a status update, or None when the status is not announced"""
    return STATUS_ROUTING.get(status)


async def publish_order_event(event_bus, order: Order, event_type: EventType) -> bool:
    """Publish a snapshot of ``order`` under ``event_type``"""
    if not event_bus:
        logger.warning(f"Event bus not available, skipping {event_type.value} event for order {order.id}")
        return False

    try:
        event = Event(
            event_type=event_type,
            source=ServiceSource.ORDER_SERVICE,
            data=OrderEvent.from_order(order).to_wire()
        )
        published = bool(await event_bus.publish_event(event))
    except Exception as e:
        logger.error(f"❌ Failed to publish {event_type.value} event for order {order.id}: {e}")
        published = False

    if published:
        logger.info(f"✅ Published {event_type.value} event for order {order.id}")
    else:
        logger.warning(
            f"⚠️ Order {order.id} is persisted as {order.status.value} "
            f"but {event_type.value} was not published"
        )
    return published


async def publish_order_created(event_bus, order: Order) -> bool:
    """Publish order.created event"""
    return await publish_order_event(event_bus, order, EventType.ORDER_CREATED)


async def publish_order_confirmed(event_bus, order: Order) -> bool:
    """Publish order.confirmed event"""
    return await publish_order_event(event_bus, order, EventType.ORDER_CONFIRMED)


async def publish_order_paid(event_bus, order: Order) -> bool:
    """Publish order.paid event"""
    return await publish_order_event(event_bus, order, EventType.ORDER_PAID)
