"""
Event Handlers for Notification Service

One handler per order routing key. Each consumed event produces one notification;
there is no idempotency check, so a redelivered event is notified again.
"""

import logging
from typing import Awaitable, Callable, Dict, List, TYPE_CHECKING

from pydantic import ValidationError

from core.nats_client import Event, EventType, ORDER_QUEUES
from ..models import NotificationType
from .models import OrderEvent

if TYPE_CHECKING:
    from ..notification_service import NotificationService

logger = logging.getLogger(__name__)


class NotificationEventHandlers:
    """Event handlers for notification service"""

    def __init__(self, notification_service: "NotificationService"):
        self.notification_service = notification_service

    async def _handle(self, event: Event, notification_type: NotificationType):
        """
        Notify the customer about an order event.

        A payload that is not an order event is logged and dropped. Errors from the
        notification store propagate so the message is redelivered.
        """
        try:
            order_event = OrderEvent.model_validate(event.data)
        except ValidationError as e:
            logger.error(f"Dropping malformed {event.type} event {event.id}: {e}")
            return

        logger.info(f"Received {event.type} event for order {order_event.order_id}")
        await self.notification_service.notify_order_event(notification_type, order_event)

    async def handle_order_created(self, event: Event):
        await self._handle(event, NotificationType.ORDER_CREATED)

    async def handle_order_confirmed(self, event: Event):
        await self._handle(event, NotificationType.ORDER_CONFIRMED)

    async def handle_order_paid(self, event: Event):
        await self._handle(event, NotificationType.ORDER_PAID)

    async def handle_order_shipped(self, event: Event):
        await self._handle(event, NotificationType.ORDER_SHIPPED)

    async def handle_order_delivered(self, event: Event):
        await self._handle(event, NotificationType.ORDER_DELIVERED)

    def get_event_handler_map(self) -> Dict[str, Callable[[Event], Awaitable[None]]]:
        """
        Return mapping of event types to handler functions
        """
        return {
            EventType.ORDER_CREATED.value: self.handle_order_created,
            EventType.ORDER_CONFIRMED.value: self.handle_order_confirmed,
            EventType.ORDER_PAID.value: self.handle_order_paid,
            EventType.ORDER_SHIPPED.value: self.handle_order_shipped,
            EventType.ORDER_DELIVERED.value: self.handle_order_delivered,
        }


async def register_event_handlers(event_bus, handlers: NotificationEventHandlers) -> List[str]:
    """Subscribe every handler on its own durable queue; returns the consumer names"""
    subscriptions = []
    for event_type in EventType:
        handler = handlers.get_event_handler_map()[event_type.value]
        name = await event_bus.subscribe_to_events(
            pattern=event_type.value,
            handler=handler,
            durable=ORDER_QUEUES[event_type],
        )
        if name:
            subscriptions.append(name)
            logger.info(f"✅ Subscribed to {event_type.value} via {ORDER_QUEUES[event_type]}")
        else:
            logger.warning(f"⚠️  Could not subscribe to {event_type.value}")
    return subscriptions
