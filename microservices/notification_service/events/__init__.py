"""
Notification Service Events Module

Consumers of the order lifecycle events
"""

from .handlers import NotificationEventHandlers, register_event_handlers
from .models import OrderEvent, OrderEventItem

__all__ = [
    "NotificationEventHandlers",
    "register_event_handlers",
    "OrderEvent",
    "OrderEventItem",
]
