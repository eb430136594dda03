"""
Notification Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import List, Optional, Protocol, runtime_checkable
from datetime import datetime

from .models import Notification, NotificationStatus, NotificationType


class NotificationServiceError(Exception):
    """Base exception for notification service errors"""
    pass


class NotificationNotFoundError(NotificationServiceError):
    """Notification resource not found"""
    pass


@runtime_checkable
class NotificationRepositoryProtocol(Protocol):
    """
    Interface for Notification Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.
    """

    async def create_notification(
        self,
        order_id: int,
        customer_email: str,
        type: NotificationType,
        subject: str,
        message: str,
        status: NotificationStatus = NotificationStatus.PENDING,
    ) -> Notification:
        """Insert a notification record"""
        ...

    async def update_notification_status(
        self,
        notification_id: int,
        status: NotificationStatus,
        sent_at: Optional[datetime] = None,
    ) -> Optional[Notification]:
        """Record the delivery outcome"""
        ...

    async def get_notification(self, notification_id: int) -> Optional[Notification]:
        """Get notification by ID"""
        ...

    async def list_notifications(self, limit: int = 50, offset: int = 0) -> List[Notification]:
        """List notifications, newest first"""
        ...

    async def get_notifications_by_order(self, order_id: int) -> List[Notification]:
        """Notifications produced for an order"""
        ...

    async def get_notifications_by_customer(self, customer_email: str) -> List[Notification]:
        """Notifications sent to a customer"""
        ...


@runtime_checkable
class EmailClientProtocol(Protocol):
    """Interface for the email delivery mechanism"""

    async def send_email(self, to: str, subject: str, body: str, is_html: bool = False) -> bool:
        """Send one email; False or an exception means the delivery failed"""
        ...
