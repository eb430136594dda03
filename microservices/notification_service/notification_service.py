"""
Notification Service Business Logic

Turns order lifecycle events into customer emails and records each delivery
attempt. Delivery is attempted once: a failed send leaves a FAILED record and is
never retried here.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import Notification, NotificationStatus, NotificationType
from .protocols import (
    NotificationRepositoryProtocol,
    EmailClientProtocol,
    NotificationNotFoundError,
)
from .templates import build_variables, render
from .events.models import OrderEvent

logger = logging.getLogger(__name__)


class NotificationService:
    """Notification business logic"""

    def __init__(
        self,
        repository: NotificationRepositoryProtocol,
        email_client: Optional[EmailClientProtocol] = None,
        html_emails: bool = False,
    ):
        """
        Initialize notification service

        Args:
            repository: Notification repository (dependency injection)
            email_client: Delivery mechanism; without one every send is FAILED
            html_emails: Render the HTML templates instead of plain text
        """
        self.repository = repository
        self.email_client = email_client
        self.html_emails = html_emails

        logger.info(f"NotificationService initialized (html_emails={html_emails})")

    async def notify_order_event(self, notification_type: NotificationType, event: OrderEvent) -> Notification:
        """Render the template for an order event and send it to the customer"""
        variables = build_variables(
            order_id=event.order_id,
            customer_name=event.customer_name,
            total_amount=event.total_amount,
            shipping_address=event.shipping_address,
            payment_method=event.payment_method,
        )
        rendered = render(notification_type, variables, as_html=self.html_emails)

        return await self.send_notification(
            order_id=event.order_id,
            customer_email=event.customer_email,
            notification_type=notification_type,
            subject=rendered.subject,
            message=rendered.body,
            is_html=rendered.is_html,
        )

    async def send_notification(
        self,
        order_id: int,
        customer_email: str,
        notification_type: NotificationType,
        subject: str,
        message: str,
        is_html: bool = False,
    ) -> Notification:
        """
        Record a notification as PENDING, deliver it, and record the outcome.

        Delivery errors are logged and end in FAILED; repository errors propagate.
        """
        notification = await self.repository.create_notification(
            order_id=order_id,
            customer_email=customer_email,
            type=notification_type,
            subject=subject,
            message=message,
            status=NotificationStatus.PENDING,
        )

        delivered = await self._deliver(notification, is_html)

        if delivered:
            updated = await self.repository.update_notification_status(
                notification.id, NotificationStatus.SENT, sent_at=datetime.now(timezone.utc)
            )
            logger.info(f"Notification {notification.id} ({notification_type.value}) sent to {customer_email}")
        else:
            updated = await self.repository.update_notification_status(
                notification.id, NotificationStatus.FAILED
            )
            logger.warning(f"Notification {notification.id} ({notification_type.value}) to {customer_email} FAILED")

        return updated or notification

    async def _deliver(self, notification: Notification, is_html: bool) -> bool:
        if not self.email_client:
            logger.error("Email client not configured")
            return False
        try:
            return bool(await self.email_client.send_email(
                to=notification.customer_email,
                subject=notification.subject,
                body=notification.message,
                is_html=is_html,
            ))
        except Exception as e:
            logger.error(f"Failed to send notification {notification.id} to {notification.customer_email}: {e}")
            return False

    # Query Operations

    async def get_notification(self, notification_id: int) -> Notification:
        """Get notification by ID"""
        notification = await self.repository.get_notification(notification_id)
        if not notification:
            raise NotificationNotFoundError(f"Notification not found: {notification_id}")
        return notification

    async def list_notifications(self, limit: int = 50, offset: int = 0) -> List[Notification]:
        return await self.repository.list_notifications(limit=limit, offset=offset)

    async def get_notifications_by_order(self, order_id: int) -> List[Notification]:
        return await self.repository.get_notifications_by_order(order_id)

    async def get_notifications_by_customer(self, customer_email: str) -> List[Notification]:
        return await self.repository.get_notifications_by_customer(customer_email)

    async def health_check(self) -> Dict[str, Any]:
        """Health check for the service"""
        try:
            await self.repository.list_notifications(limit=1, offset=0)
            return {"status": "healthy", "database": "connected", "timestamp": datetime.utcnow()}
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return {
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(e),
                "timestamp": datetime.utcnow()
            }

    async def cleanup(self):
        """Release the delivery client"""
        if self.email_client and hasattr(self.email_client, "close"):
            await self.email_client.close()
