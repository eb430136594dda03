"""
Notification Repository

Data access layer for notification records using the shared asyncpg client.
"""

import logging
from datetime import datetime
from typing import Optional, List, Dict, Any

from core.postgres_client import PostgresClientWrapper
from .models import Notification, NotificationStatus, NotificationType

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Repository for notification records"""

    def __init__(self, db: Optional[PostgresClientWrapper] = None):
        """Initialize Notification Repository"""
        self.db = db or PostgresClientWrapper("notification_service")
        self.schema = "notification"
        self.notifications_table = f'"{self.schema}".notifications'

        logger.info("NotificationRepository initialized")

    async def initialize(self):
        """Create schema and table if missing"""
        async with self.db.transaction() as conn:
            await conn.execute(f'CREATE SCHEMA IF NOT EXISTS "{self.schema}"')
            await conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.notifications_table} (
                    id BIGSERIAL PRIMARY KEY,
                    order_id BIGINT NOT NULL,
                    customer_email TEXT NOT NULL,
                    type TEXT NOT NULL,
                    subject TEXT NOT NULL,
                    message TEXT NOT NULL,
                    status TEXT NOT NULL,
                    sent_at TIMESTAMPTZ,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
            """)
            await conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_notifications_order_id ON {self.notifications_table} (order_id)"
            )
            await conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_notifications_customer_email "
                f"ON {self.notifications_table} (customer_email)"
            )

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
        query = f"""
            INSERT INTO {self.notifications_table} (order_id, customer_email, type, subject, message, status)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *
        """
        try:
            row = await self.db.query_row(
                query, [order_id, customer_email, type.value, subject, message, status.value]
            )
        except Exception as e:
            logger.error(f"Failed to create notification for order {order_id}: {e}")
            raise

        if not row:
            raise Exception("Failed to create notification")
        return self._dict_to_notification(row)

    async def update_notification_status(
        self,
        notification_id: int,
        status: NotificationStatus,
        sent_at: Optional[datetime] = None,
    ) -> Optional[Notification]:
        """Record the delivery outcome"""
        query = f"""
            UPDATE {self.notifications_table}
            SET status = $2, sent_at = COALESCE($3, sent_at)
            WHERE id = $1
            RETURNING *
        """
        row = await self.db.query_row(query, [notification_id, status.value, sent_at])
        return self._dict_to_notification(row) if row else None

    async def get_notification(self, notification_id: int) -> Optional[Notification]:
        """Get notification by ID"""
        row = await self.db.query_row(
            f"SELECT * FROM {self.notifications_table} WHERE id = $1", [notification_id]
        )
        return self._dict_to_notification(row) if row else None

    async def list_notifications(self, limit: int = 50, offset: int = 0) -> List[Notification]:
        """List notifications, newest first"""
        query = f"SELECT * FROM {self.notifications_table} ORDER BY created_at DESC, id DESC LIMIT $1 OFFSET $2"
        rows = await self.db.query(query, [limit, offset])
        return [self._dict_to_notification(row) for row in rows]

    async def get_notifications_by_order(self, order_id: int) -> List[Notification]:
        """Notifications produced for an order, oldest first"""
        query = f"SELECT * FROM {self.notifications_table} WHERE order_id = $1 ORDER BY created_at, id"
        rows = await self.db.query(query, [order_id])
        return [self._dict_to_notification(row) for row in rows]

    async def get_notifications_by_customer(self, customer_email: str) -> List[Notification]:
        """Notifications sent to a customer, newest first"""
        query = f"""
            SELECT * FROM {self.notifications_table}
            WHERE customer_email = $1
            ORDER BY created_at DESC, id DESC
        """
        rows = await self.db.query(query, [customer_email])
        return [self._dict_to_notification(row) for row in rows]

    def _dict_to_notification(self, data: Dict[str, Any]) -> Notification:
        """Convert a row to a Notification model"""
        return Notification(
            id=data["id"],
            order_id=data["order_id"],
            customer_email=data["customer_email"],
            type=NotificationType(data["type"]),
            subject=data["subject"],
            message=data["message"],
            status=NotificationStatus(data["status"]),
            sent_at=data.get("sent_at"),
            created_at=data["created_at"],
        )
