"""
Notification Service Data Models

Notification records produced for order lifecycle events.
"""

from enum import Enum
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


# ====================
# Enumerations
# ====================

class NotificationType(str, Enum):
    """Order lifecycle stage a notification announces"""
    ORDER_CREATED = "ORDER_CREATED"
    ORDER_CONFIRMED = "ORDER_CONFIRMED"
    ORDER_PAID = "ORDER_PAID"
    ORDER_SHIPPED = "ORDER_SHIPPED"
    ORDER_DELIVERED = "ORDER_DELIVERED"


class NotificationStatus(str, Enum):
    """Delivery status"""
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"


# ====================
# Core Models
# ====================

class Notification(BaseModel):
    """Notification record (one per consumed event, duplicates included)"""
    id: int
    order_id: int
    customer_email: str
    type: NotificationType
    subject: str
    message: str
    status: NotificationStatus
    sent_at: Optional[datetime] = None
    created_at: datetime


class RenderedMessage(BaseModel):
    """Subject and body produced from a template"""
    subject: str
    body: str
    is_html: bool = False


# ====================
# Response Models
# ====================

class NotificationListResponse(BaseModel):
    """Notification list response"""
    notifications: List[Notification]
    count: int


class NotificationServiceStatus(BaseModel):
    """Notification service status response"""
    service: str = "notification_service"
    status: str = "operational"
    port: int = 8206
    version: str = "1.0.0"
    database_connected: bool
    email_enabled: bool = False
    subscriptions: List[str] = Field(default_factory=list)
    timestamp: Optional[datetime] = None
