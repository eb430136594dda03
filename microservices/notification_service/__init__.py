"""
Notification Service Package

Order notification emails and delivery records
"""

from .models import Notification, NotificationType, NotificationStatus
from .notification_service import NotificationService

__version__ = "1.0.0"
__all__ = [
    "Notification",
    "NotificationType",
    "NotificationStatus",
    "NotificationService",
]
