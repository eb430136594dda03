"""
Notification Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.
"""
import logging
from typing import Optional

from core.config_manager import ConfigManager

from .notification_service import NotificationService

logger = logging.getLogger(__name__)


async def create_notification_service(
    config: Optional[ConfigManager] = None,
    email_client=None,
) -> NotificationService:
    """
    Create NotificationService with real dependencies.

    Args:
        config: Configuration manager
        email_client: Delivery client (defaults to the configured EmailClient)

    Returns:
        Configured NotificationService instance
    """
    from core.postgres_client import get_postgres_client
    from .notification_repository import NotificationRepository
    from .clients import EmailClient

    if config is None:
        config = ConfigManager("notification_service")
    service_config = config.get_service_config()

    db = await get_postgres_client("notification_service", dsn=service_config.database_url)
    repository = NotificationRepository(db=db)
    await repository.initialize()

    if email_client is None:
        email_client = EmailClient(config=config)

    return NotificationService(
        repository=repository,
        email_client=email_client,
        html_emails=service_config.html_emails,
    )
