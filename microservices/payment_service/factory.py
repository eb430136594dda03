"""
Payment Service Factory

Factory for creating PaymentService with real dependencies.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Optional

from core.config_manager import ConfigManager

from .payment_service import PaymentService

logger = logging.getLogger(__name__)


async def create_payment_service(
    config: Optional[ConfigManager] = None,
    order_client=None,
) -> PaymentService:
    """
    Create PaymentService with all real dependencies

    Args:
        config: Optional config manager (creates default if not provided)
        order_client: Optional order service client (created from config if not provided)

    Returns:
        Fully initialized PaymentService instance
    """
    from core.postgres_client import get_postgres_client
    from .payment_repository import PaymentRepository

    # Initialize config if not provided
    if config is None:
        config = ConfigManager("payment_service")
    service_config = config.get_service_config()

    # Create repository
    db = await get_postgres_client("payment_service", dsn=service_config.database_url)
    repository = PaymentRepository(db=db)
    await repository.initialize()

    # Order hand-off client (payment still works without it)
    if order_client is None:
        try:
            from .clients import OrderServiceClient
            order_client = OrderServiceClient(config=config)
        except Exception as e:
            logger.warning(f"⚠️  Failed to initialize order client: {e}")
            order_client = None

    return PaymentService(
        repository=repository,
        order_client=order_client,
        latency_scale=service_config.payment_latency_scale,
    )
