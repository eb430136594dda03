"""
Order Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules.

Usage:
    from .factory import create_order_service
    service = await create_order_service(config, event_bus)
"""
from typing import Optional

from core.config_manager import ConfigManager

from .order_service import OrderService


async def create_order_service(
    config: Optional[ConfigManager] = None,
    event_bus=None,
    inventory_client=None,
) -> OrderService:
    """
    Create OrderService with real dependencies.

    This function imports the real repository (which has I/O dependencies).
    Use this in production, NOT in tests.

    Args:
        config: Configuration manager
        event_bus: Event bus for publishing events
        inventory_client: Stock adjustment client (defaults to product service client)

    Returns:
        Configured OrderService instance
    """
    # Import real dependencies here (not at module level)
    from core.postgres_client import get_postgres_client
    from .order_repository import OrderRepository
    from .clients import InventoryClient

    if config is None:
        config = ConfigManager("order_service")

    db = await get_postgres_client("order_service", dsn=config.get_service_config().database_url)
    repository = OrderRepository(db=db)
    await repository.initialize()

    if inventory_client is None:
        inventory_client = InventoryClient(config=config)

    return OrderService(
        repository=repository,
        event_bus=event_bus,
        inventory_client=inventory_client,
    )
