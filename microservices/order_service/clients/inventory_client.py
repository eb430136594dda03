"""
Inventory (product stock) Client for Order Service

Stock adjustment on delivery is fire-and-forget: one task per item, no awaiting,
no timeout, no retry. Failures are logged and otherwise lost.
"""

import asyncio
import httpx
import logging
from typing import Optional, Set, List

from ..models import Order

logger = logging.getLogger(__name__)


class InventoryClient:
    """Client for product_service stock endpoints"""

    def __init__(self, base_url: Optional[str] = None, config=None, http_client=None):
        if base_url:
            self.base_url = base_url.rstrip('/')
        else:
            try:
                from core.config_manager import ConfigManager
                config = config or ConfigManager("order_service")
                self.base_url = config.get_service_config().product_service_url.rstrip('/')
            except Exception as e:
                logger.warning(f"Product service lookup failed, using default: {e}")
                self.base_url = "http://localhost:8215"

        self.client = http_client or httpx.AsyncClient(timeout=None)
        self._in_flight: Set[asyncio.Task] = set()
        logger.info(f"InventoryClient initialized with base_url: {self.base_url}")

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """PUT /api/products/{product_id}/stock; True only on 2xx with success=true"""
        url = f"{self.base_url}/api/products/{product_id}/stock"
        try:
            response = await self.client.put(url, json={"quantity": quantity})
            if not 200 <= response.status_code < 300:
                logger.error(f"Stock update for product {product_id} failed: HTTP {response.status_code}")
                return False
            if not response.json().get("success", False):
                logger.error(f"Stock update for product {product_id} rejected by product service")
                return False
            logger.info(f"Stock decremented for product {product_id} by {quantity}")
            return True
        except Exception as e:
            logger.error(f"Error updating stock for product {product_id}: {e}")
            return False

    def notify_delivered(self, order: Order) -> List[asyncio.Task]:
        """
        Schedule one stock decrement per item of a delivered order.

        Returns immediately; the caller never waits on the outcome.
        """
        tasks = []
        for item in order.items:
            task = asyncio.create_task(self.decrement_stock(item.product_id, item.quantity))
            # Keep a reference until done so the task is not garbage-collected
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            tasks.append(task)
        logger.info(f"Scheduled {len(tasks)} stock updates for delivered order {order.id}")
        return tasks

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def drain(self):
        """Wait for scheduled stock updates (shutdown and tests only)"""
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)
