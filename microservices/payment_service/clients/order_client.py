"""
Order Service Client for Payment Service

HTTP client used to mark an order PAID once its payment completed
"""

import httpx
import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class OrderServiceClient:
    """Client for order_service"""

    def __init__(self, base_url: Optional[str] = None, config=None, http_client=None):
        """
        Initialize Order Service client

        Args:
            base_url: Order service base URL
            config: ConfigManager instance used when base_url is not given
            http_client: Pre-built HTTP client (tests)
        """
        if base_url:
            self.base_url = base_url.rstrip('/')
        else:
            try:
                from core.config_manager import ConfigManager
                config = config or ConfigManager("payment_service")
                self.base_url = config.get_service_config().order_service_url.rstrip('/')
            except Exception as e:
                logger.warning(f"Order service lookup failed, using default: {e}")
                self.base_url = "http://localhost:8210"

        self.client = http_client or httpx.AsyncClient(timeout=10.0)
        logger.info(f"OrderServiceClient initialized with base_url: {self.base_url}")

    async def close(self):
        """Close HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def record_payment(self, order_id: int, payment_id: int) -> Optional[Dict[str, Any]]:
        """
        Record a completed payment on an order

        Args:
            order_id: Order ID
            payment_id: Payment ledger entry ID

        Returns:
            Updated order if the order service accepted it
        """
        try:
            response = await self.client.put(
                f"{self.base_url}/api/v1/orders/{order_id}/payment",
                json={"payment_id": payment_id}
            )
            if response.status_code == 404:
                logger.warning(f"Order {order_id} not found while recording payment {payment_id}")
                return None
            if response.status_code >= 400:
                logger.error(f"Failed to record payment on order {order_id}: HTTP {response.status_code}")
                return None
            return response.json()

        except Exception as e:
            logger.error(f"Error recording payment on order {order_id}: {e}")
            return None
