"""
Order Repository

Data access layer for orders using the shared asyncpg client.
"""

import json
import logging
from decimal import Decimal
from typing import Optional, List, Dict, Any

from core.postgres_client import PostgresClientWrapper
from .models import Order, OrderItem, OrderStatus
from .protocols import OrderConcurrencyError

logger = logging.getLogger(__name__)


class OrderRepository:
    """
    Repository for order data operations

    Items are stored as a JSONB array on the order row; every update bumps the
    ``version`` column so concurrent writers from other processes are detected.
    """

    def __init__(self, db: Optional[PostgresClientWrapper] = None):
        """Initialize Order Repository"""
        self.db = db or PostgresClientWrapper("order_service")
        self.schema = "orders"
        self.orders_table = f'"{self.schema}".orders'

        logger.info("OrderRepository initialized")

    async def initialize(self):
        """Create schema and table if missing"""
        async with self.db.transaction() as conn:
            await conn.execute(f'CREATE SCHEMA IF NOT EXISTS "{self.schema}"')
            await conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.orders_table} (
                    id BIGSERIAL PRIMARY KEY,
                    customer_email TEXT NOT NULL,
                    customer_name TEXT NOT NULL,
                    items JSONB NOT NULL DEFAULT '[]'::jsonb,
                    shipping_address TEXT NOT NULL,
                    payment_method TEXT NOT NULL,
                    status TEXT NOT NULL,
                    total_amount NUMERIC(12, 2) NOT NULL,
                    payment_id BIGINT,
                    version INTEGER NOT NULL DEFAULT 0,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
            """)
            await conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_orders_customer_email ON {self.orders_table} (customer_email)"
            )

    async def create_order(
        self,
        customer_email: str,
        customer_name: str,
        items: List[OrderItem],
        shipping_address: str,
        payment_method: str,
        total_amount: Decimal,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Create a new order"""
        query = f"""
            INSERT INTO {self.orders_table}
                (customer_email, customer_name, items, shipping_address, payment_method, status, total_amount)
            VALUES ($1, $2, $3::jsonb, $4, $5, $6, $7)
            RETURNING *
        """
        items_json = json.dumps([
            {
                "product_id": item.product_id,
                "product_name": item.product_name,
                "quantity": item.quantity,
                "unit_price": str(item.unit_price),
            }
            for item in items
        ])

        try:
            row = await self.db.query_row(query, [
                customer_email, customer_name, items_json, shipping_address,
                payment_method, status.value, total_amount,
            ])
        except Exception as e:
            logger.error(f"Failed to create order: {e}")
            raise

        if not row:
            raise Exception("Failed to create order")
        return self._dict_to_order(row)

    async def get_order(self, order_id: int) -> Optional[Order]:
        """Get order by ID"""
        query = f"SELECT * FROM {self.orders_table} WHERE id = $1"
        row = await self.db.query_row(query, [order_id])
        return self._dict_to_order(row) if row else None

    async def update_order(
        self,
        order_id: int,
        status: Optional[OrderStatus] = None,
        payment_id: Optional[int] = None,
        expected_version: Optional[int] = None,
    ) -> Optional[Order]:
        """Update order status and/or payment reference"""
        query = f"""
            UPDATE {self.orders_table}
            SET status = COALESCE($2, status),
                payment_id = COALESCE($3, payment_id),
                version = version + 1,
                updated_at = now()
            WHERE id = $1 AND ($4::int IS NULL OR version = $4::int)
            RETURNING *
        """
        row = await self.db.query_row(query, [
            order_id,
            status.value if status else None,
            payment_id,
            expected_version,
        ])
        if row:
            return self._dict_to_order(row)

        if expected_version is not None and await self.get_order(order_id):
            raise OrderConcurrencyError(
                f"Order {order_id} was modified concurrently (expected version {expected_version})"
            )
        return None

    async def list_orders(self, limit: int = 50, offset: int = 0) -> List[Order]:
        """List orders, newest first"""
        query = f"SELECT * FROM {self.orders_table} ORDER BY created_at DESC, id DESC LIMIT $1 OFFSET $2"
        rows = await self.db.query(query, [limit, offset])
        return [self._dict_to_order(row) for row in rows]

    async def get_orders_by_customer(self, customer_email: str) -> List[Order]:
        """Get orders placed by a customer"""
        query = f"SELECT * FROM {self.orders_table} WHERE customer_email = $1 ORDER BY created_at DESC, id DESC"
        rows = await self.db.query(query, [customer_email])
        return [self._dict_to_order(row) for row in rows]

    def _dict_to_order(self, data: Dict[str, Any]) -> Order:
        """Convert a row to an Order model"""
        items = data.get("items")
        if isinstance(items, str):
            items = json.loads(items)
        elif not isinstance(items, list):
            items = []

        return Order(
            id=data["id"],
            customer_email=data["customer_email"],
            customer_name=data["customer_name"],
            items=[
                OrderItem(
                    product_id=item["product_id"],
                    product_name=item["product_name"],
                    quantity=item["quantity"],
                    unit_price=Decimal(str(item["unit_price"])),
                )
                for item in items
            ],
            shipping_address=data["shipping_address"],
            payment_method=data["payment_method"],
            status=OrderStatus(data["status"]),
            total_amount=Decimal(str(data["total_amount"])),
            payment_id=data.get("payment_id"),
            version=data.get("version", 0),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
