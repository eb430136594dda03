"""
Payment Repository

Data access layer for the payment ledger using the shared asyncpg client.
"""

import logging
from decimal import Decimal
from typing import Optional, List, Dict, Any

from core.postgres_client import PostgresClientWrapper
from .models import Payment, PaymentMethod, PaymentStatus

logger = logging.getLogger(__name__)


class PaymentRepository:
    """Repository for payment ledger entries"""

    def __init__(self, db: Optional[PostgresClientWrapper] = None):
        """Initialize Payment Repository"""
        self.db = db or PostgresClientWrapper("payment_service")
        self.schema = "payment"
        self.payments_table = f'"{self.schema}".payments'

        logger.info("PaymentRepository initialized")

    async def initialize(self):
        """Create schema and table if missing"""
        async with self.db.transaction() as conn:
            await conn.execute(f'CREATE SCHEMA IF NOT EXISTS "{self.schema}"')
            await conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {self.payments_table} (
                    id BIGSERIAL PRIMARY KEY,
                    order_id BIGINT NOT NULL,
                    amount NUMERIC(12, 2) NOT NULL,
                    method TEXT NOT NULL,
                    status TEXT NOT NULL,
                    transaction_id TEXT,
                    card_last_four_digits VARCHAR(4),
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
            """)
            await conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_payments_order_id ON {self.payments_table} (order_id)"
            )

    async def create_payment(
        self,
        order_id: int,
        amount: Decimal,
        method: PaymentMethod,
        status: PaymentStatus = PaymentStatus.PROCESSING,
    ) -> Payment:
        """Record a new payment"""
        query = f"""
            INSERT INTO {self.payments_table} (order_id, amount, method, status)
            VALUES ($1, $2, $3, $4)
            RETURNING *
        """
        try:
            row = await self.db.query_row(query, [order_id, amount, method.value, status.value])
        except Exception as e:
            logger.error(f"Failed to create payment for order {order_id}: {e}")
            raise

        if not row:
            raise Exception("Failed to create payment")
        return self._dict_to_payment(row)

    async def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID"""
        row = await self.db.query_row(f"SELECT * FROM {self.payments_table} WHERE id = $1", [payment_id])
        return self._dict_to_payment(row) if row else None

    async def update_payment(
        self,
        payment_id: int,
        status: PaymentStatus,
        transaction_id: Optional[str] = None,
        card_last_four_digits: Optional[str] = None,
    ) -> Optional[Payment]:
        """Update payment outcome"""
        query = f"""
            UPDATE {self.payments_table}
            SET status = $2,
                transaction_id = COALESCE($3, transaction_id),
                card_last_four_digits = COALESCE($4, card_last_four_digits),
                updated_at = now()
            WHERE id = $1
            RETURNING *
        """
        row = await self.db.query_row(query, [payment_id, status.value, transaction_id, card_last_four_digits])
        return self._dict_to_payment(row) if row else None

    async def list_payments(self, limit: int = 50, offset: int = 0) -> List[Payment]:
        """List payments, newest first"""
        query = f"SELECT * FROM {self.payments_table} ORDER BY created_at DESC, id DESC LIMIT $1 OFFSET $2"
        rows = await self.db.query(query, [limit, offset])
        return [self._dict_to_payment(row) for row in rows]

    async def get_payments_by_order(self, order_id: int) -> List[Payment]:
        """Payments recorded for an order, newest first"""
        query = f"SELECT * FROM {self.payments_table} WHERE order_id = $1 ORDER BY created_at DESC, id DESC"
        rows = await self.db.query(query, [order_id])
        return [self._dict_to_payment(row) for row in rows]

    def _dict_to_payment(self, data: Dict[str, Any]) -> Payment:
        """Convert a row to a Payment model"""
        return Payment(
            id=data["id"],
            order_id=data["order_id"],
            amount=Decimal(str(data["amount"])),
            method=PaymentMethod(data["method"]),
            status=PaymentStatus(data["status"]),
            transaction_id=data.get("transaction_id"),
            card_last_four_digits=data.get("card_last_four_digits"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
