"""
Payment Service Business Logic Layer

Payment processing and the payment ledger. Every accepted request leaves exactly one
ledger entry that ends COMPLETED or FAILED.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from .models import Payment, PaymentMethod, PaymentStatus, ProcessPaymentRequest
from .processors import PaymentProcessor, build_processors, resolve_payment_method
from .protocols import (
    PaymentRepositoryProtocol,
    OrderClientProtocol,
    InvalidPaymentDetailsError,
    PaymentNotFoundError,
    PaymentProcessingError,
)

logger = logging.getLogger(__name__)


class PaymentService:
    """Payment processing business logic"""

    def __init__(
        self,
        repository: PaymentRepositoryProtocol,
        processors: Optional[Dict[PaymentMethod, PaymentProcessor]] = None,
        order_client: Optional[OrderClientProtocol] = None,
        latency_scale: float = 1.0,
    ):
        """
        Initialize payment service

        Args:
            repository: Payment repository (dependency injection)
            processors: Processor per payment method (defaults to the built-in set)
            order_client: Order service client notified after a completed payment (optional)
            latency_scale: Simulated latency multiplier for the default processors
        """
        self.repository = repository
        self.processors = processors or build_processors(latency_scale)
        self.order_client = order_client

        logger.info("PaymentService initialized")

    async def process_payment(self, request: ProcessPaymentRequest) -> Payment:
        """
        Process a payment for an order.

        The payment is recorded as PROCESSING before validation, so a rejected or
        failed charge still leaves a FAILED entry in the ledger.

        Raises:
            UnsupportedPaymentMethodError: unknown method, nothing recorded
            PaymentProcessingError: details invalid or charge failed, entry FAILED
        """
        method = resolve_payment_method(request.payment_method)

        payment = await self.repository.create_payment(
            order_id=request.order_id,
            amount=request.amount,
            method=method,
            status=PaymentStatus.PROCESSING,
        )
        logger.info(f"Payment {payment.id} for order {request.order_id} recorded as PROCESSING ({method.value})")

        try:
            processor = self.processors[method]
            if not processor.validate(request.payment_details):
                raise InvalidPaymentDetailsError("Invalid payment details")

            transaction_id = await asyncio.to_thread(
                processor.process, request.amount, request.order_id, request.payment_details
            )

            card_last_four = None
            if method == PaymentMethod.CREDIT_CARD and request.payment_details:
                card_last_four = request.payment_details[-4:]

            payment = await self.repository.update_payment(
                payment.id,
                status=PaymentStatus.COMPLETED,
                transaction_id=transaction_id,
                card_last_four_digits=card_last_four,
            )
        except Exception as e:
            logger.error(f"Payment {payment.id} for order {request.order_id} failed: {e}")
            failed = await self.repository.update_payment(payment.id, status=PaymentStatus.FAILED)
            raise PaymentProcessingError(f"Payment processing failed: {e}", payment=failed) from e

        logger.info(f"Payment {payment.id} completed: {payment.transaction_id}")
        await self._notify_order_paid(payment)
        return payment

    async def _notify_order_paid(self, payment: Payment) -> None:
        """Best-effort hand-off to the order service; the payment stays COMPLETED either way"""
        if not self.order_client:
            return
        try:
            result = await self.order_client.record_payment(payment.order_id, payment.id)
            if result is None:
                logger.warning(
                    f"⚠️ Payment {payment.id} completed but order {payment.order_id} was not marked PAID"
                )
        except Exception as e:
            logger.error(f"Failed to record payment {payment.id} on order {payment.order_id}: {e}")

    # Query Operations

    async def get_payment(self, payment_id: int) -> Payment:
        """Get payment by ID"""
        payment = await self.repository.get_payment(payment_id)
        if not payment:
            raise PaymentNotFoundError(f"Payment not found: {payment_id}")
        return payment

    async def get_payment_by_order(self, order_id: int) -> Payment:
        """Most recent payment recorded for an order"""
        payments = await self.repository.get_payments_by_order(order_id)
        if not payments:
            raise PaymentNotFoundError(f"No payment found for order: {order_id}")
        return payments[0]

    async def list_payments_by_order(self, order_id: int) -> List[Payment]:
        """All payments recorded for an order, newest first"""
        return await self.repository.get_payments_by_order(order_id)

    async def list_payments(self, limit: int = 50, offset: int = 0) -> List[Payment]:
        """List payments"""
        return await self.repository.list_payments(limit=limit, offset=offset)

    async def health_check(self) -> Dict[str, Any]:
        """Health check for the service"""
        try:
            await self.repository.list_payments(limit=1, offset=0)
            return {"status": "healthy", "database": "connected", "timestamp": datetime.utcnow()}
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return {
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(e),
                "timestamp": datetime.utcnow()
            }
