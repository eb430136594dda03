"""
Payment Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable
from decimal import Decimal

from .models import Payment, PaymentMethod, PaymentStatus


# ============================================================================
# Custom Exceptions
# ============================================================================

class PaymentServiceError(Exception):
    """Base exception for payment service errors"""
    pass


class PaymentValidationError(PaymentServiceError):
    """Request rejected before anything was recorded"""
    pass


class UnsupportedPaymentMethodError(PaymentValidationError):
    """Payment method name is not one of the supported methods"""
    pass


class InvalidPaymentDetailsError(PaymentServiceError):
    """Payment details failed the method's validation rule"""
    pass


class PaymentProcessingError(PaymentServiceError):
    """Payment was recorded and then failed; the ledger entry is FAILED"""

    def __init__(self, message: str, payment: Optional[Payment] = None):
        super().__init__(message)
        self.payment = payment


class PaymentNotFoundError(PaymentServiceError):
    """Payment not found"""
    pass


# ============================================================================
# Repository Protocol
# ============================================================================

@runtime_checkable
class PaymentRepositoryProtocol(Protocol):
    """Interface for Payment Repository"""

    async def create_payment(
        self,
        order_id: int,
        amount: Decimal,
        method: PaymentMethod,
        status: PaymentStatus = PaymentStatus.PROCESSING,
    ) -> Payment:
        """Record a new payment"""
        ...

    async def get_payment(self, payment_id: int) -> Optional[Payment]:
        """Get payment by ID"""
        ...

    async def update_payment(
        self,
        payment_id: int,
        status: PaymentStatus,
        transaction_id: Optional[str] = None,
        card_last_four_digits: Optional[str] = None,
    ) -> Optional[Payment]:
        """Update payment outcome"""
        ...

    async def list_payments(self, limit: int = 50, offset: int = 0) -> List[Payment]:
        """List payments, newest first"""
        ...

    async def get_payments_by_order(self, order_id: int) -> List[Payment]:
        """Payments recorded for an order, newest first"""
        ...


# ============================================================================
# Client Protocols
# ============================================================================

@runtime_checkable
class OrderClientProtocol(Protocol):
    """Interface for Order Service Client"""

    async def record_payment(self, order_id: int, payment_id: int) -> Optional[Dict[str, Any]]:
        """Tell the order service that an order was paid"""
        ...
