"""
Payment Processors

One processor per supported payment method. Method names arriving from clients are
resolved to a PaymentMethod exactly once, at the boundary, by ``resolve_payment_method``;
everything past that point works with the enum.

Usage:
    from .processors import resolve_payment_method, get_processor

    method = resolve_payment_method("credit_card")
    processor = get_processor(method)
    if processor.validate(details):
        transaction_id = processor.process(amount, order_id, details)
"""

from typing import Dict, Optional

from ..models import PaymentMethod
from ..protocols import UnsupportedPaymentMethodError
from .base import PaymentProcessor
from .credit_card import CreditCardProcessor
from .paypal import PayPalProcessor
from .bank_transfer import BankTransferProcessor
from .cash_on_delivery import CashOnDeliveryProcessor


PROCESSOR_CLASSES = {
    PaymentMethod.CREDIT_CARD: CreditCardProcessor,
    PaymentMethod.PAYPAL: PayPalProcessor,
    PaymentMethod.BANK_TRANSFER: BankTransferProcessor,
    PaymentMethod.CASH_ON_DELIVERY: CashOnDeliveryProcessor,
}


def resolve_payment_method(name: Optional[str]) -> PaymentMethod:
    """
    Parse a payment method name (case-insensitive).

    Raises:
        UnsupportedPaymentMethodError: name is not a supported method
    """
    normalized = (name or "").upper()
    try:
        return PaymentMethod(normalized)
    except ValueError:
        raise UnsupportedPaymentMethodError(f"Unsupported payment method: {name}") from None


def get_processor(method: PaymentMethod, latency_scale: float = 1.0) -> PaymentProcessor:
    """
    Factory function to get the processor for a payment method.

    Args:
        method: Resolved payment method
        latency_scale: Multiplier for the simulated latency (0 disables it)

    Returns:
        Processor instance
    """
    processor_class = PROCESSOR_CLASSES.get(method)
    if not processor_class:
        raise UnsupportedPaymentMethodError(f"Unsupported payment method: {method}")

    return processor_class(latency_scale=latency_scale)


def build_processors(latency_scale: float = 1.0) -> Dict[PaymentMethod, PaymentProcessor]:
    """One processor instance per supported method"""
    return {method: get_processor(method, latency_scale) for method in PaymentMethod}


__all__ = [
    "PaymentProcessor",
    "CreditCardProcessor",
    "PayPalProcessor",
    "BankTransferProcessor",
    "CashOnDeliveryProcessor",
    "PROCESSOR_CLASSES",
    "resolve_payment_method",
    "get_processor",
    "build_processors",
]
