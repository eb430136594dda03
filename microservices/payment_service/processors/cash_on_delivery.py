"""Cash on delivery processor. Nothing to validate and nothing to wait for."""

from typing import Optional

from ..models import PaymentMethod
from .base import PaymentProcessor


class CashOnDeliveryProcessor(PaymentProcessor):
    transaction_prefix = "COD"
    simulated_latency = 0.0

    @property
    def method(self) -> PaymentMethod:
        return PaymentMethod.CASH_ON_DELIVERY

    def validate(self, details: Optional[str]) -> bool:
        return True
