"""PayPal processor"""

import re
from typing import Optional

from ..models import PaymentMethod
from .base import PaymentProcessor

PAYPAL_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")


class PayPalProcessor(PaymentProcessor):
    transaction_prefix = "PP"
    simulated_latency = 0.8

    @property
    def method(self) -> PaymentMethod:
        return PaymentMethod.PAYPAL

    def validate(self, details: Optional[str]) -> bool:
        return details is not None and PAYPAL_EMAIL_PATTERN.fullmatch(details) is not None
