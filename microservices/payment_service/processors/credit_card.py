"""Credit card processor"""

import re
from typing import Optional

from ..models import PaymentMethod
from .base import PaymentProcessor

CARD_NUMBER_PATTERN = re.compile(r"[0-9]{10,19}")


class CreditCardProcessor(PaymentProcessor):
    transaction_prefix = "CC"
    simulated_latency = 1.0

    @property
    def method(self) -> PaymentMethod:
        return PaymentMethod.CREDIT_CARD

    def validate(self, details: Optional[str]) -> bool:
        # Card number: 10-19 digits, nothing else
        return details is not None and CARD_NUMBER_PATTERN.fullmatch(details) is not None
