"""Bank transfer processor"""

import re
from typing import Optional

from ..models import PaymentMethod
from .base import PaymentProcessor

ACCOUNT_NUMBER_PATTERN = re.compile(r"[0-9]{10,20}")


class BankTransferProcessor(PaymentProcessor):
    transaction_prefix = "BT"
    simulated_latency = 1.5

    @property
    def method(self) -> PaymentMethod:
        return PaymentMethod.BANK_TRANSFER

    def validate(self, details: Optional[str]) -> bool:
        return details is not None and ACCOUNT_NUMBER_PATTERN.fullmatch(details) is not None
