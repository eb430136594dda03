"""
Payment Processor Base Class

Each supported payment method has exactly one processor. A processor validates the
method-specific payment details and performs the (simulated) charge.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
import logging
import time
import uuid

from ..models import PaymentMethod

logger = logging.getLogger(__name__)


class PaymentProcessor(ABC):
    """
    Abstract base class for payment processors.

    ``process`` blocks the calling thread for the method's simulated latency;
    callers running on an event loop must hand it to a worker thread.
    """

    #: Transaction id prefix, e.g. "CC" -> "CC-1A2B3C4D"
    transaction_prefix: str = ""

    #: Simulated gateway latency in seconds
    simulated_latency: float = 0.0

    def __init__(self, latency_scale: float = 1.0):
        self.latency_seconds = max(self.simulated_latency * latency_scale, 0.0)

    @property
    @abstractmethod
    def method(self) -> PaymentMethod:
        """Payment method handled by this processor"""
        pass

    @abstractmethod
    def validate(self, details: Optional[str]) -> bool:
        """Return True when the payment details are acceptable for this method"""
        pass

    def process(self, amount: Decimal, order_id: int, details: Optional[str]) -> str:
        """
        Charge the payment.

        Returns:
            Transaction id
        """
        logger.info(f"Processing {self.method.value} payment of {amount} for order {order_id}")
        if self.latency_seconds:
            time.sleep(self.latency_seconds)

        transaction_id = self.new_transaction_id()
        logger.info(f"{self.method.value} payment for order {order_id} completed: {transaction_id}")
        return transaction_id

    def new_transaction_id(self) -> str:
        return f"{self.transaction_prefix}-{uuid.uuid4().hex[:8].upper()}"
