"""
Payment Service Data Models

Payment ledger entries and the payment method / status enumerations.
"""

from enum import Enum
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field


# ====================
# Enumerations
# ====================

class PaymentStatus(str, Enum):
    """Payment status"""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    """Supported payment methods (closed set)"""
    CREDIT_CARD = "CREDIT_CARD"
    PAYPAL = "PAYPAL"
    BANK_TRANSFER = "BANK_TRANSFER"
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"


# ====================
# Core Models
# ====================

class Payment(BaseModel):
    """Payment ledger entry"""
    id: int
    order_id: int
    amount: Decimal
    method: PaymentMethod
    status: PaymentStatus
    transaction_id: Optional[str] = None
    card_last_four_digits: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ====================
# Request Models
# ====================

class ProcessPaymentRequest(BaseModel):
    """Process payment request"""
    order_id: int = Field(..., description="Order being paid")
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Amount to charge")
    payment_method: str = Field(..., description="Payment method name, case-insensitive")
    payment_details: Optional[str] = Field(
        None, description="Card number, PayPal email or bank account number depending on method"
    )


# ====================
# Response Models
# ====================

class PaymentListResponse(BaseModel):
    """Payment list response"""
    payments: List[Payment]
    count: int


class PaymentServiceStatus(BaseModel):
    """Payment service status response"""
    service: str = "payment_service"
    status: str = "operational"
    port: int = 8207
    version: str = "1.0.0"
    database_connected: bool
    supported_methods: List[PaymentMethod] = list(PaymentMethod)
    timestamp: Optional[datetime] = None
