"""
Order Service Data Models

Pydantic models for orders, their line items and the order lifecycle.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from enum import Enum


class OrderStatus(str, Enum):
    """Order status enumeration"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PAYMENT_PROCESSING = "PAYMENT_PROCESSING"
    PAID = "PAID"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.FAILED})

# Payment method names accepted on an order (normalised to upper case)
SUPPORTED_PAYMENT_METHODS = ("CREDIT_CARD", "PAYPAL", "BANK_TRANSFER", "CASH_ON_DELIVERY")


# Core Order Models

class OrderItem(BaseModel):
    """Order line item, immutable once the order exists"""
    model_config = ConfigDict(frozen=True)

    product_id: int
    product_name: str
    quantity: int = Field(..., gt=0)
    unit_price: Decimal = Field(..., gt=0)

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


class Order(BaseModel):
    """Core order model"""
    id: int
    customer_email: str
    customer_name: str
    items: List[OrderItem] = []
    shipping_address: str
    payment_method: str
    status: OrderStatus
    total_amount: Decimal
    payment_id: Optional[int] = None
    version: int = 0
    created_at: datetime
    updated_at: datetime


# Request Models

class OrderItemRequest(BaseModel):
    """Line item as submitted by the client"""
    product_id: int = Field(..., description="Product ID")
    product_name: str = Field(..., min_length=1, description="Product name at time of order")
    quantity: int = Field(..., gt=0, description="Units ordered")
    price: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Unit price")


class OrderCreateRequest(BaseModel):
    """Create order request"""
    customer_email: EmailStr = Field(..., description="Customer email")
    customer_name: str = Field(..., min_length=1, description="Customer name")
    items: List[OrderItemRequest] = Field(default=[], description="Order items")
    shipping_address: str = Field(..., min_length=1, description="Shipping address")
    payment_method: str = Field(..., description="Payment method name, e.g. CREDIT_CARD")


class OrderStatusUpdateRequest(BaseModel):
    """Update order status request"""
    status: OrderStatus = Field(..., description="New order status")


class OrderPaymentRequest(BaseModel):
    """Record payment request"""
    payment_id: int = Field(..., description="Payment ledger entry ID")


# Response Models

class OrderListResponse(BaseModel):
    """Order list response"""
    orders: List[Order]
    count: int
    limit: int
    offset: int


class OrderServiceStatus(BaseModel):
    """Order service status response"""
    service: str = "order_service"
    status: str = "operational"
    port: int = 8210
    version: str = "1.0.0"
    database_connected: bool
    event_bus_connected: bool = False
    publish_failures: int = 0
    timestamp: Optional[datetime] = None
