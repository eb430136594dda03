"""
Notification Service Event Models

Consumer-side view of the order events this service subscribes to. Unknown
fields are ignored so producers can add to the payload.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from decimal import Decimal


class OrderEventItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    product_id: int = Field(..., alias="productId")
    product_name: str = Field("", alias="productName")
    quantity: int
    price: Decimal


class OrderEvent(BaseModel):
    """Order snapshot carried by order.* events"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    order_id: int = Field(..., alias="orderId")
    customer_email: str = Field(..., alias="customerEmail")
    customer_name: str = Field("", alias="customerName")
    status: Optional[str] = None
    total_amount: Optional[Decimal] = Field(None, alias="totalAmount")
    items: List[OrderEventItem] = []
    shipping_address: Optional[str] = Field(None, alias="shippingAddress")
    payment_method: Optional[str] = Field(None, alias="paymentMethod")
    timestamp: Optional[datetime] = None
