"""
Order Service Event Models

Wire format of the events published by order service. Field names are camelCase
on the wire; amounts are serialised as decimal strings.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List
from datetime import datetime, timezone
from decimal import Decimal

from ..models import Order


class OrderEventItem(BaseModel):
    """Line item as carried in an order event"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: int = Field(..., alias="productId")
    product_name: str = Field(..., alias="productName")
    quantity: int
    price: Decimal


class OrderEvent(BaseModel):
    """Snapshot of an order at the moment an event is emitted"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    order_id: int = Field(..., alias="orderId")
    customer_email: str = Field(..., alias="customerEmail")
    customer_name: str = Field(..., alias="customerName")
    status: str
    total_amount: Decimal = Field(..., alias="totalAmount")
    items: List[OrderEventItem] = []
    shipping_address: str = Field(..., alias="shippingAddress")
    payment_method: str = Field(..., alias="paymentMethod")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_order(cls, order: Order) -> "OrderEvent":
        return cls(
            order_id=order.id,
            customer_email=order.customer_email,
            customer_name=order.customer_name,
            status=order.status.value,
            total_amount=order.total_amount,
            items=[
                OrderEventItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    price=item.unit_price,
                )
                for item in order.items
            ],
            shipping_address=order.shipping_address,
            payment_method=order.payment_method,
        )

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
