from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from fruitland.core.constants import OrderStatus, PaymentStatus


class CheckoutRequest(BaseModel):
    address_id: str
    redeem_points: int = Field(default=0, ge=0)


class OrderItemRead(BaseModel):
    id: str
    product_id: str
    product_name: str
    quantity: int
    price: Decimal

    class Config:
        from_attributes = True


class OrderRead(BaseModel):
    id: str
    order_number: str
    user_id: str
    tenant_id: str
    address_id: Optional[str] = None
    warehouse_id: Optional[str] = None
    delivery_partner_id: Optional[str] = None
    status: OrderStatus
    payment_status: PaymentStatus
    subtotal: Decimal
    discount: Decimal
    total_amount: Decimal
    points_redeemed: int
    created_at: datetime
    delivered_at: Optional[datetime] = None
    items: List[OrderItemRead] = []

    class Config:
        from_attributes = True


class OrderStatusUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None


class OrderAssign(BaseModel):
    delivery_partner_id: str


class DeliveryStatusUpdate(BaseModel):
    status: OrderStatus
