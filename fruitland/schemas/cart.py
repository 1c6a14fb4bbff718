from pydantic import BaseModel, Field
from decimal import Decimal
from typing import List

from fruitland.schemas.product import ProductRead


class CartItemCreate(BaseModel):
    product_id: str
    quantity: int = Field(default=1, gt=0)


class CartItemRead(BaseModel):
    id: str
    product_id: str
    quantity: int
    product: ProductRead

    class Config:
        from_attributes = True


class CartRead(BaseModel):
    items: List[CartItemRead]
    subtotal: Decimal
