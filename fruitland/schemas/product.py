from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional


class ProductBase(BaseModel):
    name: str
    description: str = ""
    price: Decimal = Field(ge=0)
    image: str = ""
    category: str
    stock: int = Field(default=0, ge=0)
    is_available: bool = True
    is_seasonal: bool = False


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    image: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    is_available: Optional[bool] = None
    is_seasonal: Optional[bool] = None


class ProductRead(ProductBase):
    id: str
    tenant_id: str
    created_at: datetime

    class Config:
        from_attributes = True
