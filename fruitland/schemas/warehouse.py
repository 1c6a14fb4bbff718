from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import List, Optional


class WarehouseBase(BaseModel):
    name: str
    city: Optional[str] = None
    pincode: Optional[str] = None
    zone: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    is_active: bool = True


class WarehouseCreate(WarehouseBase):
    pass


class WarehouseUpdate(BaseModel):
    name: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    zone: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    is_active: Optional[bool] = None


class ProductStockRead(BaseModel):
    product_id: str
    quantity: int

    class Config:
        from_attributes = True


class WarehouseRead(WarehouseBase):
    id: str
    tenant_id: str
    created_at: datetime
    product_stocks: List[ProductStockRead] = []

    class Config:
        from_attributes = True


class StockSet(BaseModel):
    product_id: str
    quantity: int = Field(ge=0)
