from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class AddressCreate(BaseModel):
    name: str
    phone: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: str
    pincode: str
    is_default: bool = False


class AddressRead(AddressCreate):
    id: str
    tenant_id: str
    created_at: datetime

    class Config:
        from_attributes = True
