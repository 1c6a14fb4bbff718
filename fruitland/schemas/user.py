from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from fruitland.core.constants import Role


class RegisterRequest(BaseModel):
    tenant_slug: str
    email: EmailStr
    name: str
    password: str = Field(min_length=6)
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    tenant_slug: Optional[str] = None


class StaffCreate(BaseModel):
    email: EmailStr
    name: str
    password: str = Field(min_length=6)
    phone: Optional[str] = None
    role: Role


class UserRead(BaseModel):
    id: str
    email: str
    name: str
    phone: Optional[str] = None
    role: str
    tenant_id: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class MeResponse(UserRead):
    active_tenant_id: Optional[str] = None


class DeliveryAgentRead(UserRead):
    total_orders: int = 0
    active_orders: int = 0
