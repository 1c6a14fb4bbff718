from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional


class TenantBase(BaseModel):
    name: str
    slug: Optional[str] = None
    domain: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None

    @field_validator("slug", "domain", mode="before")
    def blank_as_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TenantCreate(TenantBase):
    is_active: bool = True


class TenantUpdate(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    domain: Optional[str] = None
    description: Optional[str] = None
    logo: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("slug", "domain", mode="before")
    def blank_as_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Omit a field to leave it unchanged; these columns cannot be cleared
    @field_validator("name", "is_active")
    def not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class TenantRead(TenantBase):
    id: str
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TenantStats(TenantRead):
    user_count: int = 0
    product_count: int = 0
    order_count: int = 0
    subscription_count: int = 0


class SetActiveTenant(BaseModel):
    tenant_id: Optional[str] = None
