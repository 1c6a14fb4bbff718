from pydantic import BaseModel, Field
from datetime import date, datetime
from decimal import Decimal
from typing import Literal, Optional

from fruitland.core.constants import DeliveryFrequency, SubscriptionStatus


class PackageBase(BaseModel):
    name: str
    description: Optional[str] = None
    frequency: DeliveryFrequency = DeliveryFrequency.WEEKLY
    price: Decimal = Field(ge=0)
    duration_weeks: Optional[int] = Field(default=None, gt=0)
    is_active: bool = True


class PackageCreate(PackageBase):
    pass


class PackageUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    frequency: Optional[DeliveryFrequency] = None
    price: Optional[Decimal] = Field(default=None, ge=0)
    duration_weeks: Optional[int] = Field(default=None, gt=0)
    is_active: Optional[bool] = None


class PackageRead(PackageBase):
    id: str
    tenant_id: str
    created_at: datetime

    class Config:
        from_attributes = True


class SubscriptionCreate(BaseModel):
    package_id: str
    address_id: str
    start_date: Optional[date] = None


class SubscriptionAction(BaseModel):
    action: Literal["pause", "resume", "cancel"]
    paused_until: Optional[date] = None


class SubscriptionRead(BaseModel):
    id: str
    user_id: str
    tenant_id: str
    package_id: str
    address_id: str
    status: SubscriptionStatus
    start_date: date
    next_delivery_date: Optional[date] = None
    paused_until: Optional[date] = None
    cancelled_at: Optional[datetime] = None
    created_at: datetime
    package: Optional[PackageRead] = None

    class Config:
        from_attributes = True
