from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Text, DateTime, Date, Enum, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime
from fruitland.core.constants import DeliveryFrequency, SubscriptionStatus
from fruitland.models.base import Base
import uuid


class SubscriptionPackage(Base):
    __tablename__ = "subscription_packages"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    frequency = Column(Enum(DeliveryFrequency), default=DeliveryFrequency.WEEKLY, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    duration_weeks = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    tenant = relationship("Tenant", back_populates="subscription_packages")


class Subscription(Base):
    __tablename__ = "subscriptions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False)
    package_id = Column(String, ForeignKey("subscription_packages.id"), nullable=False)
    address_id = Column(String, ForeignKey("addresses.id"), nullable=False)
    status = Column(Enum(SubscriptionStatus), default=SubscriptionStatus.ACTIVE, nullable=False)
    start_date = Column(Date, nullable=False)
    next_delivery_date = Column(Date, nullable=True)
    paused_until = Column(Date, nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    tenant = relationship("Tenant", back_populates="subscriptions")
    package = relationship("SubscriptionPackage")
    address = relationship("Address")
