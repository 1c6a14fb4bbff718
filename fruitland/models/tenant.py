# fruitland/models/tenant.py
from sqlalchemy import Column, String, Boolean, Text, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from fruitland.models.base import Base
import uuid


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=True)
    domain = Column(String, unique=True, nullable=True)
    description = Column(Text, nullable=True)
    logo = Column(String, nullable=True)
    contact_email = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    users = relationship("User", back_populates="tenant")
    memberships = relationship("UserTenant", back_populates="tenant", cascade="all, delete-orphan")
    products = relationship("Product", back_populates="tenant")
    orders = relationship("Order", back_populates="tenant")
    warehouses = relationship("Warehouse", back_populates="tenant")
    subscription_packages = relationship("SubscriptionPackage", back_populates="tenant")
    subscriptions = relationship("Subscription", back_populates="tenant")
    configs = relationship("StoreConfig", back_populates="tenant", cascade="all, delete-orphan")
