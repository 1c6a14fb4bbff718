from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Enum, Numeric, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from fruitland.core.constants import OrderStatus, PaymentStatus
from fruitland.models.base import Base
import uuid


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number = Column(String, unique=True, nullable=False)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False)
    address_id = Column(String, ForeignKey("addresses.id"), nullable=True)
    warehouse_id = Column(String, ForeignKey("warehouses.id"), nullable=True)
    delivery_partner_id = Column(String, ForeignKey("users.id"), nullable=True)
    subscription_id = Column(String, ForeignKey("subscriptions.id"), nullable=True)

    status = Column(Enum(OrderStatus), default=OrderStatus.PENDING, nullable=False)
    payment_status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)

    # Pricing snapshot
    subtotal = Column(Numeric(10, 2), nullable=False, default=0)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    points_redeemed = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    delivered_at = Column(DateTime, nullable=True)

    tenant = relationship("Tenant", back_populates="orders")
    user = relationship("User", foreign_keys=[user_id])
    address = relationship("Address")
    warehouse = relationship("Warehouse", back_populates="orders")
    delivery_partner = relationship("User", foreign_keys=[delivery_partner_id], back_populates="assigned_orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_orders_tenant", "tenant_id"),
        Index("idx_orders_tenant_user", "tenant_id", "user_id"),
        Index("idx_orders_partner", "delivery_partner_id"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(String, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)

    # Snapshot pricing and name at time of order
    price = Column(Numeric(10, 2), nullable=False)
    product_name = Column(String, nullable=False)

    order = relationship("Order", back_populates="items")
    product = relationship("Product")
