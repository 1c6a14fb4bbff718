from sqlalchemy import Column, String, Boolean, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from fruitland.models.base import Base
import uuid


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, nullable=False)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False)  # fruitland.core.constants.Role value

    # Fixed tenant; NULL only for SUPERADMIN
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=True)
    tenant = relationship("Tenant", back_populates="users")

    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    memberships = relationship("UserTenant", back_populates="user", cascade="all, delete-orphan")
    assigned_orders = relationship(
        "Order",
        back_populates="delivery_partner",
        foreign_keys="Order.delivery_partner_id",
    )

    __table_args__ = (
        UniqueConstraint("email", "tenant_id", name="uq_user_email_tenant"),
    )
