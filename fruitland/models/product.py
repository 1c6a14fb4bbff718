from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Text, DateTime, Numeric, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from fruitland.models.base import Base
import uuid


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String, nullable=False)
    category = Column(String, nullable=False)
    stock = Column(Integer, default=0, nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    is_seasonal = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    tenant = relationship("Tenant", back_populates="products")
    stocks = relationship("ProductStock", back_populates="product", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_products_tenant", "tenant_id"),
        Index("idx_products_tenant_category", "tenant_id", "category"),
    )
