from sqlalchemy import Column, String, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from fruitland.models.base import Base
import uuid


class StoreConfig(Base):
    __tablename__ = "store_configs"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    tenant_id = Column(String, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False)
    key = Column(String, nullable=False)  # e.g. "SITE_NAME", "THEME_CONFIG"
    value = Column(Text, nullable=False)
    label = Column(String, nullable=True)
    type = Column(String, default="string", nullable=False)
    category = Column(String, default="general", nullable=False)

    tenant = relationship("Tenant", back_populates="configs")

    __table_args__ = (
        UniqueConstraint("tenant_id", "key", name="uq_store_config_tenant_key"),
    )
