from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Index
from datetime import datetime
from fruitland.models.base import Base
import uuid


class LoyaltyTransaction(Base):
    """Ledger row; a user's balance in a tenant is the sum of points."""
    __tablename__ = "loyalty_transactions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    tenant_id = Column(String, ForeignKey("tenants.id"), nullable=False)
    order_id = Column(String, ForeignKey("orders.id"), nullable=True)
    points = Column(Integer, nullable=False)  # negative for redemptions
    reason = Column(String, nullable=False)  # "earned", "redeemed", "refunded"
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index("idx_loyalty_user_tenant", "user_id", "tenant_id"),
    )
