from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional


class LoyaltyTransactionRead(BaseModel):
    id: str
    order_id: Optional[str] = None
    points: int
    reason: str
    created_at: datetime

    class Config:
        from_attributes = True


class LoyaltySummary(BaseModel):
    tenant_id: str
    balance: int
    point_value: float
    transactions: List[LoyaltyTransactionRead]
