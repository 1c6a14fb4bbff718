import math
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.core.config import settings
from fruitland.models.loyalty import LoyaltyTransaction
from fruitland.models.order import Order

EARNED = "earned"
REDEEMED = "redeemed"
REFUNDED = "refunded"


async def get_balance(db: AsyncSession, user_id: str, tenant_id: str) -> int:
    result = await db.execute(
        select(func.coalesce(func.sum(LoyaltyTransaction.points), 0)).where(
            LoyaltyTransaction.user_id == user_id,
            LoyaltyTransaction.tenant_id == tenant_id,
        )
    )
    return int(result.scalar_one())


async def list_transactions(db: AsyncSession, user_id: str, tenant_id: str):
    result = await db.execute(
        select(LoyaltyTransaction)
        .where(
            LoyaltyTransaction.user_id == user_id,
            LoyaltyTransaction.tenant_id == tenant_id,
        )
        .order_by(LoyaltyTransaction.created_at.desc())
    )
    return result.scalars().all()


def points_for_amount(amount) -> int:
    return int(math.floor(Decimal(amount) * Decimal(str(settings.LOYALTY_POINTS_PER_UNIT))))


def points_value(points: int) -> Decimal:
    return (Decimal(points) * Decimal(str(settings.LOYALTY_POINT_VALUE))).quantize(Decimal("0.01"))


def redeemable_points(requested: int, balance: int, order_total) -> int:
    """Clamp a redemption request to the balance and to what the order total can absorb."""
    if requested <= 0 or balance <= 0:
        return 0
    value = Decimal(str(settings.LOYALTY_POINT_VALUE))
    max_for_total = int(math.floor(Decimal(order_total) / value)) if value > 0 else 0
    return max(0, min(requested, balance, max_for_total))


def record_redemption(db: AsyncSession, order: Order, points: int) -> None:
    db.add(LoyaltyTransaction(
        user_id=order.user_id,
        tenant_id=order.tenant_id,
        order_id=order.id,
        points=-points,
        reason=REDEEMED,
    ))


async def award_points(db: AsyncSession, order: Order) -> int:
    """Credit points for a delivered order once. Caller commits."""
    existing = await db.execute(
        select(LoyaltyTransaction.id).where(
            LoyaltyTransaction.order_id == order.id,
            LoyaltyTransaction.reason == EARNED,
        )
    )
    if existing.first() is not None:
        return 0

    points = points_for_amount(order.total_amount)
    if points > 0:
        db.add(LoyaltyTransaction(
            user_id=order.user_id,
            tenant_id=order.tenant_id,
            order_id=order.id,
            points=points,
            reason=EARNED,
        ))
    return points


def refund_redemption(db: AsyncSession, order: Order) -> None:
    if order.points_redeemed:
        db.add(LoyaltyTransaction(
            user_id=order.user_id,
            tenant_id=order.tenant_id,
            order_id=order.id,
            points=order.points_redeemed,
            reason=REFUNDED,
        ))
