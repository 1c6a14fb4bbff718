from fastapi import HTTPException
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.models.address import Address
from fruitland.schemas.address import AddressCreate


async def list_addresses(db: AsyncSession, user_id: str, tenant_id: str):
    result = await db.execute(
        select(Address)
        .where(Address.user_id == user_id, Address.tenant_id == tenant_id)
        .order_by(Address.is_default.desc(), Address.created_at.desc())
    )
    return result.scalars().all()


async def get_address(db: AsyncSession, address_id: str, user_id: str, tenant_id: str) -> Address:
    result = await db.execute(
        select(Address).where(
            Address.id == address_id,
            Address.user_id == user_id,
            Address.tenant_id == tenant_id,
        )
    )
    address = result.scalar_one_or_none()
    if not address:
        raise HTTPException(status_code=404, detail="Address not found")
    return address


async def create_address(db: AsyncSession, data: AddressCreate, user_id: str, tenant_id: str) -> Address:
    if data.is_default:
        await db.execute(
            update(Address)
            .where(Address.user_id == user_id, Address.tenant_id == tenant_id)
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )

    address = Address(user_id=user_id, tenant_id=tenant_id, **data.model_dump())
    db.add(address)
    await db.commit()
    await db.refresh(address)
    return address


async def delete_address(db: AsyncSession, address_id: str, user_id: str, tenant_id: str) -> None:
    address = await get_address(db, address_id, user_id, tenant_id)
    await db.delete(address)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="Address is used by an order or subscription")
