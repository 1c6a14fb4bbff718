from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_admin
from fruitland.auth.identity import Identity
from fruitland.crud import product as product_crud
from fruitland.db import get_db
from fruitland.schemas.product import ProductCreate, ProductRead, ProductUpdate
from fruitland.utils.tenant import get_tenant_scope, require_tenant_access

router = APIRouter()


@router.get("", response_model=List[ProductRead])
async def list_products(
    category: Optional[str] = None,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.list_products(db, tenant_id, category=category)


@router.post("", response_model=ProductRead, status_code=201)
async def create_product(
    payload: ProductCreate,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.create_product(db, payload, tenant_id)


@router.patch("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    product = await product_crud.get_product(db, product_id)
    # The product's own tenant decides, not the resolved one
    require_tenant_access(identity, product.tenant_id)
    return await product_crud.update_product(db, product, payload)


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    product = await product_crud.get_product(db, product_id)
    require_tenant_access(identity, product.tenant_id)
    await product_crud.delete_product(db, product)
    return {"success": True}
