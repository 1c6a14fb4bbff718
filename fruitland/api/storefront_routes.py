from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.crud import product as product_crud
from fruitland.crud import store_config as config_crud
from fruitland.crud import subscription as subscription_crud
from fruitland.db import get_db
from fruitland.schemas.product import ProductRead
from fruitland.schemas.store_config import StorefrontConfig
from fruitland.schemas.subscription import PackageRead
from fruitland.utils.tenant import get_storefront_tenant
from fruitland.utils.tenant_directory import TenantRecord

router = APIRouter()


@router.get("/{tenant_slug}/products", response_model=List[ProductRead])
async def storefront_products(
    category: Optional[str] = None,
    available: Optional[bool] = None,
    tenant: TenantRecord = Depends(get_storefront_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.list_products(db, tenant.id, category=category, available=available)


@router.get("/{tenant_slug}/products/{product_id}", response_model=ProductRead)
async def storefront_product(
    product_id: str,
    tenant: TenantRecord = Depends(get_storefront_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await product_crud.get_product(db, product_id, tenant.id)


@router.get("/{tenant_slug}/config", response_model=StorefrontConfig)
async def storefront_config(
    tenant: TenantRecord = Depends(get_storefront_tenant),
    db: AsyncSession = Depends(get_db),
):
    config = await config_crud.get_storefront_config(db, tenant.id)
    return StorefrontConfig(
        tenant_id=tenant.id,
        tenant_name=tenant.name,
        tenant_slug=tenant.slug,
        logo=tenant.logo,
        **config,
    )


@router.get("/{tenant_slug}/subscription-packages", response_model=List[PackageRead])
async def storefront_packages(
    tenant: TenantRecord = Depends(get_storefront_tenant),
    db: AsyncSession = Depends(get_db),
):
    return await subscription_crud.list_packages(db, tenant.id, active_only=True)
