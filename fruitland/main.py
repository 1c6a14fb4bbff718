### fruitland/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from sqlalchemy.orm import configure_mappers

import fruitland.models  # registers all models via models/__init__.py
from fruitland.api import (
    address_routes,
    auth_routes,
    cart_routes,
    loyalty_routes,
    order_routes,
    storefront_routes,
    subscription_routes,
    superadmin_routes,
    tenant_routes,
)
from fruitland.api.admin import config_routes as admin_config_routes
from fruitland.api.admin import order_routes as admin_order_routes
from fruitland.api.admin import package_routes as admin_package_routes
from fruitland.api.admin import product_routes as admin_product_routes
from fruitland.api.admin import user_routes as admin_user_routes
from fruitland.api.admin import warehouse_routes as admin_warehouse_routes
from fruitland.api.delivery import driver_routes
from fruitland.core.config import settings
from fruitland.core.errors import OrderError, TenancyError, order_error_handler, tenancy_error_handler
from fruitland.crud.user import ensure_superadmin
from fruitland.db import async_session, create_db_and_tables
from fruitland.middleware.tenant_middleware import TenantMiddleware

configure_mappers()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="Fruitland API", version="1.0.0")

# Tenant hint parsing; added first so it runs innermost, after SessionMiddleware
app.add_middleware(TenantMiddleware)

# Cookie session carries user_id / role / tenant_id / active_tenant_id
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(TenancyError, tenancy_error_handler)
app.add_exception_handler(OrderError, order_error_handler)


@app.on_event("startup")
async def on_startup():
    log.info("Starting DB setup...")
    await create_db_and_tables()

    if settings.SUPERADMIN_EMAIL and settings.SUPERADMIN_PASSWORD:
        async with async_session() as db:
            await ensure_superadmin(db, settings.SUPERADMIN_EMAIL, settings.SUPERADMIN_PASSWORD)
    log.info("DB schema ready.")


@app.get("/health")
async def health():
    return {"status": "ok"}


# Auth & tenant console
app.include_router(auth_routes.router, prefix="/api/auth", tags=["auth"])
app.include_router(tenant_routes.router, prefix="/api", tags=["tenants"])
app.include_router(superadmin_routes.router, prefix="/api/superadmin", tags=["superadmin"])

# Public storefront
app.include_router(storefront_routes.router, prefix="/api/storefront", tags=["storefront"])

# Customer flows
app.include_router(cart_routes.router, prefix="/api/cart", tags=["cart"])
app.include_router(address_routes.router, prefix="/api/addresses", tags=["addresses"])
app.include_router(order_routes.router, prefix="/api/orders", tags=["orders"])
app.include_router(subscription_routes.router, prefix="/api/subscriptions", tags=["subscriptions"])
app.include_router(loyalty_routes.router, prefix="/api/loyalty", tags=["loyalty"])

# Store admin
app.include_router(admin_product_routes.router, prefix="/api/admin/products", tags=["admin"])
app.include_router(admin_package_routes.router, prefix="/api/admin/subscription-packages", tags=["admin"])
app.include_router(admin_config_routes.router, prefix="/api/admin/config", tags=["admin"])
app.include_router(admin_order_routes.router, prefix="/api/admin/orders", tags=["admin"])
app.include_router(admin_warehouse_routes.router, prefix="/api/admin/warehouses", tags=["admin"])
app.include_router(admin_user_routes.router, prefix="/api/admin", tags=["admin"])

# Delivery partners
app.include_router(driver_routes.router, prefix="/api/delivery", tags=["delivery"])
