# scripts/seed.py

import argparse
import asyncio
import logging

from sqlalchemy.future import select

from fruitland.auth.security import hash_password
from fruitland.core.config import settings
from fruitland.core.constants import Role
from fruitland.crud.user import ensure_superadmin
from fruitland.db import async_session, create_db_and_tables
from fruitland.models.product import Product
from fruitland.models.tenant import Tenant
from fruitland.models.user import User
from fruitland.models.user_tenant import UserTenant

log = logging.getLogger("seed")

USERS_TO_SEED = [
    {"email": "admin@fruitland.com", "name": "Admin User", "password": "admin123", "role": Role.ADMIN},
    {"email": "customer@example.com", "name": "Test Customer", "password": "customer123", "role": Role.CUSTOMER},
]

PRODUCTS_TO_SEED = [
    {"name": "Fresh Apples", "description": "Crisp and juicy red apples", "price": 150,
     "category": "fresh", "stock": 100, "is_seasonal": False},
    {"name": "Organic Bananas", "description": "Sweet organic bananas from local farms", "price": 60,
     "category": "organic", "stock": 150, "is_seasonal": False},
    {"name": "Seasonal Strawberries", "description": "Fresh strawberries, limited availability", "price": 250,
     "category": "seasonal", "stock": 50, "is_seasonal": True},
    {"name": "Exotic Mango", "description": "Premium Alphonso mangoes", "price": 400,
     "category": "exotic", "stock": 40, "is_seasonal": True},
]


async def seed(superadmin_email: str, superadmin_password: str):
    await create_db_and_tables()

    async with async_session() as session:
        # Step 1: default tenant
        result = await session.execute(select(Tenant).where(Tenant.slug == settings.DEFAULT_TENANT_SLUG))
        tenant = result.scalar_one_or_none()
        if not tenant:
            tenant = Tenant(name="Fruitland", slug=settings.DEFAULT_TENANT_SLUG)
            session.add(tenant)
            await session.commit()
            log.info("Created tenant: %s", tenant.slug)

        # Step 2: superadmin (no tenant)
        await ensure_superadmin(session, superadmin_email, superadmin_password)

        # Step 3: tenant users with their memberships
        for user_data in USERS_TO_SEED:
            result = await session.execute(
                select(User).where(User.email == user_data["email"], User.tenant_id == tenant.id)
            )
            if result.scalar_one_or_none():
                log.info("User %s already exists. Skipping.", user_data["email"])
                continue
            user = User(
                email=user_data["email"],
                name=user_data["name"],
                hashed_password=hash_password(user_data["password"]),
                role=user_data["role"].value,
                tenant_id=tenant.id,
            )
            session.add(user)
            await session.flush()
            session.add(UserTenant(user_id=user.id, tenant_id=tenant.id, role=user.role))
            log.info("Created: %s (%s) in %s", user.email, user.role, tenant.slug)

        # Step 4: demo catalogue
        result = await session.execute(select(Product.id).where(Product.tenant_id == tenant.id).limit(1))
        if result.first() is None:
            for data in PRODUCTS_TO_SEED:
                session.add(Product(tenant_id=tenant.id, image="", **data))
            log.info("Created %d demo products", len(PRODUCTS_TO_SEED))

        await session.commit()
        log.info("Done seeding.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    parser = argparse.ArgumentParser(description="Seed the Fruitland database")
    parser.add_argument("--superadmin-email", default=settings.SUPERADMIN_EMAIL or "superadmin@fruitland.com")
    parser.add_argument("--superadmin-password", default=settings.SUPERADMIN_PASSWORD or "superadmin123")
    args = parser.parse_args()

    asyncio.run(seed(args.superadmin_email, args.superadmin_password))

# Usage: python -m scripts.seed
