"""
Shared fixtures and factories for the Fruitland tests.

The app runs against a throwaway SQLite file; every test starts from an empty
schema and an empty tenant cache.
"""

import asyncio
import os
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
import redis

TESTS_DIR = Path(__file__).resolve().parent
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TESTS_DIR / 'test_fruitland.db'}"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ.pop("SUPERADMIN_EMAIL", None)
os.environ.pop("SUPERADMIN_PASSWORD", None)
os.environ.pop("REDIS_URL", None)

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402

from fruitland.auth.security import hash_password  # noqa: E402
from fruitland.core.constants import Role  # noqa: E402
from fruitland.db import async_session  # noqa: E402
from fruitland.main import app  # noqa: E402
from fruitland.models.base import Base  # noqa: E402
from fruitland.models.product import Product  # noqa: E402
from fruitland.models.tenant import Tenant  # noqa: E402
from fruitland.models.user import User  # noqa: E402
from fruitland.models.user_tenant import UserTenant  # noqa: E402
from fruitland.models.warehouse import ProductStock, Warehouse  # noqa: E402
from fruitland.utils.tenant_directory import tenant_directory  # noqa: E402

PASSWORD = "secret123"

# Schema resets go through a plain sqlite3 engine on the same file
sync_engine = create_engine(f"sqlite:///{TESTS_DIR / 'test_fruitland.db'}")


def run(coro):
    return asyncio.run(coro)


async def _save(*objects):
    async with async_session() as session:
        for obj in objects:
            session.add(obj)
            await session.flush()
        await session.commit()
        for obj in objects:
            await session.refresh(obj)
    return objects[0] if len(objects) == 1 else objects


# -----------------------
# Factories (sync, for API tests)
# -----------------------

def make_tenant(name, slug, is_active=True, created_at=None):
    tenant = Tenant(name=name, slug=slug, is_active=is_active)
    if created_at is not None:
        tenant.created_at = created_at
    return run(_save(tenant))


def make_user(email, role, tenant_id=None, password=PASSWORD, with_membership=True):
    role = Role(role)
    user = User(
        email=email,
        name=email.split("@")[0],
        hashed_password=hash_password(password),
        role=role.value,
        tenant_id=tenant_id,
    )
    user = run(_save(user))
    if with_membership and tenant_id is not None and role is not Role.CUSTOMER:
        run(_save(UserTenant(user_id=user.id, tenant_id=tenant_id, role=role.value)))
    return user


def make_product(tenant_id, name="Apple", price="100.00", stock=10, category="fresh", is_available=True):
    product = Product(
        tenant_id=tenant_id,
        name=name,
        description=f"{name} description",
        price=Decimal(price),
        image="",
        category=category,
        stock=stock,
        is_available=is_available,
    )
    return run(_save(product))


def make_warehouse(tenant_id, name, pincode=None, stocks=None, created_at=None):
    warehouse = Warehouse(tenant_id=tenant_id, name=name, pincode=pincode)
    if created_at is not None:
        warehouse.created_at = created_at
    warehouse = run(_save(warehouse))
    for product_id, quantity in (stocks or {}).items():
        run(_save(ProductStock(warehouse_id=warehouse.id, product_id=product_id, quantity=quantity)))
    return warehouse


def login(client, email, password=PASSWORD, tenant_slug=None):
    payload = {"email": email, "password": password}
    if tenant_slug:
        payload["tenant_slug"] = tenant_slug
    resp = client.post("/api/auth/login", json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()


def address_payload(pincode="560001", is_default=True):
    return {
        "name": "Home",
        "phone": "9999999999",
        "address_line1": "1 Orchard Road",
        "city": "Bengaluru",
        "state": "KA",
        "pincode": pincode,
        "is_default": is_default,
    }


class FakeRedis:
    """In-process stand-in answering like redis.Redis(decode_responses=True)."""

    def __init__(self, fail=False):
        self.data = {}
        self.expiry_ms = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")

    def get(self, key):
        self._check()
        return self.data.get(key)

    def set(self, key, value, px=None):
        self._check()
        self.data[key] = value
        self.expiry_ms[key] = px

    def delete(self, *keys):
        self._check()
        for key in keys:
            self.data.pop(key, None)

    def scan_iter(self, match=None):
        self._check()
        prefix = match.rstrip("*")
        return [k for k in list(self.data) if k.startswith(prefix)]


# -----------------------
# Fixtures
# -----------------------

@pytest.fixture(autouse=True)
def prepare_database():
    Base.metadata.drop_all(bind=sync_engine)
    Base.metadata.create_all(bind=sync_engine)
    tenant_directory.clear()
    yield
    tenant_directory.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
async def db():
    async with async_session() as session:
        yield session


@pytest.fixture
def two_tenants():
    """Two active tenants created one minute apart (t1 is the earliest)."""
    t1 = make_tenant("Orchard One", "t1", created_at=datetime(2024, 1, 1, 9, 0))
    t2 = make_tenant("Orchard Two", "t2", created_at=datetime(2024, 1, 1, 9, 1))
    return t1, t2
