"""Tests for recording customer memberships."""

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.future import select

from fruitland.auth.security import hash_password
from fruitland.core.constants import Role
from fruitland.models.tenant import Tenant
from fruitland.models.user import User
from fruitland.models.user_tenant import UserTenant
from fruitland.utils.membership import ensure_membership


async def _setup(db, role=Role.CUSTOMER):
    tenant = Tenant(name="Orchard", slug="orchard")
    db.add(tenant)
    await db.flush()
    user = User(
        email="buyer@example.com",
        name="Buyer",
        hashed_password=hash_password("secret123"),
        role=role.value,
        tenant_id=tenant.id,
    )
    db.add(user)
    await db.commit()
    return tenant, user


async def _count(db, user_id, tenant_id):
    result = await db.execute(
        select(func.count(UserTenant.id)).where(
            UserTenant.user_id == user_id, UserTenant.tenant_id == tenant_id
        )
    )
    return result.scalar_one()


async def test_membership_is_idempotent(db):
    tenant, user = await _setup(db)

    await ensure_membership(db, user.id, tenant.id, Role.CUSTOMER)
    await ensure_membership(db, user.id, tenant.id, Role.CUSTOMER)

    assert await _count(db, user.id, tenant.id) == 1


async def test_non_customer_roles_are_a_no_op(db):
    tenant, user = await _setup(db, role=Role.ADMIN)

    for role in (Role.ADMIN, Role.DELIVERY_PARTNER, Role.SUPERADMIN):
        await ensure_membership(db, user.id, tenant.id, role)

    assert await _count(db, user.id, tenant.id) == 0


class _EmptyResult:
    def scalar_one_or_none(self):
        return None


class FailingSession:
    def __init__(self, execute_error=None, commit_error=None):
        self.execute_error = execute_error
        self.commit_error = commit_error
        self.rolled_back = False
        self.added = []

    async def execute(self, *args, **kwargs):
        if self.execute_error:
            raise self.execute_error
        return _EmptyResult()

    def add(self, obj):
        self.added.append(obj)

    async def commit(self):
        if self.commit_error:
            raise self.commit_error

    async def rollback(self):
        self.rolled_back = True


async def test_datastore_failure_is_swallowed():
    session = FailingSession(execute_error=OperationalError("SELECT", {}, Exception("down")))

    await ensure_membership(session, "u1", "t1", Role.CUSTOMER)

    assert session.rolled_back is True


async def test_concurrent_insert_counts_as_success():
    session = FailingSession(commit_error=IntegrityError("INSERT", {}, Exception("duplicate")))

    await ensure_membership(session, "u1", "t1", Role.CUSTOMER)

    assert session.rolled_back is True
    assert len(session.added) == 1
