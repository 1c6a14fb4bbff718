"""Tests for building the caller identity from session data."""

import pytest

from fruitland.auth.identity import identity_from_session, store_identity
from fruitland.core.constants import Role
from fruitland.core.errors import Unauthenticated


def test_customer_session():
    identity = identity_from_session({"user_id": "u1", "role": "CUSTOMER", "tenant_id": "t1"})

    assert identity.id == "u1"
    assert identity.role is Role.CUSTOMER
    assert identity.fixed_tenant_id == "t1"
    assert identity.active_tenant_id is None


def test_non_super_role_ignores_stored_active_tenant():
    identity = identity_from_session(
        {"user_id": "u1", "role": "ADMIN", "tenant_id": "t1", "active_tenant_id": "t2"}
    )

    assert identity.fixed_tenant_id == "t1"
    assert identity.active_tenant_id is None


def test_superadmin_session_carries_active_selection():
    identity = identity_from_session(
        {"user_id": "root", "role": "SUPERADMIN", "tenant_id": None, "active_tenant_id": "t2"}
    )

    assert identity.is_superadmin
    assert identity.fixed_tenant_id is None
    assert identity.active_tenant_id == "t2"


@pytest.mark.parametrize(
    "session",
    [
        {},
        {"user_id": "u1"},
        {"role": "ADMIN", "tenant_id": "t1"},
        {"user_id": "u1", "role": "OWNER", "tenant_id": "t1"},
        {"user_id": "u1", "role": "ADMIN"},
        {"user_id": "u1", "role": "DELIVERY_PARTNER", "tenant_id": ""},
        {"user_id": "root", "role": "SUPERADMIN", "tenant_id": "t1"},
    ],
)
def test_malformed_sessions_are_unauthenticated(session):
    with pytest.raises(Unauthenticated):
        identity_from_session(session)


def test_store_identity_replaces_previous_session():
    session = {"user_id": "old", "active_tenant_id": "t9"}

    store_identity(session, "u1", Role.ADMIN, "t1")

    assert session == {"user_id": "u1", "role": "ADMIN", "tenant_id": "t1"}
