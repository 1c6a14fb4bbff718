"""Tests for the role/tenant access rule."""

import pytest

from fruitland.auth.identity import Identity
from fruitland.core.constants import Role
from fruitland.core.errors import TenantAccessForbidden
from fruitland.utils.tenant import can_access_tenant, require_tenant_access


@pytest.mark.parametrize(
    "role, fixed, target, expected",
    [
        (Role.SUPERADMIN, None, "t1", True),
        (Role.SUPERADMIN, None, "t2", True),
        (Role.SUPERADMIN, None, None, True),
        (Role.ADMIN, "t1", "t1", True),
        (Role.ADMIN, "t1", "t2", False),
        (Role.CUSTOMER, "t1", "t1", True),
        (Role.CUSTOMER, "t1", "t2", False),
        (Role.DELIVERY_PARTNER, "t1", "t1", True),
        (Role.DELIVERY_PARTNER, "t1", "t2", False),
        (Role.ADMIN, None, None, False),
        (Role.CUSTOMER, None, "t1", False),
    ],
)
def test_access_truth_table(role, fixed, target, expected):
    assert can_access_tenant(role, fixed, target) is expected


def test_tenant_ids_compare_exactly():
    assert can_access_tenant(Role.ADMIN, "T1", "t1") is False
    assert can_access_tenant(Role.ADMIN, "t1", " t1") is False


def test_role_given_as_string():
    assert can_access_tenant("CUSTOMER", "t1", "t1") is True


def test_unknown_role_is_rejected():
    with pytest.raises(ValueError):
        can_access_tenant("OWNER", "t1", "t1")


def test_require_tenant_access_raises_forbidden():
    identity = Identity(id="u1", role=Role.ADMIN, fixed_tenant_id="t1")

    require_tenant_access(identity, "t1")
    with pytest.raises(TenantAccessForbidden):
        require_tenant_access(identity, "t2")
