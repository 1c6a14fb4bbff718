from fastapi import status

from conftest import login, make_product, make_tenant, make_user
from fruitland.core.constants import Role


def test_public_tenant_lookup(client, two_tenants):
    make_tenant("Closed Shop", "closed", is_active=False)

    ok = client.get("/api/tenants/t1")
    assert ok.status_code == status.HTTP_200_OK
    assert ok.json()["name"] == "Orchard One"

    assert client.get("/api/tenants/ghost").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/tenants/closed").status_code == status.HTTP_403_FORBIDDEN


def test_unauthenticated_requests_are_rejected(client, two_tenants):
    resp = client.get("/api/orders")
    assert resp.status_code == status.HTTP_401_UNAUTHORIZED
    assert resp.json()["detail"] == "Not authenticated"


def test_admin_is_pinned_to_own_tenant(client, two_tenants):
    t1, t2 = two_tenants
    make_product(t1.id, name="T1 Apple")
    make_product(t2.id, name="T2 Apple")
    make_user("admin@t1.com", Role.ADMIN, t1.id)
    login(client, "admin@t1.com")

    for params, headers in [({}, {}), ({"tenantSlug": "t2"}, {}), ({}, {"X-Tenant-Id": t2.id})]:
        resp = client.get("/api/admin/products", params=params, headers=headers)
        assert resp.status_code == status.HTTP_200_OK
        assert [p["name"] for p in resp.json()] == ["T1 Apple"]


def test_admin_cannot_touch_other_tenant_product(client, two_tenants):
    t1, t2 = two_tenants
    other = make_product(t2.id, name="T2 Apple")
    make_user("admin@t1.com", Role.ADMIN, t1.id)
    login(client, "admin@t1.com")

    resp = client.patch(f"/api/admin/products/{other.id}", json={"price": "1.00"})
    assert resp.status_code == status.HTTP_403_FORBIDDEN

    resp = client.delete(f"/api/admin/products/{other.id}")
    assert resp.status_code == status.HTTP_403_FORBIDDEN


def test_customer_cannot_use_admin_routes(client, two_tenants):
    t1, _ = two_tenants
    make_user("buyer@t1.com", Role.CUSTOMER, t1.id)
    login(client, "buyer@t1.com")

    assert client.get("/api/admin/products").status_code == status.HTTP_403_FORBIDDEN


def test_superadmin_scoping(client, two_tenants):
    t1, t2 = two_tenants
    make_product(t1.id, name="T1 Apple")
    make_product(t2.id, name="T2 Apple")
    make_user("root@fruitland.com", Role.SUPERADMIN)
    login(client, "root@fruitland.com")

    # No hint, no selection: earliest tenant
    resp = client.get("/api/admin/products")
    assert [p["name"] for p in resp.json()] == ["T1 Apple"]

    # Explicit hint wins
    resp = client.get("/api/admin/products", params={"tenantSlug": "t2"})
    assert [p["name"] for p in resp.json()] == ["T2 Apple"]

    # Unknown hint
    resp = client.get("/api/admin/products", params={"tenantSlug": "ghost"})
    assert resp.status_code == status.HTTP_404_NOT_FOUND

    # Stored selection
    resp = client.post("/api/tenant/set-active", json={"tenant_id": t2.id})
    assert resp.status_code == status.HTTP_200_OK
    resp = client.get("/api/admin/products")
    assert [p["name"] for p in resp.json()] == ["T2 Apple"]
    assert client.get("/api/auth/me").json()["active_tenant_id"] == t2.id

    # Clearing the selection goes back to the default
    client.post("/api/tenant/set-active", json={"tenant_id": None})
    resp = client.get("/api/admin/products")
    assert [p["name"] for p in resp.json()] == ["T1 Apple"]


def test_superadmin_without_tenants_must_create_one(client):
    make_user("root@fruitland.com", Role.SUPERADMIN)
    login(client, "root@fruitland.com")

    resp = client.get("/api/admin/products")
    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.json()["detail"] == "Please select or create a tenant first"


def test_set_active_requires_superadmin_and_known_tenant(client, two_tenants):
    t1, t2 = two_tenants
    make_user("admin@t1.com", Role.ADMIN, t1.id)
    make_user("root@fruitland.com", Role.SUPERADMIN)

    login(client, "admin@t1.com")
    resp = client.post("/api/tenant/set-active", json={"tenant_id": t2.id})
    assert resp.status_code == status.HTTP_403_FORBIDDEN

    login(client, "root@fruitland.com")
    resp = client.post("/api/tenant/set-active", json={"tenant_id": "ghost"})
    assert resp.status_code == status.HTTP_404_NOT_FOUND


def test_superadmin_console(client, two_tenants):
    t1, _ = two_tenants
    make_user("buyer@t1.com", Role.CUSTOMER, t1.id)
    make_product(t1.id)
    make_user("root@fruitland.com", Role.SUPERADMIN)
    login(client, "root@fruitland.com")

    created = client.post("/api/superadmin/tenants", json={"name": "Berry Barn", "slug": "berry"})
    assert created.status_code == status.HTTP_201_CREATED

    dup = client.post("/api/superadmin/tenants", json={"name": "Copy", "slug": "berry"})
    assert dup.status_code == status.HTTP_400_BAD_REQUEST

    listing = client.get("/api/superadmin/tenants").json()
    assert [t["slug"] for t in listing] == ["berry", "t2", "t1"]
    t1_row = next(t for t in listing if t["slug"] == "t1")
    assert t1_row["user_count"] == 1
    assert t1_row["product_count"] == 1

    assert [t["slug"] for t in client.get("/api/tenants").json()] == ["berry", "t1", "t2"]


def test_tenant_update_invalidates_cached_lookups(client, two_tenants):
    t1, _ = two_tenants
    make_user("root@fruitland.com", Role.SUPERADMIN)
    login(client, "root@fruitland.com")

    assert client.get("/api/tenants/t1").status_code == status.HTTP_200_OK

    resp = client.patch(f"/api/superadmin/tenants/{t1.id}", json={"slug": "orchard-one"})
    assert resp.status_code == status.HTTP_200_OK

    assert client.get("/api/tenants/t1").status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/tenants/orchard-one").status_code == status.HTTP_200_OK

    client.patch(f"/api/superadmin/tenants/{t1.id}", json={"is_active": False})
    assert client.get("/api/tenants/orchard-one").status_code == status.HTTP_403_FORBIDDEN


def test_non_superadmin_cannot_manage_tenants(client, two_tenants):
    t1, _ = two_tenants
    make_user("admin@t1.com", Role.ADMIN, t1.id)
    login(client, "admin@t1.com")

    assert client.get("/api/superadmin/tenants").status_code == status.HTTP_403_FORBIDDEN
    assert client.post("/api/superadmin/tenants", json={"name": "X"}).status_code == status.HTTP_403_FORBIDDEN


def test_tenant_update_rejects_nulls_for_required_fields(client, two_tenants):
    t1, _ = two_tenants
    make_user("root@fruitland.com", Role.SUPERADMIN)
    login(client, "root@fruitland.com")

    for payload in ({"is_active": None}, {"name": None}):
        resp = client.patch(f"/api/superadmin/tenants/{t1.id}", json=payload)
        assert resp.status_code == 422

    # Clearing an optional field is allowed
    resp = client.patch(f"/api/superadmin/tenants/{t1.id}", json={"description": None})
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["is_active"] is True


def test_blank_slugs_are_stored_as_missing(client, two_tenants):
    make_user("root@fruitland.com", Role.SUPERADMIN)
    login(client, "root@fruitland.com")

    first = client.post("/api/superadmin/tenants", json={"name": "No Slug One", "slug": ""})
    second = client.post("/api/superadmin/tenants", json={"name": "No Slug Two", "slug": "  "})
    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_201_CREATED
    assert first.json()["slug"] is None
    assert second.json()["slug"] is None

    resp = client.patch(f"/api/superadmin/tenants/{first.json()['id']}", json={"slug": ""})
    assert resp.status_code == status.HTTP_200_OK
    assert resp.json()["slug"] is None
