from datetime import date, timedelta

from fastapi import status

from conftest import address_payload, login, make_user
from fruitland.core.constants import DeliveryFrequency, Role
from fruitland.crud.subscription import next_delivery_after


def _setup(client, tenant):
    make_user("admin@t1.com", Role.ADMIN, tenant.id)
    make_user("buyer@t1.com", Role.CUSTOMER, tenant.id)

    login(client, "admin@t1.com")
    package = client.post("/api/admin/subscription-packages", json={
        "name": "Weekly Box", "frequency": "WEEKLY", "price": "499.00",
    }).json()
    client.post("/api/admin/subscription-packages", json={
        "name": "Retired Box", "price": "99.00", "is_active": False,
    })

    login(client, "buyer@t1.com")
    address = client.post("/api/addresses", params={"tenantSlug": "t1"}, json=address_payload()).json()
    return package, address


def test_storefront_shows_active_packages(client, two_tenants):
    t1, _ = two_tenants
    _setup(client, t1)

    packages = client.get("/api/storefront/t1/subscription-packages").json()
    assert [p["name"] for p in packages] == ["Weekly Box"]


def test_subscription_lifecycle(client, two_tenants):
    t1, _ = two_tenants
    package, address = _setup(client, t1)
    params = {"tenantSlug": "t1"}

    resp = client.post("/api/subscriptions", params=params, json={
        "package_id": package["id"], "address_id": address["id"],
    })
    assert resp.status_code == status.HTTP_201_CREATED, resp.text
    sub = resp.json()
    assert sub["status"] == "ACTIVE"
    assert sub["next_delivery_date"] == date.today().isoformat()
    assert sub["package"]["name"] == "Weekly Box"

    url = f"/api/subscriptions/{sub['id']}"
    resp = client.patch(url, params=params, json={"action": "resume"})
    assert resp.status_code == status.HTTP_400_BAD_REQUEST

    paused = client.patch(url, params=params, json={"action": "pause"}).json()
    assert paused["status"] == "PAUSED"

    resumed = client.patch(url, params=params, json={"action": "resume"}).json()
    assert resumed["status"] == "ACTIVE"

    cancelled = client.patch(url, params=params, json={"action": "cancel"}).json()
    assert cancelled["status"] == "CANCELLED"
    assert cancelled["cancelled_at"] is not None

    resp = client.patch(url, params=params, json={"action": "pause"})
    assert resp.status_code == status.HTTP_400_BAD_REQUEST

    assert len(client.get("/api/subscriptions", params=params).json()) == 1


def test_subscription_requires_hint(client, two_tenants):
    t1, _ = two_tenants
    package, address = _setup(client, t1)

    resp = client.post("/api/subscriptions", json={"package_id": package["id"], "address_id": address["id"]})
    assert resp.status_code == status.HTTP_400_BAD_REQUEST


def test_next_delivery_after():
    start = date(2024, 1, 31)

    assert next_delivery_after(start, DeliveryFrequency.DAILY) == start + timedelta(days=1)
    assert next_delivery_after(start, DeliveryFrequency.WEEKLY) == date(2024, 2, 7)
    assert next_delivery_after(start, DeliveryFrequency.BIWEEKLY) == date(2024, 2, 14)
    assert next_delivery_after(start, DeliveryFrequency.MONTHLY) == date(2024, 2, 29)
