import re
from datetime import datetime

from fastapi import status

from conftest import address_payload, login, make_product, make_tenant, make_user, make_warehouse, run
from fruitland.core.constants import Role
from fruitland.db import async_session
from fruitland.models.product import Product
from fruitland.models.user_tenant import UserTenant
from fruitland.models.warehouse import ProductStock
from sqlalchemy.future import select


def _register(client, slug="t1", email="buyer@example.com"):
    resp = client.post(
        "/api/auth/register",
        json={"tenant_slug": slug, "email": email, "name": "Buyer", "password": "secret123"},
    )
    assert resp.status_code == status.HTTP_201_CREATED, resp.text
    return resp.json()


def _stock_of(product_id):
    async def _load():
        async with async_session() as session:
            product = (await session.execute(select(Product).where(Product.id == product_id))).scalar_one()
            return product.stock
    return run(_load())


def _warehouse_stock(warehouse_id, product_id):
    async def _load():
        async with async_session() as session:
            row = (await session.execute(
                select(ProductStock).where(
                    ProductStock.warehouse_id == warehouse_id, ProductStock.product_id == product_id
                )
            )).scalar_one()
            return row.quantity
    return run(_load())


def _memberships(user_id):
    async def _load():
        async with async_session() as session:
            rows = await session.execute(select(UserTenant.tenant_id).where(UserTenant.user_id == user_id))
            return sorted(rows.scalars().all())
    return run(_load())


def _fill_cart(client, product_id, quantity=2, slug="t1"):
    resp = client.post("/api/cart", params={"tenantSlug": slug}, json={"product_id": product_id, "quantity": quantity})
    assert resp.status_code == status.HTTP_200_OK, resp.text
    return resp.json()


def _add_address(client, slug="t1", pincode="560001"):
    resp = client.post("/api/addresses", params={"tenantSlug": slug}, json=address_payload(pincode))
    assert resp.status_code == status.HTTP_201_CREATED, resp.text
    return resp.json()


def test_hinted_routes_require_a_tenant_hint(client, two_tenants):
    _register(client)

    resp = client.get("/api/cart")
    assert resp.status_code == status.HTTP_400_BAD_REQUEST

    assert client.get("/api/cart", params={"tenantSlug": "ghost"}).status_code == status.HTTP_404_NOT_FOUND


def test_inactive_tenant_is_rejected(client, two_tenants):
    t1, _ = two_tenants
    make_tenant("Closed", "closed", is_active=False)
    make_user("root@fruitland.com", Role.SUPERADMIN)
    login(client, "root@fruitland.com")

    resp = client.get("/api/cart", params={"tenantSlug": "closed"})
    assert resp.status_code == status.HTTP_403_FORBIDDEN
    assert resp.json()["detail"] == "Tenant is not active"


def test_customer_cannot_shop_in_another_tenant(client, two_tenants):
    _, t2 = two_tenants
    product = make_product(t2.id)
    user = _register(client, slug="t1")

    resp = client.post("/api/cart", params={"tenantSlug": "t2"}, json={"product_id": product.id, "quantity": 1})
    assert resp.status_code == status.HTTP_403_FORBIDDEN

    # Forbidden before any write: no membership in t2
    assert _memberships(user["id"]) == [user["tenant_id"]]


def test_cart_merges_lines_and_respects_stock(client, two_tenants):
    t1, _ = two_tenants
    product = make_product(t1.id, stock=3)
    _register(client)

    _fill_cart(client, product.id, quantity=2)
    cart = _fill_cart(client, product.id, quantity=1)
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 3
    assert float(cart["subtotal"]) == 300.0

    resp = client.post("/api/cart", params={"tenantSlug": "t1"}, json={"product_id": product.id, "quantity": 1})
    assert resp.status_code == status.HTTP_409_CONFLICT

    item_id = cart["items"][0]["id"]
    resp = client.delete(f"/api/cart/{item_id}", params={"tenantSlug": "t1"})
    assert resp.json()["items"] == []


def test_cart_rejects_product_from_other_tenant(client, two_tenants):
    _, t2 = two_tenants
    foreign = make_product(t2.id)
    _register(client)

    resp = client.post("/api/cart", params={"tenantSlug": "t1"}, json={"product_id": foreign.id, "quantity": 1})
    assert resp.status_code == status.HTTP_404_NOT_FOUND


def test_default_address_moves(client, two_tenants):
    _register(client)

    first = _add_address(client)
    second = _add_address(client, pincode="560002")

    listing = client.get("/api/addresses", params={"tenantSlug": "t1"}).json()
    assert [a["id"] for a in listing] == [second["id"], first["id"]]
    assert [a["is_default"] for a in listing] == [True, False]


def test_checkout_without_warehouses(client, two_tenants):
    t1, _ = two_tenants
    product = make_product(t1.id, price="50.00", stock=5)
    _register(client)
    address = _add_address(client)
    _fill_cart(client, product.id, quantity=2)

    resp = client.post("/api/orders", params={"tenantSlug": "t1"}, json={"address_id": address["id"]})
    assert resp.status_code == status.HTTP_201_CREATED, resp.text
    order = resp.json()

    assert re.fullmatch(r"ORD-\d+-[A-Z0-9]{9}", order["order_number"])
    assert order["status"] == "PENDING"
    assert order["payment_status"] == "PENDING"
    assert order["warehouse_id"] is None
    assert order["tenant_id"] == t1.id
    assert float(order["total_amount"]) == 100.0
    assert order["items"][0]["product_name"] == "Apple"

    assert _stock_of(product.id) == 3
    assert client.get("/api/cart", params={"tenantSlug": "t1"}).json()["items"] == []


def test_checkout_with_empty_cart(client, two_tenants):
    _register(client)
    address = _add_address(client)

    resp = client.post("/api/orders", params={"tenantSlug": "t1"}, json={"address_id": address["id"]})
    assert resp.status_code == status.HTTP_400_BAD_REQUEST
    assert resp.json()["detail"] == "Cart is empty"


def test_checkout_prefers_warehouse_matching_pincode(client, two_tenants):
    t1, _ = two_tenants
    product = make_product(t1.id, stock=10)
    older = make_warehouse(t1.id, "North", pincode="110001", stocks={product.id: 10},
                           created_at=datetime(2024, 1, 1))
    local = make_warehouse(t1.id, "South", pincode="560001", stocks={product.id: 10},
                           created_at=datetime(2024, 6, 1))
    _register(client)
    address = _add_address(client, pincode="560001")
    _fill_cart(client, product.id, quantity=4)

    order = client.post("/api/orders", params={"tenantSlug": "t1"}, json={"address_id": address["id"]}).json()

    assert order["warehouse_id"] == local.id
    assert _warehouse_stock(local.id, product.id) == 6
    assert _warehouse_stock(older.id, product.id) == 10


def test_checkout_falls_back_to_warehouse_with_stock(client, two_tenants):
    t1, _ = two_tenants
    product = make_product(t1.id, stock=10)
    make_warehouse(t1.id, "Local", pincode="560001", stocks={product.id: 1}, created_at=datetime(2024, 6, 1))
    backup = make_warehouse(t1.id, "Backup", pincode="110001", stocks={product.id: 8},
                            created_at=datetime(2024, 1, 1))
    _register(client)
    address = _add_address(client, pincode="560001")
    _fill_cart(client, product.id, quantity=3)

    order = client.post("/api/orders", params={"tenantSlug": "t1"}, json={"address_id": address["id"]}).json()

    assert order["warehouse_id"] == backup.id


def test_checkout_rejected_when_no_warehouse_can_fulfil(client, two_tenants):
    t1, _ = two_tenants
    product = make_product(t1.id, stock=10)
    make_warehouse(t1.id, "Tiny", stocks={product.id: 1})
    _register(client)
    address = _add_address(client)
    _fill_cart(client, product.id, quantity=2)

    resp = client.post("/api/orders", params={"tenantSlug": "t1"}, json={"address_id": address["id"]})

    assert resp.status_code == status.HTTP_409_CONFLICT
    assert _stock_of(product.id) == 10
    assert len(client.get("/api/cart", params={"tenantSlug": "t1"}).json()["items"]) == 1


def test_orders_listing_is_scoped(client, two_tenants):
    t1, _ = two_tenants
    product = make_product(t1.id, stock=10)
    make_user("admin@t1.com", Role.ADMIN, t1.id)

    _register(client, email="a@example.com")
    address = _add_address(client)
    _fill_cart(client, product.id, quantity=1)
    client.post("/api/orders", params={"tenantSlug": "t1"}, json={"address_id": address["id"]})

    _register(client, email="b@example.com")
    assert client.get("/api/orders").json() == []

    login(client, "admin@t1.com")
    orders = client.get("/api/orders").json()
    assert len(orders) == 1
    assert client.get("/api/orders", params={"status": "DELIVERED"}).json() == []


def test_membership_recorded_on_first_hinted_request(client, two_tenants):
    t1, _ = two_tenants
    make_user("buyer@t1.com", Role.CUSTOMER, t1.id)
    user = login(client, "buyer@t1.com")
    assert _memberships(user["id"]) == []

    client.get("/api/cart", params={"tenantSlug": "t1"})
    client.get("/api/cart", headers={"X-Tenant-Slug": "t1"})

    assert _memberships(user["id"]) == [t1.id]
