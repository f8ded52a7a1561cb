# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from app.api import create_app
from app.data.backend import SqlBackend
from app.data.database import make_engine
from app.utils import settings

NEW_PRODUCT = {
    "name": "Onion Rings",
    "description": "Crispy battered onion rings",
    "price": 8.5,
    "category": "Appetizers",
}


def order_payload(**overrides):
    data = {
        "customerName": "Alice Brown",
        "customerEmail": "alice@example.com",
        "customerPhone": "+1-555-0199",
        "address": "9 Elm St",
        "items": [
            {"id": 1, "name": "Classic Beef Burger", "price": 12.99, "quantity": 1},
            {"id": 7, "name": "Chocolate Brownie", "price": 7.99, "quantity": 2},
        ],
        "total": 28.97,
    }
    data.update(overrides)
    return data


# ---------- health / errors ----------

def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["storage"] == "json"
    assert resp.headers["X-Request-ID"]


def test_unknown_route(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.json()["success"] is False
    assert resp.json()["message"] == "Route not found"


def test_storage_failure_hides_details_in_production(client, tmp_path, monkeypatch):
    (tmp_path / "data" / "products.json").write_text("{not json", encoding="utf-8")

    resp = client.get("/api/products")
    assert resp.status_code == 500
    assert "error" in resp.json()

    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    resp = client.get("/api/products")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Error reading products.json"}


# ---------- products ----------

def test_list_seeded_products(client):
    resp = client.get("/api/products")

    assert resp.status_code == 200
    products = resp.json()["data"]
    assert len(products) == 10
    assert products[0]["category"] == "Appetizers"
    assert [p["category"] for p in products] == sorted(p["category"] for p in products)


def test_filter_products(client):
    pizza = client.get("/api/products", params={"category": "Pizza"}).json()["data"]
    everything = client.get("/api/products", params={"category": "All"}).json()["data"]
    chicken = client.get("/api/products", params={"search": "CHICKEN"}).json()["data"]

    assert [p["name"] for p in pizza] == ["Margherita Pizza", "Pepperoni Pizza"]
    assert len(everything) == 10
    assert [p["name"] for p in chicken] == ["Chicken Wings (8pcs)", "Grilled Chicken Salad"]


def test_get_product(client):
    resp = client.get("/api/products/1")

    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Classic Beef Burger"
    assert resp.json()["data"]["price"] == 12.99


def test_get_unknown_product(client):
    resp = client.get("/api/products/999")

    assert resp.status_code == 404
    assert resp.json()["message"] == "Product not found"


def test_categories(client):
    resp = client.get("/api/categories")

    assert resp.json()["data"] == [
        "Appetizers", "Asian", "BBQ", "Burgers", "Desserts", "Mexican", "Pizza", "Salads",
    ]


# ---------- admin products ----------

def test_admin_requires_token(client):
    resp = client.post("/api/admin/products", json=NEW_PRODUCT)

    assert resp.status_code == 401
    assert resp.json()["message"] == "Authentication required"


def test_admin_rejects_bad_token(client):
    resp = client.get("/api/admin/analytics", headers={"Authorization": "Bearer not-a-token"})

    assert resp.status_code == 401


def test_admin_open_when_auth_disabled(client, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_AUTH_ENABLED", False)

    resp = client.post("/api/admin/products", json=NEW_PRODUCT)

    assert resp.status_code == 201


def test_create_product(client, admin_headers):
    resp = client.post("/api/admin/products", json=NEW_PRODUCT, headers=admin_headers)

    assert resp.status_code == 201
    product = resp.json()["data"]
    assert product["id"] == 11
    assert product["price"] == 8.5
    assert product["stock"] == 0
    assert product["prep_time"] == 15
    assert product["available"] is True
    assert client.get("/api/products/11").json()["data"]["name"] == "Onion Rings"


def test_create_product_missing_field(client, admin_headers):
    payload = {k: v for k, v in NEW_PRODUCT.items() if k != "price"}

    resp = client.post("/api/admin/products", json=payload, headers=admin_headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Missing required field: price"


def test_update_product(client, admin_headers):
    resp = client.put(
        "/api/admin/products/1",
        json={**NEW_PRODUCT, "name": "Double Burger", "category": "Burgers", "stock": 5},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Double Burger"
    assert resp.json()["data"]["stock"] == 5


def test_update_unknown_product(client, admin_headers):
    resp = client.put("/api/admin/products/404", json=NEW_PRODUCT, headers=admin_headers)

    assert resp.status_code == 404


def test_delete_product_is_soft(client, admin_headers):
    resp = client.delete("/api/admin/products/1", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["data"]["available"] is False
    assert len(client.get("/api/products").json()["data"]) == 9
    assert client.get("/api/products/1").json()["data"]["available"] is False
    assert client.delete("/api/admin/products/1", headers=admin_headers).status_code == 200


def test_deleting_last_product_of_category_drops_category(client, admin_headers):
    client.delete("/api/admin/products/10", headers=admin_headers)

    assert "Asian" not in client.get("/api/categories").json()["data"]


# ---------- orders ----------

def test_list_seeded_orders(client):
    orders = client.get("/api/orders").json()["data"]

    assert [o["id"] for o in orders] == [2, 1]


def test_place_order(client):
    payload = order_payload(deliveryTime="soon")
    resp = client.post("/api/orders", json=payload)

    assert resp.status_code == 201
    order = resp.json()["data"]
    assert order["id"] == 3
    assert order["status"] == "pending"
    assert order["payment_status"] == "paid"
    assert order["delivery_time"] == 30
    assert order["customer_name"] == "Alice Brown"
    assert order["items"] == payload["items"]
    assert client.get("/api/orders").json()["data"][0]["id"] == 3
    assert client.get("/api/orders/3").json()["data"]["total"] == 28.97


def test_order_items_are_a_snapshot(client, admin_headers):
    client.post("/api/orders", json=order_payload())
    client.put(
        "/api/admin/products/1",
        json={**NEW_PRODUCT, "name": "Renamed", "price": 99},
        headers=admin_headers,
    )

    item = client.get("/api/orders/3").json()["data"]["items"][0]
    assert item["name"] == "Classic Beef Burger"
    assert item["price"] == 12.99


def test_order_items_come_back_as_sent(client):
    items = [{"id": 1, "name": "Burger", "price": 12.99, "quantity": 2, "image": "x.png"}]

    created = client.post("/api/orders", json=order_payload(items=items, total=25.98))
    order_id = created.json()["data"]["id"]
    stored = client.get(f"/api/orders/{order_id}").json()["data"]["items"]

    assert created.status_code == 201
    assert stored == items


def test_order_item_fields_are_still_checked(client):
    items = [{"id": 1, "name": "Burger", "price": 12.99, "quantity": 0}]

    resp = client.post("/api/orders", json=order_payload(items=items, total=25.98))

    assert resp.status_code == 400


@pytest.mark.parametrize(
    "payload,message",
    [
        ({k: v for k, v in order_payload().items() if k != "customerName"}, "Missing required field: customerName"),
        ({k: v for k, v in order_payload().items() if k != "total"}, "Missing required field: total"),
        (order_payload(items=[]), None),
        (order_payload(total=50), None),
    ],
)
def test_invalid_orders_are_rejected(client, payload, message):
    resp = client.post("/api/orders", json=payload)

    assert resp.status_code == 400
    assert resp.json()["success"] is False
    if message:
        assert resp.json()["message"] == message
    assert len(client.get("/api/orders").json()["data"]) == 2


def test_get_unknown_order(client):
    assert client.get("/api/orders/99").status_code == 404


def test_update_order_status(client, admin_headers):
    client.post("/api/orders", json=order_payload())

    resp = client.put("/api/admin/orders/3", json={"status": "preparing"}, headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "preparing"


def test_unknown_status_leaves_order_unchanged(client, admin_headers):
    for _ in range(3):
        client.post("/api/orders", json=order_payload())

    resp = client.put("/api/admin/orders/5", json={"status": "archived"}, headers=admin_headers)

    assert resp.status_code == 400
    assert client.get("/api/orders/5").json()["data"]["status"] == "pending"


def test_forbidden_transition(client, admin_headers):
    resp = client.put("/api/admin/orders/2", json={"status": "pending"}, headers=admin_headers)

    assert resp.status_code == 400
    assert client.get("/api/orders/2").json()["data"]["status"] == "delivered"


def test_update_status_unknown_order(client, admin_headers):
    resp = client.put("/api/admin/orders/99", json={"status": "ready"}, headers=admin_headers)

    assert resp.status_code == 404


# ---------- analytics / auth ----------

def test_analytics(client, admin_headers):
    client.post("/api/orders", json=order_payload(customerEmail=""))
    client.post("/api/orders", json=order_payload(customerEmail=None))

    data = client.get("/api/admin/analytics", headers=admin_headers).json()["data"]

    assert data["stats"]["totalProducts"] == 10
    assert data["stats"]["totalOrders"] == 4
    assert data["stats"]["totalRevenue"] == pytest.approx(72.94 + 2 * 28.97)
    # john, sarah and the blank email
    assert data["stats"]["activeCustomers"] == 3
    assert [o["id"] for o in data["recentOrders"]] == [4, 3, 2, 1]


def test_login_with_wrong_password(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})

    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid credentials"


def test_auth_status(client, admin_headers):
    anonymous = client.get("/api/auth/status").json()["data"]
    admin = client.get("/api/auth/status", headers=admin_headers).json()["data"]

    assert anonymous == {"isAuthenticated": False, "username": None}
    assert admin == {"isAuthenticated": True, "username": settings.ADMIN_USERNAME}
    assert client.post("/api/auth/logout").json()["success"] is True


# ---------- relational backend ----------

def test_sql_backend_serves_the_same_api(admin_headers):
    backend = SqlBackend(engine=make_engine("sqlite://"))

    with TestClient(create_app(backend)) as sql_client:
        assert sql_client.get("/api/health").json()["storage"] == "sql"
        assert len(sql_client.get("/api/products").json()["data"]) == 10
        assert len(sql_client.get("/api/categories").json()["data"]) == 8

        created = sql_client.post("/api/orders", json=order_payload())
        assert created.status_code == 201
        assert created.json()["data"]["id"] == 1

        resp = sql_client.put("/api/admin/orders/1", json={"status": "ready"}, headers=admin_headers)
        assert resp.json()["data"]["status"] == "ready"
