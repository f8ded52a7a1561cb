# tests/conftest.py
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.api import create_app
from app.data import models  # noqa: F401
from app.data.backend import JsonBackend
from app.data.database import Base, make_engine, make_session_factory
from app.domain.schemas import OrderCreate, OrderItem, ProductCreate
from app.repos.json_store import JsonOrderRepo, JsonProductRepo
from app.utils import settings


def make_product(**overrides) -> ProductCreate:
    data = {
        "name": "Classic Beef Burger",
        "description": "Juicy beef patty with lettuce",
        "price": "12.99",
        "category": "Burgers",
    }
    data.update(overrides)
    return ProductCreate(**data)


def make_order(**overrides) -> OrderCreate:
    data = {
        "customer_name": "Jane Doe",
        "customer_email": "jane@example.com",
        "items": [OrderItem(product_id=1, name="Burger", price=Decimal("12.99"), quantity=2)],
        "total": Decimal("25.98"),
    }
    data.update(overrides)
    return OrderCreate(**data)


@pytest.fixture
def product_repo(tmp_path):
    return JsonProductRepo(tmp_path / "products.json")


@pytest.fixture
def order_repo(tmp_path):
    return JsonOrderRepo(tmp_path / "orders.json")


@pytest.fixture
def db():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(engine)
    session_factory = make_session_factory(engine)
    with session_factory() as session:
        yield session
    engine.dispose()


@pytest.fixture
def client(tmp_path):
    app = create_app(JsonBackend(tmp_path / "data"))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client):
    resp = client.post(
        "/api/auth/login",
        json={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    token = resp.json()["data"]["access_token"]
    return {"Authorization": f"Bearer {token}"}
