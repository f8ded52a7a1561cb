# tests/test_json_store.py
import json
from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.domain.errors import NotFound, StorageFailure
from app.domain.schemas import Product
from app.domain.status import OrderStatus, PaymentStatus
from app.repos.json_store import JsonCollection
from conftest import make_order, make_product


# =====================================================
# PRODUCTS
# =====================================================
def test_create_assigns_id_and_defaults(product_repo):
    created = product_repo.create(make_product())

    assert created.id == 1
    assert created.image == ""
    assert created.stock == 0
    assert created.prep_time == 15
    assert created.rating == Decimal("0")
    assert created.available is True
    assert created.created_at == created.updated_at

    fetched = product_repo.get(created.id)
    assert fetched == created
    assert fetched.price == Decimal("12.99")


def test_get_unknown_product_returns_none(product_repo):
    assert product_repo.get(42) is None


def test_ids_are_not_reused_after_soft_delete(product_repo):
    product_repo.create(make_product(name="A"))
    second = product_repo.create(make_product(name="B"))
    product_repo.soft_delete(second.id)

    third = product_repo.create(make_product(name="C"))

    assert third.id == 3


def test_list_available_excludes_soft_deleted(product_repo):
    keep = product_repo.create(make_product(name="Keep"))
    gone = product_repo.create(make_product(name="Gone"))

    product_repo.soft_delete(gone.id)

    listed = product_repo.list_available()
    assert [p.id for p in listed] == [keep.id]
    # still readable by id
    assert product_repo.get(gone.id).available is False


def test_soft_delete_twice_succeeds(product_repo):
    p = product_repo.create(make_product())

    first = product_repo.soft_delete(p.id)
    second = product_repo.soft_delete(p.id)

    assert first.available is False
    assert second.available is False


def test_soft_delete_unknown_raises(product_repo):
    with pytest.raises(NotFound):
        product_repo.soft_delete(99)


def test_list_sorted_by_category_then_name(product_repo):
    product_repo.create(make_product(category="B", name="X"))
    product_repo.create(make_product(category="A", name="Y"))
    product_repo.create(make_product(category="A", name="B"))

    names = [p.name for p in product_repo.list_available()]

    assert names == ["B", "Y", "X"]


def test_filter_by_category_and_search(product_repo):
    product_repo.create(make_product(name="Margherita Pizza", category="Pizza", description="Tomato and basil"))
    product_repo.create(make_product(name="Caesar Salad", category="Salads", description="Romaine and parmesan"))
    product_repo.create(make_product(name="Pepperoni Pizza", category="Pizza", description="Spicy PARMESAN crust"))

    assert len(product_repo.list_available(category="All")) == 3
    assert [p.name for p in product_repo.list_available(category="Pizza")] == ["Margherita Pizza", "Pepperoni Pizza"]
    # search hits name or description, any case
    assert [p.name for p in product_repo.list_available(search="parmesan")] == ["Pepperoni Pizza", "Caesar Salad"]
    assert [p.name for p in product_repo.list_available(category="Pizza", search="margh")] == ["Margherita Pizza"]
    assert product_repo.list_available(category="Desserts") == []


def test_update_replaces_editable_fields(product_repo):
    p = product_repo.create(make_product(stock=5, prep_time=20))
    product_repo.soft_delete(p.id)

    updated = product_repo.update(
        p.id,
        make_product(name="Double Burger", price="15.50", category="Burgers", stock=9),
    )

    assert updated.name == "Double Burger"
    assert updated.price == Decimal("15.50")
    assert updated.stock == 9
    # prep_time was omitted, so the full replace falls back to the default
    assert updated.prep_time == 15
    assert updated.available is False
    assert updated.created_at == p.created_at
    assert updated.updated_at > p.updated_at


def test_update_unknown_product_raises_and_keeps_file(product_repo):
    product_repo.create(make_product())
    before = product_repo.collection.path.read_text()

    with pytest.raises(NotFound):
        product_repo.update(7, make_product())

    assert product_repo.collection.path.read_text() == before


def test_categories_are_derived_from_available_products(product_repo):
    product_repo.create(make_product(category="Pizza"))
    product_repo.create(make_product(category="Burgers"))
    product_repo.create(make_product(category="Pizza"))
    hidden = product_repo.create(make_product(category="Desserts"))
    product_repo.soft_delete(hidden.id)

    assert product_repo.list_categories() == ["Burgers", "Pizza"]


def test_count_includes_soft_deleted(product_repo):
    p = product_repo.create(make_product())
    product_repo.soft_delete(p.id)

    assert product_repo.count() == 1


@pytest.mark.parametrize("rating", ["-0.5", "5.01", "7"])
def test_rating_outside_zero_to_five_is_rejected(rating):
    now = datetime.now(timezone.utc)

    with pytest.raises(PydanticValidationError):
        Product(
            id=1, name="Burger", description="Beef", price="9.99", category="Burgers",
            rating=rating, created_at=now, updated_at=now,
        )


def test_rating_bounds_are_inclusive():
    now = datetime.now(timezone.utc)

    top = Product(
        id=1, name="Burger", description="Beef", price="9.99", category="Burgers",
        rating="5", created_at=now, updated_at=now,
    )

    assert top.rating == Decimal("5.00")


# =====================================================
# FILE FORMAT
# =====================================================
def test_collection_file_round_trip(tmp_path, product_repo):
    product_repo.create(make_product(name="Zeta", category="A"))
    product_repo.create(make_product(name="Alpha", category="B", price="7.10"))
    records = product_repo.collection.read()

    copy = JsonCollection(tmp_path / "copy.json", Product)
    copy.write(records)

    assert copy.read() == records
    assert [r.name for r in copy.read()] == ["Zeta", "Alpha"]


def test_collection_file_is_pretty_printed_array(product_repo):
    product_repo.create(make_product())

    text = product_repo.collection.path.read_text()
    data = json.loads(text)

    assert text.startswith("[\n  {")
    assert data[0]["price"] == 12.99
    assert set(data[0]) == {
        "id", "name", "description", "price", "category", "image", "stock",
        "prep_time", "rating", "available", "created_at", "updated_at",
    }


def test_missing_file_reads_as_empty(product_repo):
    assert product_repo.list_available() == []
    assert product_repo.count() == 0


def test_corrupt_file_raises_storage_failure(product_repo):
    product_repo.collection.path.write_text("{not json")

    with pytest.raises(StorageFailure):
        product_repo.list_available()


# =====================================================
# ORDERS
# =====================================================
def test_create_order_keeps_item_snapshot(order_repo):
    items = [{"id": 1, "name": "Burger", "price": 12.99, "quantity": 2}]
    order = order_repo.create(make_order(items=items))

    assert order.id == 1
    assert order.status == OrderStatus.PENDING
    assert order.payment_status == PaymentStatus.PAID
    assert order.delivery_time == 30
    assert order.special_instructions == ""
    assert order_repo.get(order.id).items == items
    assert order_repo.get(order.id).total == Decimal("25.98")


def test_create_order_uses_given_delivery_time(order_repo):
    order = order_repo.create(make_order(delivery_time=45))

    assert order.delivery_time == 45


def test_update_status_refreshes_updated_at(order_repo):
    order = order_repo.create(make_order())

    order_repo.update_status(order.id, OrderStatus.PREPARING)
    fetched = order_repo.get(order.id)

    assert fetched.status == OrderStatus.PREPARING
    assert fetched.updated_at > order.updated_at
    assert fetched.items == order.items
    assert fetched.total == order.total


def test_update_status_unknown_order_raises(order_repo):
    with pytest.raises(NotFound):
        order_repo.update_status(3, OrderStatus.READY)


def test_list_all_newest_first(order_repo):
    first = order_repo.create(make_order(customer_name="First"))
    second = order_repo.create(make_order(customer_name="Second"))

    assert [o.id for o in order_repo.list_all()] == [second.id, first.id]


def test_order_items_keep_extra_keys(order_repo):
    items = [{"productId": 3, "name": "Fries", "price": 3.5, "quantity": 1, "image": "fries.png"}]

    order = order_repo.create(make_order(items=items, total="3.50"))

    assert order_repo.get(order.id).items == items
    assert json.loads(order_repo.collection.path.read_text())[0]["items"] == items
