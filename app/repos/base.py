# app/repos/base.py
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, NamedTuple, Optional

from app.domain.schemas import ALL_CATEGORIES, Order, OrderCreate, Product, ProductCreate
from app.domain.status import OrderStatus

_TICK = timedelta(microseconds=1)


def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """
    Current UTC time, bumped past `previous` when the clock has not moved
    (updated_at must strictly increase on every mutation).
    """
    now = datetime.now(timezone.utc)
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    return now if now > previous else previous + _TICK


def wants_category(category: Optional[str]) -> bool:
    return bool(category) and category != ALL_CATEGORIES


def matches_search(product: Product, search: str) -> bool:
    needle = search.lower()
    return needle in product.name.lower() or needle in product.description.lower()


def filter_products(
    products: Iterable[Product],
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Product]:
    """Available products matching the filter, sorted by (category, name)."""
    result = [p for p in products if p.available]
    if wants_category(category):
        result = [p for p in result if p.category == category]
    if search:
        result = [p for p in result if matches_search(p, search)]
    result.sort(key=lambda p: (p.category, p.name))
    return result


class ProductStore(ABC):
    """Persistence contract for products, implemented by every backend."""

    @abstractmethod
    def list_available(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
        ...

    @abstractmethod
    def get(self, product_id: int) -> Optional[Product]:
        ...

    @abstractmethod
    def create(self, fields: ProductCreate) -> Product:
        ...

    @abstractmethod
    def update(self, product_id: int, fields: ProductCreate) -> Product:
        """Full replace of the editable fields. Raises NotFound."""

    @abstractmethod
    def soft_delete(self, product_id: int) -> Product:
        """Mark unavailable. Idempotent, raises NotFound for unknown ids."""

    @abstractmethod
    def list_categories(self) -> List[str]:
        ...

    @abstractmethod
    def count(self) -> int:
        """All records, soft-deleted included."""

    @abstractmethod
    def seed_records(self, products: List[dict], categories: List[dict]) -> None:
        ...


class OrderStore(ABC):
    """Persistence contract for orders, implemented by every backend."""

    @abstractmethod
    def list_all(self) -> List[Order]:
        """Newest first."""

    @abstractmethod
    def get(self, order_id: int) -> Optional[Order]:
        ...

    @abstractmethod
    def create(self, fields: OrderCreate) -> Order:
        ...

    @abstractmethod
    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        """Only status and updated_at change. Raises NotFound."""

    @abstractmethod
    def count(self) -> int:
        ...


class Stores(NamedTuple):
    products: ProductStore
    orders: OrderStore
