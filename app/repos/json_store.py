# app/repos/json_store.py
import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generic, Iterator, List, Optional, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.domain.errors import NotFound, StorageFailure
from app.domain.schemas import DEFAULT_DELIVERY_TIME, Order, OrderCreate, Product, ProductCreate
from app.domain.status import OrderStatus, PaymentStatus
from app.repos.base import OrderStore, ProductStore, filter_products, next_timestamp
from app.utils.logging import get_logger

logger = get_logger(__name__)

R = TypeVar("R", Product, Order)

_registry_lock = threading.Lock()
_file_locks: dict[Path, threading.RLock] = {}


def _lock_for(path: Path) -> threading.RLock:
    # one writer per file for the whole process
    key = path.resolve()
    with _registry_lock:
        return _file_locks.setdefault(key, threading.RLock())


class JsonCollection(Generic[R]):
    """
    A whole collection kept as one pretty-printed JSON array.

    Every mutation is a full read-modify-write under the file's lock; the
    new content goes to a temp file that replaces the old file in one rename.
    """

    def __init__(self, path: Path, model: type[R]):
        self.path = Path(path)
        self.model = model
        self.adapter = TypeAdapter(List[model])
        self.lock = _lock_for(self.path)

    def read(self) -> List[R]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
            return self.adapter.validate_python(raw)
        except (OSError, ValueError, PydanticValidationError) as e:
            logger.error(f"Cannot read {self.path}: {e}")
            raise StorageFailure(f"Error reading {self.path.name}", detail=str(e)) from e

    def write(self, records: List[R]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            payload = self.adapter.dump_python(records, mode="json")
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Cannot write {self.path}: {e}")
            raise StorageFailure(f"Error writing {self.path.name}", detail=str(e)) from e

    @contextmanager
    def mutate(self) -> Iterator[List[R]]:
        """Yield the records for in-place changes; written back only if no error."""
        with self.lock:
            records = self.read()
            yield records
            self.write(records)


def _next_id(records) -> int:
    return max((r.id for r in records), default=0) + 1


def _index_of(records, record_id: int) -> Optional[int]:
    for i, r in enumerate(records):
        if r.id == record_id:
            return i
    return None


class JsonProductRepo(ProductStore):
    def __init__(self, path: Path):
        self.collection: JsonCollection[Product] = JsonCollection(path, Product)

    def list_available(self, category=None, search=None) -> List[Product]:
        return filter_products(self.collection.read(), category, search)

    def get(self, product_id: int) -> Optional[Product]:
        records = self.collection.read()
        i = _index_of(records, product_id)
        return records[i] if i is not None else None

    def create(self, fields: ProductCreate) -> Product:
        with self.collection.mutate() as records:
            now = next_timestamp()
            product = Product(
                id=_next_id(records),
                **fields.model_dump(),
                rating=0,
                available=True,
                created_at=now,
                updated_at=now,
            )
            records.append(product)
        return product

    def update(self, product_id: int, fields: ProductCreate) -> Product:
        with self.collection.mutate() as records:
            i = _index_of(records, product_id)
            if i is None:
                raise NotFound("Product not found")
            current = records[i]
            records[i] = current.model_copy(
                update={**fields.model_dump(), "updated_at": next_timestamp(current.updated_at)}
            )
        return records[i]

    def soft_delete(self, product_id: int) -> Product:
        with self.collection.mutate() as records:
            i = _index_of(records, product_id)
            if i is None:
                raise NotFound("Product not found")
            current = records[i]
            records[i] = current.model_copy(
                update={"available": False, "updated_at": next_timestamp(current.updated_at)}
            )
        return records[i]

    def list_categories(self) -> List[str]:
        return sorted({p.category for p in self.collection.read() if p.available and p.category})

    def count(self) -> int:
        return len(self.collection.read())

    def seed_records(self, products: List[dict], categories: List[dict]) -> None:
        # categories are derived from products here, nothing to store
        with self.collection.mutate() as records:
            if records:
                return
            now = next_timestamp()
            for i, data in enumerate(products, start=1):
                records.append(Product(id=i, available=True, created_at=now, updated_at=now, **data))


class JsonOrderRepo(OrderStore):
    def __init__(self, path: Path):
        self.collection: JsonCollection[Order] = JsonCollection(path, Order)

    def list_all(self) -> List[Order]:
        orders = self.collection.read()
        orders.sort(key=lambda o: (o.created_at, o.id), reverse=True)
        return orders

    def get(self, order_id: int) -> Optional[Order]:
        records = self.collection.read()
        i = _index_of(records, order_id)
        return records[i] if i is not None else None

    def create(self, fields: OrderCreate) -> Order:
        with self.collection.mutate() as records:
            now = next_timestamp()
            order = Order(
                id=_next_id(records),
                customer_name=fields.customer_name,
                customer_email=fields.customer_email,
                customer_phone=fields.customer_phone,
                delivery_address=fields.delivery_address,
                items=fields.item_snapshot,
                total=fields.total,
                status=OrderStatus.PENDING,
                payment_status=PaymentStatus.PAID,
                delivery_time=fields.delivery_time or DEFAULT_DELIVERY_TIME,
                special_instructions=fields.special_instructions,
                created_at=now,
                updated_at=now,
            )
            records.append(order)
        return order

    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        with self.collection.mutate() as records:
            i = _index_of(records, order_id)
            if i is None:
                raise NotFound("Order not found")
            current = records[i]
            records[i] = current.model_copy(
                update={"status": OrderStatus(status), "updated_at": next_timestamp(current.updated_at)}
            )
        return records[i]

    def count(self) -> int:
        return len(self.collection.read())

    def seed_records(self, orders: List[dict]) -> None:
        with self.collection.mutate() as records:
            if records:
                return
            now = next_timestamp()
            for i, data in enumerate(orders, start=1):
                records.append(Order(id=i, created_at=now, updated_at=now, **data))
