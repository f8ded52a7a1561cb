# app/repos/order_repo.py
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel
from app.domain.errors import NotFound
from app.domain.schemas import DEFAULT_DELIVERY_TIME, Order, OrderCreate
from app.domain.status import OrderStatus, PaymentStatus
from app.repos.base import OrderStore, next_timestamp
from app.repos.sql_errors import storage_errors


class OrderRepo(OrderStore):
    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Order]:
        stmt = select(OrderModel).order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        with storage_errors(self.db, "fetching orders"):
            rows = self.db.execute(stmt).scalars().all()
        return [Order.model_validate(r) for r in rows]

    def get(self, order_id: int) -> Optional[Order]:
        with storage_errors(self.db, "fetching order"):
            row = self.db.get(OrderModel, order_id)
        return Order.model_validate(row) if row else None

    def create(self, fields: OrderCreate) -> Order:
        now = next_timestamp()
        row = OrderModel(
            customer_name=fields.customer_name,
            customer_email=fields.customer_email,
            customer_phone=fields.customer_phone,
            delivery_address=fields.delivery_address,
            items=fields.item_snapshot,
            total=fields.total,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PAID.value,
            delivery_time=fields.delivery_time or DEFAULT_DELIVERY_TIME,
            special_instructions=fields.special_instructions,
            created_at=now,
            updated_at=now,
        )
        with storage_errors(self.db, "creating order"):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return Order.model_validate(row)

    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        with storage_errors(self.db, "updating order status"):
            row = self.db.get(OrderModel, order_id)
            if not row:
                raise NotFound("Order not found")
            row.status = OrderStatus(status).value
            row.updated_at = next_timestamp(row.updated_at)
            self.db.commit()
            self.db.refresh(row)
        return Order.model_validate(row)

    def count(self) -> int:
        with storage_errors(self.db, "counting orders"):
            return self.db.execute(select(func.count()).select_from(OrderModel)).scalar_one()
