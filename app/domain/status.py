# app/domain/status.py
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


# orders only move forward through the kitchen, cancelling is possible until delivery
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset(
        {OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.DELIVERED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    """Re-applying the current status is always allowed."""
    current, new = OrderStatus(current), OrderStatus(new)
    return current == new or new in ALLOWED_TRANSITIONS[current]
