# app/services/order_service.py
from decimal import Decimal
from typing import List

from app.domain.errors import NotFound, ValidationError
from app.domain.schemas import Order, OrderCreate
from app.domain.status import OrderStatus, can_transition
from app.repos.base import OrderStore
from app.utils.settings import ORDER_TOTAL_TOLERANCE
from app.utils.logging import get_logger

logger = get_logger(__name__)


def items_total(order: OrderCreate) -> Decimal:
    return sum((i.price * i.quantity for i in order.items), Decimal("0.00"))


class OrderService:
    """
    Order lifecycle: placing orders and moving them through the kitchen.
    """

    def __init__(self, orders: OrderStore, total_tolerance: Decimal = ORDER_TOTAL_TOLERANCE):
        self.orders = orders
        self.total_tolerance = total_tolerance

    def list_orders(self) -> List[Order]:
        return self.orders.list_all()

    def get_order(self, order_id: int) -> Order:
        order = self.orders.get(order_id)
        if not order:
            raise NotFound("Order not found")
        return order

    def create_order(self, payload: OrderCreate) -> Order:
        """
        Places an order from a cart snapshot.

        The caller's total has to match the items (within the tolerance),
        payment is simulated and always recorded as paid.
        """
        expected = items_total(payload)
        if abs(expected - payload.total) > self.total_tolerance:
            logger.warning(f"Rejected order for {payload.customer_name}: total {payload.total} != items {expected}")
            raise ValidationError(f"Order total {payload.total} does not match items total {expected}")

        order = self.orders.create(payload)
        logger.info(f"Order {order.id} placed by {order.customer_name}, total {order.total}")
        return order

    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        order = self.get_order(order_id)
        status = OrderStatus(status)

        if not can_transition(order.status, status):
            raise ValidationError(
                f"Cannot change order status from '{order.status.value}' to '{status.value}'"
            )

        updated = self.orders.update_status(order_id, status)
        logger.info(f"Order {order_id} status {order.status.value} -> {status.value}")
        return updated
