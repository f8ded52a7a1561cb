# app/services/analytics_service.py
from decimal import Decimal

from app.domain.schemas import AnalyticsOut, AnalyticsStats
from app.repos.base import OrderStore, ProductStore

RECENT_ORDERS = 5


class AnalyticsService:
    def __init__(self, products: ProductStore, orders: OrderStore):
        self.products = products
        self.orders = orders

    def summary(self) -> AnalyticsOut:
        products = self.products.list_available()
        orders = self.orders.list_all()

        # empty email counts as one customer
        customers = {o.customer_email for o in orders}

        return AnalyticsOut(
            stats=AnalyticsStats(
                total_products=len(products),
                total_orders=len(orders),
                total_revenue=sum((o.total for o in orders), Decimal("0.00")),
                active_customers=len(customers),
            ),
            recent_orders=orders[:RECENT_ORDERS],
        )
