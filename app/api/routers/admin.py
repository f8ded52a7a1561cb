# app/api/routers/admin.py
from fastapi import APIRouter, Depends

from app.api.deps import get_stores, require_admin
from app.domain.schemas import AnalyticsOut, Envelope, Order, OrderStatusUpdate, Product, ProductCreate
from app.repos.base import Stores
from app.services.analytics_service import AnalyticsService
from app.services.order_service import OrderService
from app.services.product_service import ProductService

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/products", response_model=Envelope[Product], status_code=201)
def create_product(payload: ProductCreate, stores: Stores = Depends(get_stores)):
    svc = ProductService(stores.products)
    return Envelope(data=svc.create_product(payload), message="Product created successfully")


@router.put("/products/{product_id}", response_model=Envelope[Product])
def update_product(product_id: int, payload: ProductCreate, stores: Stores = Depends(get_stores)):
    svc = ProductService(stores.products)
    return Envelope(data=svc.update_product(product_id, payload), message="Product updated successfully")


@router.delete("/products/{product_id}", response_model=Envelope[Product])
def delete_product(product_id: int, stores: Stores = Depends(get_stores)):
    # soft delete, the product stays readable by id
    svc = ProductService(stores.products)
    return Envelope(data=svc.delete_product(product_id), message="Product deleted successfully")


@router.put("/orders/{order_id}", response_model=Envelope[Order])
def update_order_status(order_id: int, payload: OrderStatusUpdate, stores: Stores = Depends(get_stores)):
    svc = OrderService(stores.orders)
    order = svc.update_status(order_id, payload.status)
    return Envelope(data=order, message="Order status updated successfully")


@router.get("/analytics", response_model=Envelope[AnalyticsOut])
def analytics(stores: Stores = Depends(get_stores)):
    svc = AnalyticsService(stores.products, stores.orders)
    return Envelope(data=svc.summary())
