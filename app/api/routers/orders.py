# app/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_stores
from app.domain.schemas import Envelope, Order, OrderCreate
from app.repos.base import Stores
from app.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(stores: Stores):
    return OrderService(stores.orders)


@router.get("", response_model=Envelope[List[Order]])
def list_orders(stores: Stores = Depends(get_stores)):
    """
    All orders, newest first.
    """
    svc = get_service(stores)
    return Envelope(data=svc.list_orders())


@router.get("/{order_id}", response_model=Envelope[Order])
def get_order(order_id: int, stores: Stores = Depends(get_stores)):
    svc = get_service(stores)
    return Envelope(data=svc.get_order(order_id))


@router.post("", response_model=Envelope[Order], status_code=201)
def create_order(payload: OrderCreate, stores: Stores = Depends(get_stores)):
    """
    Places an order. Items are stored as sent (a snapshot),
    the total has to match them.
    """
    svc = get_service(stores)
    order = svc.create_order(payload)
    return Envelope(data=order, message="Order placed successfully")
