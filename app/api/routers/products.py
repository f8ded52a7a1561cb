# app/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_stores
from app.domain.schemas import Envelope, Product
from app.repos.base import Stores
from app.services.product_service import ProductService

router = APIRouter(prefix="/api", tags=["products"])


def get_service(stores: Stores):
    return ProductService(stores.products)


@router.get("/products", response_model=Envelope[List[Product]])
def list_products(
    category: Optional[str] = Query(None, description="Exact category, 'All' for every category"),
    search: Optional[str] = Query(None, description="Case-insensitive match on name or description"),
    stores: Stores = Depends(get_stores),
):
    svc = get_service(stores)
    return Envelope(data=svc.list_products(category=category, search=search))


@router.get("/products/{product_id}", response_model=Envelope[Product])
def get_product(product_id: int, stores: Stores = Depends(get_stores)):
    svc = get_service(stores)
    return Envelope(data=svc.get_product(product_id))


@router.get("/categories", response_model=Envelope[List[str]])
def list_categories(stores: Stores = Depends(get_stores)):
    svc = get_service(stores)
    return Envelope(data=svc.list_categories())
