# app/services/product_service.py
from typing import List, Optional

from app.domain.errors import NotFound
from app.domain.schemas import Product, ProductCreate
from app.repos.base import ProductStore
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """
    Use cases for the catalog.
    Queries (list, get, categories) only read; commands go through the store.
    """

    def __init__(self, products: ProductStore):
        self.products = products

    #query
    def list_products(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
        return self.products.list_available(category=category, search=search)

    def get_product(self, product_id: int) -> Product:
        product = self.products.get(product_id)
        if not product:
            raise NotFound("Product not found")
        return product

    def list_categories(self) -> List[str]:
        return self.products.list_categories()

    #commands
    def create_product(self, payload: ProductCreate) -> Product:
        product = self.products.create(payload)
        logger.info(f"Product {product.id} '{product.name}' created in {product.category}")
        return product

    def update_product(self, product_id: int, payload: ProductCreate) -> Product:
        product = self.products.update(product_id, payload)
        logger.info(f"Product {product_id} updated")
        return product

    def delete_product(self, product_id: int) -> Product:
        product = self.products.soft_delete(product_id)
        logger.info(f"Product {product_id} marked unavailable")
        return product
