# app/repos/product_repo.py
from typing import List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.domain.errors import NotFound
from app.domain.schemas import Product, ProductCreate
from app.repos.base import ProductStore, next_timestamp, wants_category
from app.repos.sql_errors import storage_errors


class ProductRepo(ProductStore):
    def __init__(self, db: Session):
        self.db = db

    def list_available(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Product]:
        stmt = select(ProductModel).where(ProductModel.available.is_(True))
        if wants_category(category):
            stmt = stmt.where(ProductModel.category == category)
        if search:
            needle = search.lower()
            stmt = stmt.where(
                or_(
                    func.lower(ProductModel.name).contains(needle, autoescape=True),
                    func.lower(ProductModel.description).contains(needle, autoescape=True),
                )
            )
        stmt = stmt.order_by(ProductModel.category, ProductModel.name)
        with storage_errors(self.db, "fetching products"):
            rows = self.db.execute(stmt).scalars().all()
        return [Product.model_validate(r) for r in rows]

    def get(self, product_id: int) -> Optional[Product]:
        with storage_errors(self.db, "fetching product"):
            row = self.db.get(ProductModel, product_id)
        return Product.model_validate(row) if row else None

    def create(self, fields: ProductCreate) -> Product:
        now = next_timestamp()
        row = ProductModel(**fields.model_dump(), rating=0, available=True, created_at=now, updated_at=now)
        with storage_errors(self.db, "creating product"):
            self._ensure_category(row.category)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return Product.model_validate(row)

    def update(self, product_id: int, fields: ProductCreate) -> Product:
        with storage_errors(self.db, "updating product"):
            row = self.db.get(ProductModel, product_id)
            if not row:
                raise NotFound("Product not found")
            for key, value in fields.model_dump().items():
                setattr(row, key, value)
            row.updated_at = next_timestamp(row.updated_at)
            self._ensure_category(row.category)
            self.db.commit()
            self.db.refresh(row)
        return Product.model_validate(row)

    def soft_delete(self, product_id: int) -> Product:
        with storage_errors(self.db, "deleting product"):
            row = self.db.get(ProductModel, product_id)
            if not row:
                raise NotFound("Product not found")
            row.available = False
            row.updated_at = next_timestamp(row.updated_at)
            self.db.commit()
            self.db.refresh(row)
        return Product.model_validate(row)

    def list_categories(self) -> List[str]:
        stmt = (
            select(CategoryModel.name)
            .where(CategoryModel.active.is_(True), CategoryModel.name != "")
            .order_by(CategoryModel.name)
        )
        with storage_errors(self.db, "fetching categories"):
            return list(self.db.execute(stmt).scalars().all())

    def count(self) -> int:
        with storage_errors(self.db, "counting products"):
            return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()

    def seed_records(self, products: List[dict], categories: List[dict]) -> None:
        with storage_errors(self.db, "seeding products"):
            for c in categories:
                self._ensure_category(c["name"], c.get("description", ""))
            for data in products:
                now = next_timestamp()
                record = Product(id=0, created_at=now, updated_at=now, **data)
                self._ensure_category(record.category)
                self.db.add(ProductModel(**record.model_dump(exclude={"id"})))
            self.db.commit()

    def _ensure_category(self, name: str, description: str = "") -> None:
        # categories table follows product writes, no commit here
        if not name:
            return
        exists = self.db.execute(select(CategoryModel.id).where(CategoryModel.name == name)).first()
        if not exists:
            self.db.add(CategoryModel(name=name, description=description))
            self.db.flush()
