# app/data/models/__init__.py
# import all models so SQLAlchemy registers them in Base.metadata

from app.data.models.product import ProductModel
from app.data.models.category import CategoryModel
from app.data.models.order import OrderModel

__all__ = ["ProductModel", "CategoryModel", "OrderModel"]
