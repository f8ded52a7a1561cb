# app/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String, Text

from app.data.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    image = Column(String(500), nullable=False, default="")
    stock = Column(Integer, nullable=False, default=0)
    prep_time = Column(Integer, nullable=False, default=15)
    rating = Column(Numeric(3, 2), nullable=False, default=0)
    available = Column(Boolean, nullable=False, default=True)  # False = soft-deleted

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
