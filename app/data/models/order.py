# app/data/models/order.py
from sqlalchemy import Column, Integer, String, DateTime, Numeric, Text, JSON
from sqlalchemy.dialects.postgresql import JSONB
from datetime import datetime, timezone

from app.data.database import Base


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, default="")
    customer_phone = Column(String(50), nullable=False, default="")
    delivery_address = Column(Text, nullable=False, default="")

    # line items exactly as the caller sent them, never re-read from products
    items = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)

    status = Column(String(20), nullable=False, default="pending")  # pending, preparing, ready, delivered, cancelled
    payment_status = Column(String(20), nullable=False, default="paid")
    delivery_time = Column(Integer, nullable=False, default=30)
    special_instructions = Column(Text, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
