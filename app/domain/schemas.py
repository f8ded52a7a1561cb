# app/domain/schemas.py
import copy
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Any, Dict, Generic, List, Optional, TypeVar

from pydantic import (
    AfterValidator,
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    PrivateAttr,
    field_validator,
    model_validator,
)

from pydantic_core import to_jsonable_python

from app.domain.status import OrderStatus, PaymentStatus

CENTS = Decimal("0.01")

DEFAULT_PREP_TIME = 15
DEFAULT_DELIVERY_TIME = 30

# category filter value meaning "no filter"
ALL_CATEGORIES = "All"


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


# currency amounts: Decimal in Python, plain number in JSON
Money = Annotated[
    Decimal,
    AfterValidator(to_cents),
    PlainSerializer(float, return_type=float, when_used="json"),
]

T = TypeVar("T")


def _blank_to_none(value: Any) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return value


class Envelope(BaseModel, Generic[T]):
    """Standard response wrapper: {success, data, message}."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None


# =====================================================
# PRODUCTS
# =====================================================
class Product(BaseModel):
    """Stored product record, shared by all backends."""

    id: int
    name: str
    description: str
    price: Money
    category: str
    image: str = ""
    stock: int = 0
    prep_time: int = DEFAULT_PREP_TIME
    rating: Money = Field(Decimal("0"), ge=0, le=5)
    available: bool = True
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    """Schema for creating or fully replacing a product (admin)."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    price: Money = Field(..., ge=0)
    category: str = Field(..., min_length=1, max_length=100)
    image: str = Field("", max_length=500)
    stock: int = Field(0, ge=0)
    prep_time: int = Field(DEFAULT_PREP_TIME, ge=0)

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("image", mode="before")
    @classmethod
    def _image_default(cls, v):
        return "" if v is None else v

    @field_validator("stock", mode="before")
    @classmethod
    def _stock_default(cls, v):
        v = _blank_to_none(v)
        return 0 if v is None else v

    @field_validator("prep_time", mode="before")
    @classmethod
    def _prep_time_default(cls, v):
        v = _blank_to_none(v)
        return DEFAULT_PREP_TIME if v is None else v


# =====================================================
# ORDERS
# =====================================================
class OrderItem(BaseModel):
    """Checks one line item. The stored snapshot is the item as sent, not this model."""

    product_id: int = Field(..., validation_alias=AliasChoices("product_id", "productId", "id"))
    name: str = Field(..., min_length=1)
    price: Money = Field(..., ge=0)
    quantity: int = Field(..., gt=0)


def _as_snapshot(item: Any) -> Dict[str, Any]:
    if isinstance(item, BaseModel):
        return item.model_dump(mode="json")
    return to_jsonable_python(dict(item))


class OrderCreate(BaseModel):
    """Schema for placing an order. Accepts the storefront's camelCase keys."""

    customer_name: str = Field(..., alias="customerName", min_length=1, max_length=255)
    customer_email: str = Field("", alias="customerEmail", max_length=255)
    customer_phone: str = Field("", alias="customerPhone", max_length=50)
    delivery_address: str = Field("", alias="address")
    items: List[OrderItem] = Field(..., min_length=1)
    total: Money = Field(..., gt=0)
    delivery_time: Optional[int] = Field(None, alias="deliveryTime")
    special_instructions: str = Field("", alias="specialInstructions")

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    _item_snapshot: List[Dict[str, Any]] = PrivateAttr(default_factory=list)

    @model_validator(mode="wrap")
    @classmethod
    def _keep_item_snapshot(cls, data, handler):
        order = handler(data)
        if order is data:
            return order
        raw = data.get("items") if isinstance(data, dict) else None
        order._item_snapshot = [_as_snapshot(item) for item in (raw or order.items)]
        return order

    @property
    def item_snapshot(self) -> List[Dict[str, Any]]:
        """Items exactly as the caller sent them."""
        return copy.deepcopy(self._item_snapshot)

    @field_validator("customer_email", "customer_phone", "delivery_address", "special_instructions", mode="before")
    @classmethod
    def _optional_text(cls, v):
        return "" if v is None else v

    @field_validator("delivery_time", mode="before")
    @classmethod
    def _delivery_time(cls, v):
        # anything unusable falls back to the default delivery time
        v = _blank_to_none(v)
        try:
            v = int(v) if v is not None else None
        except (TypeError, ValueError):
            return None
        if v is None or v <= 0:
            return None
        return v


class Order(BaseModel):
    """Stored order record, shared by all backends."""

    id: int
    customer_name: str
    customer_email: str = ""
    customer_phone: str = ""
    delivery_address: str = ""
    items: List[Dict[str, Any]]
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PAID
    delivery_time: int = DEFAULT_DELIVERY_TIME
    special_instructions: str = ""
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("customer_email", "customer_phone", "delivery_address", "special_instructions", mode="before")
    @classmethod
    def _optional_text(cls, v):
        return "" if v is None else v


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


# =====================================================
# ANALYTICS / AUTH
# =====================================================
class AnalyticsStats(BaseModel):
    total_products: int = Field(..., alias="totalProducts")
    total_orders: int = Field(..., alias="totalOrders")
    total_revenue: Money = Field(..., alias="totalRevenue")
    active_customers: int = Field(..., alias="activeCustomers")

    model_config = ConfigDict(populate_by_name=True)


class AnalyticsOut(BaseModel):
    stats: AnalyticsStats
    recent_orders: List[Order] = Field(..., alias="recentOrders")

    model_config = ConfigDict(populate_by_name=True)


class LoginIn(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AuthStatusOut(BaseModel):
    is_authenticated: bool = Field(..., alias="isAuthenticated")
    username: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
