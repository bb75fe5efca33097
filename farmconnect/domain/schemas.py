# farmconnect/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from farmconnect.domain.enums import OrderStatus, PaymentMethod, ProductStatus, Role


class CamelModel(BaseModel):
    """JSON payloads use camelCase, python code uses snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageOut(CamelModel):
    message: str


class Identity(BaseModel):
    """Verified identity returned by the token verifier."""

    uid: str
    email: str | None = None


# users

class UserRegisterIn(CamelModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    display_name: str = Field(..., min_length=2, max_length=255)
    phone_number: str | None = Field(None, max_length=32)
    role: Literal["farmer", "buyer"] = "buyer"


class UserOut(CamelModel):
    id: int
    email: str
    display_name: str
    phone_number: str | None = None
    role: Role
    created_at: datetime


# products

class ProductIn(CamelModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: str | None = Field(None, max_length=1000)
    category: str = Field(..., min_length=2, max_length=64)
    unit: str = Field("kg", max_length=16)
    is_organic: bool = False
    price_per_kg: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    available_quantity: int = Field(..., ge=0)


class ProductUpdate(CamelModel):
    title: str | None = Field(None, min_length=3, max_length=255)
    description: str | None = Field(None, max_length=1000)
    category: str | None = Field(None, min_length=2, max_length=64)
    unit: str | None = Field(None, max_length=16)
    is_organic: bool | None = None
    price_per_kg: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    available_quantity: int | None = Field(None, ge=0)
    status: ProductStatus | None = None


class ProductOut(CamelModel):
    id: int
    farmer_id: int
    title: str
    description: str | None = None
    category: str
    unit: str
    is_organic: bool
    price_per_kg: float
    available_quantity: int
    status: ProductStatus
    farmer_name: str | None = None
    created_at: datetime
    updated_at: datetime


class ProductPage(CamelModel):
    items: List[ProductOut]
    total: int


class CategoryOut(CamelModel):
    id: str
    count: int


# cart

class CartAddIn(CamelModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)


class CartUpdateIn(CamelModel):
    # zero or negative removes the line
    quantity: int


class CartItemOut(CamelModel):
    cart_item_id: int
    quantity: int
    added_at: datetime
    product_id: int
    title: str
    description: str | None = None
    price_per_kg: float
    unit: str
    available_quantity: int
    category: str
    is_organic: bool
    farmer_name: str
    farmer_email: str


class CartSummary(CamelModel):
    total_items: int
    total_amount: float


class CartOut(CamelModel):
    items: List[CartItemOut]
    summary: CartSummary


# orders

class CheckoutIn(CamelModel):
    shipping_address: str = Field(..., min_length=1, max_length=500)
    phone_number: str = Field(..., min_length=1, max_length=32)
    payment_method: PaymentMethod = PaymentMethod.cash_on_delivery
    special_instructions: str = Field("", max_length=1000)


class OrderItemOut(CamelModel):
    id: int
    order_id: int
    product_id: int
    quantity: int
    price_per_kg: float
    total_price: float
    title: str | None = None
    description: str | None = None
    unit: str | None = None
    category: str | None = None


class OrderOut(CamelModel):
    id: int
    buyer_id: int
    farmer_id: int
    total_amount: float
    status: OrderStatus
    shipping_address: str
    phone_number: str
    payment_method: PaymentMethod
    special_instructions: str
    created_at: datetime
    updated_at: datetime
    farmer_name: str | None = None
    farmer_email: str | None = None
    buyer_name: str | None = None
    buyer_email: str | None = None
    item_count: int | None = None
    items: List[OrderItemOut] | None = None


class CheckoutOut(CamelModel):
    message: str
    orders: List[OrderOut]


class OrderStatusIn(CamelModel):
    status: OrderStatus
