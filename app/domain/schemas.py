# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from pydantic.alias_generators import to_camel
from typing import List, Optional
from decimal import Decimal
from datetime import datetime


class ApiModel(BaseModel):
    """Wspolna baza - camelCase w JSON, snake_case w Pythonie."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------- users ----------

class UserCreate(ApiModel):
    """Schema dla tworzenia użytkownika."""

    email: EmailStr
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: str = Field("user", pattern="^(user|admin)$")


class UserUpdate(ApiModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[str] = Field(None, pattern="^(user|admin)$")


class UserRead(ApiModel):
    """Schema dla użytkownika (response)."""

    id: int
    email: str
    first_name: str
    last_name: str
    role: str
    cart_id: Optional[int] = None


# ---------- catalog ----------

class CategoryIn(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryOut(ApiModel):
    id: int
    name: str


class ProductIn(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(0, ge=0)
    category_id: Optional[int] = None


class ProductUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = None


class ProductOut(ApiModel):
    id: int
    name: str
    description: str
    price: Decimal
    stock: int
    category_id: Optional[int] = None
    category: Optional[CategoryOut] = None


# ---------- cart ----------

class CartItemIn(ApiModel):
    """Pozycja koszyka od klienta. Ilosc 0 oznacza usuniecie."""

    product_id: int = Field(..., gt=0)
    product_quantity: int = Field(1, ge=0)


class CartItemOut(ApiModel):
    product_id: int
    product_quantity: int


class CartOut(ApiModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int
    items: List[CartItemOut]


class CartSyncOut(ApiModel):
    message: str
    created: int
    updated: int
    deleted: int


# ---------- orders ----------

class ShippingAddressIn(ApiModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    line1: str = Field(..., min_length=1, max_length=255)
    line2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    province: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field("CA", min_length=2, max_length=2)


class ShippingAddressOut(ShippingAddressIn):
    id: int


class OrderItemIn(ApiModel):
    product_id: int = Field(..., gt=0)
    product_quantity: int = Field(..., gt=0)


class OrderItemOut(ApiModel):
    product_id: int
    product_quantity: int


class OrderDetailsIn(ApiModel):
    total_price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    user_id: Optional[int] = None


class PaymentIntentCreate(ApiModel):
    """Schema dla rozpoczecia platnosci - tworzy PaymentIntent i zamowienie."""

    items: List[OrderItemIn] = Field(..., min_length=1)
    order_details: OrderDetailsIn
    shipping_address: ShippingAddressIn


class PaymentIntentOut(ApiModel):
    client_secret: str


class OrderOut(ApiModel):
    """Schema dla zamówienia (response)."""

    id: int
    user_id: Optional[int] = None
    stripe_payment_intent_id: str
    status: str
    total_price: Decimal
    created_at: datetime
    items: List[OrderItemOut] = []
    shipping_address: Optional[ShippingAddressOut] = None


class WebhookAck(BaseModel):
    received: bool = True
