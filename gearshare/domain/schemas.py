# gearshare/domain/schemas.py
from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake case in Python, camelCase on the wire (both accepted on input)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =====================================================
# CART
# =====================================================
class SelectedOptionIn(CamelModel):
    name: str | None = None
    extra_price: Decimal = Field(Decimal("0"), ge=0)


class CartLineIn(CamelModel):
    """Add or update a cart line. `mode=add` increments, `mode=set` overwrites."""

    product_id: str | None = None
    quantity: int | None = None
    option_name: str | None = None
    selected_option: SelectedOptionIn | None = None
    return_date: date | None = None
    mode: Literal["add", "set"] = Field("set", validation_alias=AliasChoices("mode", "action"))


class CartLineQuantityIn(CamelModel):
    product_id: str | None = None
    option_name: str | None = None
    quantity: int


class CartLineRemoveIn(CamelModel):
    product_id: str | None = None
    option_name: str | None = None


class SelectedOptionOut(CamelModel):
    name: str
    extra_price: Decimal


class CartItemOut(CamelModel):
    product_id: str
    product_name: str
    product_image: str
    base_price: Decimal
    quantity: int
    selected_option: SelectedOptionOut | None = None
    return_date: date | None = None
    daily_rental_rate: Decimal
    rental_days: int
    rental_extra: Decimal
    per_unit_total: Decimal
    line_total: Decimal


class CartOut(CamelModel):
    items: List[CartItemOut]
    total_amount: Decimal
    item_count: int
    line_count: int


# =====================================================
# ORDERS
# =====================================================
class OrderCreateIn(CamelModel):
    customer_name: str = ""
    customer_phone: str = ""
    delivery_address: str = ""
    note: str = ""
    payment_method: str = ""


class ConfirmOrderIn(CamelModel):
    delivery_days: int | None = None


class CancelOrderIn(CamelModel):
    reason: str | None = None


class OrderItemOut(CartItemOut):
    product_id: str | None = None
    calculated_return_date: datetime | None = None


class CustomerOut(CamelModel):
    username: str
    email: str
    phone_number: str


class OrderOut(CamelModel):
    id: str
    order_number: str
    user_id: str | None = None
    items: List[OrderItemOut]
    customer_name: str
    customer_phone: str
    delivery_address: str
    note: str
    payment_method: str
    total_amount: Decimal
    status: str
    delivery_date: datetime | None = None
    calculated_return_date: datetime | None = None
    cancelled_by: str | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    customer: CustomerOut | None = None


class OrderCreatedOut(CamelModel):
    order: OrderOut
    cart: CartOut


class OrderConfirmedOut(CamelModel):
    order_number: str
    delivery_date: datetime
    calculated_return_date: datetime | None = None


# =====================================================
# USERS
# =====================================================
class UserRegisterIn(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone_number: str = ""


class LoginIn(CamelModel):
    email: EmailStr
    password: str


class SetAdminIn(CamelModel):
    email: EmailStr


class UserUpdateIn(CamelModel):
    username: str | None = Field(None, min_length=1, max_length=100)
    phone_number: str | None = None
    password: str | None = Field(None, min_length=1)
    blocked: bool | None = None


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    role: str
    phone_number: str
    blocked: bool
    created_at: datetime


class TokenOut(CamelModel):
    token: str
    token_type: str = "bearer"
    user: UserOut


# =====================================================
# PRODUCTS
# =====================================================
class ProductIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0)
    category: str = ""
    image: str = ""


class ProductUpdateIn(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    price: Decimal | None = Field(None, ge=0)
    category: str | None = None
    image: str | None = None


class ProductOut(CamelModel):
    id: str
    name: str
    price: Decimal
    image: str
    category: str
    like_count: int = 0
    created_at: datetime


class ProductDetailOut(CamelModel):
    product: ProductOut
    liked_by_me: bool


class FavoriteToggleIn(CamelModel):
    product_id: str | None = None


class LikeToggleOut(CamelModel):
    product_id: str
    liked: bool


class MessageOut(CamelModel):
    message: str
