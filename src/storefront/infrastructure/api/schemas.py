"""Pydantic request/response schemas for the HTTP API.

These are external contracts, kept separate from the application DTOs.
JSON field names are camelCase; request bodies reject unknown fields.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(ApiModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class AddToCartRequest(RequestModel):
    product_id: int
    quantity: int = Field(ge=1)


class UpdateCartQuantityRequest(RequestModel):
    quantity: int = Field(ge=1)


class PlaceOrderRequest(RequestModel):
    shipping_address: str = Field(min_length=1)
    coupon_code: str | None = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        json_schema_extra={
            "examples": [{"shippingAddress": "12 Market St, Springfield", "couponCode": "SAVE10"}]
        },
    )


class PayOrderRequest(RequestModel):
    payment_method: str = Field(min_length=1, max_length=50)


class SetOrderStatusRequest(RequestModel):
    status: str = Field(min_length=1, max_length=50)


class ApplyCouponRequest(RequestModel):
    code: str = Field(min_length=1)


class CreateCouponRequest(RequestModel):
    code: str = Field(min_length=1, max_length=50)
    discount_percent: Decimal = Field(ge=0, le=100)
    valid_from: date
    valid_to: date


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class MessageResponse(ApiModel):
    message: str


class CartLineResponse(ApiModel):
    product_id: int
    quantity: int
    name: str | None
    unit_price: str | None


class OrderLineResponse(ApiModel):
    product_id: int
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


class OrderResponse(ApiModel):
    id: int
    customer_id: int
    status: str
    shipping_address: str
    payment_method: str | None
    coupon_code: str | None
    discount_percent: str
    subtotal: str
    discount: str
    total: str
    created_at: datetime


class OrderDetailResponse(ApiModel):
    order: OrderResponse
    items: list[OrderLineResponse]


class PlaceOrderResponse(ApiModel):
    message: str = "Order created successfully"
    order_id: int
    items: list[OrderLineResponse]
    subtotal: str
    discount: str
    total: str


class OrderStatusResponse(ApiModel):
    message: str
    order: OrderResponse


class ApplyCouponResponse(ApiModel):
    message: str = "Coupon applied successfully"
    discount: str


class CouponResponse(ApiModel):
    code: str
    discount_percent: str
    valid_from: date
    valid_to: date


class SalesReportRowResponse(ApiModel):
    product_id: int
    name: str
    total_quantity_sold: int
    revenue: str


class StockAlertResponse(ApiModel):
    id: int
    name: str
    stock_quantity: int
