"""HTTP routes for the storefront.

Thin translation layer: parse the request, call one application
service, shape the response.  Business rules live in the application
and domain layers; errors surface through the registered exception
handlers.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import CouponInvalidError
from storefront.infrastructure.api.dependencies import (
    AdminAuth,
    AppSettings,
    Auth,
    Carts,
    Coupons,
    Orders,
    Reports,
)
from storefront.infrastructure.api.exception_handlers import error_response
from storefront.infrastructure.api.schemas import (
    AddToCartRequest,
    ApplyCouponRequest,
    ApplyCouponResponse,
    CartLineResponse,
    CouponResponse,
    CreateCouponRequest,
    MessageResponse,
    OrderDetailResponse,
    OrderLineResponse,
    OrderResponse,
    OrderStatusResponse,
    PayOrderRequest,
    PlaceOrderRequest,
    PlaceOrderResponse,
    SalesReportRowResponse,
    SetOrderStatusRequest,
    StockAlertResponse,
    UpdateCartQuantityRequest,
)

cart_router = APIRouter(tags=["Cart"])
order_router = APIRouter(tags=["Orders"])
coupon_router = APIRouter(tags=["Coupons"])
admin_router = APIRouter(prefix="/admin", tags=["Admin"])


def _order_response(dto: OrderDTO) -> OrderResponse:
    data = asdict(dto)
    data.pop("items")
    return OrderResponse.model_validate(data)


def _line_responses(dto: OrderDTO) -> list[OrderLineResponse]:
    return [OrderLineResponse.model_validate(asdict(item)) for item in dto.items]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.post("/cart", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
def add_to_cart(body: AddToCartRequest, auth: Auth, carts: Carts) -> MessageResponse:
    carts.add_or_merge_line(auth.customer_id, body.product_id, body.quantity)
    return MessageResponse(message="Item added to cart")


@cart_router.get("/cart", response_model=list[CartLineResponse])
def show_cart(auth: Auth, carts: Carts) -> list[CartLineResponse]:
    return [CartLineResponse.model_validate(asdict(line)) for line in carts.show_cart(auth.customer_id)]


@cart_router.put("/cart/{product_id}", response_model=MessageResponse)
def update_cart_line(
    product_id: int,
    body: UpdateCartQuantityRequest,
    auth: Auth,
    carts: Carts,
) -> MessageResponse:
    carts.set_line_quantity(auth.customer_id, product_id, body.quantity)
    return MessageResponse(message="Cart updated")


@cart_router.delete("/cart/{product_id}", response_model=MessageResponse)
def remove_from_cart(product_id: int, auth: Auth, carts: Carts) -> MessageResponse:
    carts.remove_line(auth.customer_id, product_id)
    return MessageResponse(message="Item removed from cart")


@cart_router.delete("/cart", response_model=MessageResponse)
def clear_cart(auth: Auth, carts: Carts) -> MessageResponse:
    carts.clear_cart(auth.customer_id)
    return MessageResponse(message="Cart cleared")


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("/orders", status_code=status.HTTP_201_CREATED, response_model=PlaceOrderResponse)
def place_order(body: PlaceOrderRequest, auth: Auth, orders: Orders) -> PlaceOrderResponse:
    dto = orders.place_order(
        customer_id=auth.customer_id,
        shipping_address=body.shipping_address,
        coupon_code=body.coupon_code,
    )
    return PlaceOrderResponse(
        order_id=dto.id,
        items=_line_responses(dto),
        subtotal=dto.subtotal,
        discount=dto.discount,
        total=dto.total,
    )


@order_router.get("/orders", response_model=list[OrderResponse])
def list_orders(auth: Auth, orders: Orders) -> list[OrderResponse]:
    return [_order_response(dto) for dto in orders.list_orders(auth.customer_id)]


@order_router.get("/orders/{order_id}", response_model=OrderDetailResponse)
def get_order(order_id: int, auth: Auth, orders: Orders) -> OrderDetailResponse:
    dto = orders.get_order(order_id, auth.customer_id)
    return OrderDetailResponse(order=_order_response(dto), items=_line_responses(dto))


@order_router.post("/orders/{order_id}/pay", response_model=OrderStatusResponse)
def pay_order(order_id: int, body: PayOrderRequest, auth: Auth, orders: Orders) -> OrderStatusResponse:
    dto = orders.pay(order_id, auth.customer_id, body.payment_method)
    return OrderStatusResponse(message="Payment successful", order=_order_response(dto))


@order_router.patch("/orders/{order_id}/status", response_model=OrderStatusResponse)
def set_order_status(
    order_id: int,
    body: SetOrderStatusRequest,
    auth: AdminAuth,
    orders: Orders,
) -> OrderStatusResponse:
    dto = orders.admin_set_status(auth, order_id, body.status)
    return OrderStatusResponse(message="Order status updated", order=_order_response(dto))


# ---------------------------------------------------------------------------
# Coupons
# ---------------------------------------------------------------------------
@coupon_router.post("/apply-coupon", response_model=ApplyCouponResponse)
def apply_coupon(
    body: ApplyCouponRequest, auth: Auth, coupons: Coupons,
) -> ApplyCouponResponse | JSONResponse:
    try:
        discount = coupons.apply_coupon(body.code)
    except CouponInvalidError as exc:
        # Dry-run lookup: an unusable code is reported as not found
        return error_response(status.HTTP_404_NOT_FOUND, type(exc).__name__, str(exc))
    return ApplyCouponResponse(discount=discount)


@coupon_router.post("/coupons", status_code=status.HTTP_201_CREATED, response_model=CouponResponse)
def create_coupon(body: CreateCouponRequest, auth: AdminAuth, coupons: Coupons) -> CouponResponse:
    dto = coupons.create_coupon(
        auth,
        code=body.code,
        discount_percent=body.discount_percent,
        valid_from=body.valid_from,
        valid_to=body.valid_to,
    )
    return CouponResponse.model_validate(asdict(dto))


# ---------------------------------------------------------------------------
# Admin reports
# ---------------------------------------------------------------------------
@admin_router.get("/sales-report", response_model=list[SalesReportRowResponse])
def sales_report(
    auth: AdminAuth,
    reports: Reports,
    start_date: Annotated[date, Query(alias="startDate")],
    end_date: Annotated[date, Query(alias="endDate")],
) -> list[SalesReportRowResponse]:
    rows = reports.sales_report(start_date, end_date)
    return [SalesReportRowResponse.model_validate(asdict(row)) for row in rows]


@admin_router.get("/low-stock-alerts", response_model=list[StockAlertResponse])
def low_stock_alerts(
    auth: AdminAuth,
    reports: Reports,
    settings: AppSettings,
    threshold: Annotated[int | None, Query()] = None,
) -> list[StockAlertResponse]:
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD
    alerts = reports.low_stock_alerts(threshold)
    return [StockAlertResponse.model_validate(asdict(alert)) for alert in alerts]
