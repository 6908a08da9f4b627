"""Application service: order placement and order lifecycle.

Orchestrates the flow between the cart, the catalog, coupons and the
Order aggregate.  This is the only place that coordinates several
aggregates, and every coordination happens inside one unit of work:

- ``place_order``: read cart -> snapshot prices -> validate coupon ->
  insert order + lines -> consume cart, all or nothing.
- ``pay``: Pending -> Paid through a compare-and-set on the stored status.
- ``admin_set_status``: privileged overwrite, outside the regular rules.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import structlog

from storefront.application.dto import OrderDTO, OrderLineDTO
from storefront.domain.exceptions import (
    CheckoutConflictError,
    EmptyCartError,
    EntityNotFoundError,
    OrderNotPayableError,
    ValidationError,
)
from storefront.domain.model.auth import AuthContext
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Percentage
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.coupon_validator import CouponValidator
from storefront.domain.service.price_snapshotter import PriceSnapshotter

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderLedger:

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._uow = uow
        self._clock = clock

    # --- Commands -------------------------------------------------------------

    def place_order(
        self,
        customer_id: int,
        shipping_address: str,
        coupon_code: str | None = None,
    ) -> OrderDTO:
        """Turn the customer's cart into a Pending order.

        Steps:
        1. Read the cart lines (locked where the backend supports it).
        2. Snapshot each product's current price.
        3. Validate the coupon, if any.
        4. Insert the order with its lines and consume the cart lines.

        The cart is consumed by deleting exactly the lines that were read.
        If fewer rows go away, a concurrent request changed or consumed the
        cart in the meantime and the whole unit is rolled back.
        """
        if not shipping_address or not shipping_address.strip():
            raise ValidationError("Shipping address is required")
        if coupon_code is not None and not coupon_code.strip():
            coupon_code = None

        now = self._clock()

        with self._uow as uow:
            lines = uow.carts.list_lines(customer_id, for_update=True)
            if not lines:
                raise EmptyCartError("Cannot place an order: the cart is empty")

            items = PriceSnapshotter(uow.catalog).snapshot(lines)

            discount = Percentage.none()
            if coupon_code is not None:
                discount = CouponValidator(uow.coupons).validate(coupon_code, as_of=now.date())

            order = Order.create(
                customer_id=customer_id,
                shipping_address=shipping_address,
                items=items,
                coupon_code=coupon_code,
                discount_percent=discount,
                created_at=now,
            )
            uow.orders.add(order)

            consumed = uow.carts.consume(customer_id, lines)
            if consumed != len(lines):
                logger.warning(
                    "Cart changed during checkout",
                    customer_id=customer_id,
                    expected=len(lines),
                    consumed=consumed,
                )
                raise CheckoutConflictError(
                    "The cart changed while the order was being placed; please retry"
                )

            uow.commit()

        logger.info(
            "Order placed",
            order_id=order.id,
            customer_id=customer_id,
            lines=len(order.items),
            total=str(order.total.amount),
            coupon_code=coupon_code,
        )
        return self._to_dto(order)

    def pay(self, order_id: int, customer_id: int, payment_method: str) -> OrderDTO:
        """Record payment of a Pending order.

        The gateway integration is out of scope; this only records the
        transition.  A second payment fails with OrderNotPayableError and
        never overwrites the first payment method.
        """
        with self._uow as uow:
            order = uow.orders.get_for_customer(order_id, customer_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            order.pay(payment_method)

            if not uow.orders.save_payment(order, expected_status=OrderStatus.PENDING.value):
                logger.warning("Concurrent payment rejected", order_id=order_id, customer_id=customer_id)
                raise OrderNotPayableError(f"Order #{order_id} has already been paid")

            uow.commit()

        logger.info("Order paid", order_id=order_id, customer_id=customer_id, payment_method=order.payment_method)
        return self._to_dto(order)

    def admin_set_status(self, auth: AuthContext, order_id: int, new_status: str) -> OrderDTO:
        """Overwrite an order's status with any label (admin only).

        No transition rules apply here; this is an explicit escape hatch
        kept apart from ``pay``.
        """
        auth.require_admin()

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            previous = order.status
            order.override_status(new_status)

            if not uow.orders.save_status(order):
                raise EntityNotFoundError(f"Order #{order_id} not found")

            uow.commit()

        logger.info(
            "Order status overridden",
            order_id=order_id,
            admin_id=auth.customer_id,
            previous=previous,
            status=order.status,
        )
        return self._to_dto(order)

    # --- Queries --------------------------------------------------------------

    def get_order(self, order_id: int, customer_id: int) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_for_customer(order_id, customer_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return self._to_dto(order)

    def list_orders(self, customer_id: int) -> list[OrderDTO]:
        with self._uow as uow:
            orders = uow.orders.list_for_customer(customer_id)
        return [self._to_dto(order) for order in orders]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            customer_id=order.customer_id,
            status=order.status,
            shipping_address=order.shipping_address,
            payment_method=order.payment_method,
            coupon_code=order.coupon_code,
            discount_percent=f"{order.discount_percent.value:.2f}",
            items=[
                OrderLineDTO(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=f"{item.unit_price.amount:.2f}",
                    line_total=f"{item.line_total.amount:.2f}",
                )
                for item in order.items
            ],
            subtotal=f"{order.subtotal.amount:.2f}",
            discount=f"{order.discount.amount:.2f}",
            total=f"{order.total.amount:.2f}",
            created_at=order.created_at,
        )
