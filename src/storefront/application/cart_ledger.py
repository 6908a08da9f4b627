"""Application service: the customer's cart.

Every mutation is a single statement inside its own unit of work, so
concurrent requests of the same customer never lose an update.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartLineDTO
from storefront.domain.exceptions import EntityNotFoundError, ProductNotFoundError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CartLedger:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def add_or_merge_line(self, customer_id: int, product_id: int, quantity: int) -> None:
        """Add ``quantity`` units of a product, merging with an existing line."""
        qty = Quantity(quantity)

        with self._uow as uow:
            if uow.catalog.get_by_id(product_id) is None:
                raise ProductNotFoundError(f"Product #{product_id} not found")
            uow.carts.add_or_merge(customer_id, product_id, qty)
            uow.commit()

        logger.debug("Cart line added", customer_id=customer_id, product_id=product_id, quantity=quantity)

    def set_line_quantity(self, customer_id: int, product_id: int, quantity: int) -> None:
        qty = Quantity(quantity)

        with self._uow as uow:
            if not uow.carts.set_quantity(customer_id, product_id, qty):
                raise EntityNotFoundError(f"Cart item for product #{product_id} not found")
            uow.commit()

        logger.debug("Cart line updated", customer_id=customer_id, product_id=product_id, quantity=quantity)

    def remove_line(self, customer_id: int, product_id: int) -> None:
        with self._uow as uow:
            uow.carts.remove(customer_id, product_id)
            uow.commit()

    def clear_cart(self, customer_id: int) -> None:
        with self._uow as uow:
            removed = uow.carts.clear(customer_id)
            uow.commit()

        logger.debug("Cart cleared", customer_id=customer_id, removed=removed)

    def list_lines(self, customer_id: int) -> list[CartLine]:
        with self._uow as uow:
            return uow.carts.list_lines(customer_id)

    def show_cart(self, customer_id: int) -> list[CartLineDTO]:
        """List the cart with each product's current name and price.

        Display only: the prices shown here are not the ones an order
        will lock in, those are read again at placement.
        """
        with self._uow as uow:
            lines = uow.carts.list_lines(customer_id)
            products = uow.catalog.get_many([line.product_id for line in lines])

        result: list[CartLineDTO] = []
        for line in lines:
            product = products.get(line.product_id)
            result.append(
                CartLineDTO(
                    product_id=line.product_id,
                    quantity=line.quantity.value,
                    name=product.name if product else None,
                    unit_price=f"{product.price.amount:.2f}" if product else None,
                )
            )
        return result
