"""Abstract read-only view of the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure.  The catalog itself is maintained elsewhere; the
order engine only reads prices, names and stock levels.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


class Catalog(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_many(self, product_ids: list[int]) -> dict[int, Product]:
        """Return the products that exist among ``product_ids``, keyed by ID."""

    @abstractmethod
    def list_low_stock(self, threshold: int) -> list[Product]:
        """Return products with ``stock_quantity <= threshold``, lowest first."""

    def get_price(self, product_id: int) -> Money | None:
        product = self.get_by_id(product_id)
        return product.price if product is not None else None

    def get_stock(self, product_id: int) -> int | None:
        product = self.get_by_id(product_id)
        return product.stock_quantity if product is not None else None
