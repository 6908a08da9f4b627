"""Domain service: Price snapshot.

Turns cart lines into order lines carrying the catalog price and name
read at this instant.  The snapshot is what keeps existing orders
immune to later price changes.
"""

from __future__ import annotations

from storefront.domain.exceptions import ProductNotFoundError
from storefront.domain.model.cart import CartLine
from storefront.domain.model.order import OrderLine
from storefront.domain.repository.catalog import Catalog


class PriceSnapshotter:

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def snapshot(self, lines: list[CartLine]) -> list[OrderLine]:
        """Price every line, in cart order.

        Fails with ProductNotFoundError before producing anything if any
        referenced product has left the catalog.
        """
        products = self._catalog.get_many([line.product_id for line in lines])

        missing = [line.product_id for line in lines if line.product_id not in products]
        if missing:
            raise ProductNotFoundError(
                f"Product not found: {', '.join(f'#{pid}' for pid in missing)}"
            )

        return [
            OrderLine(
                product_id=line.product_id,
                product_name=products[line.product_id].name,
                quantity=line.quantity,
                unit_price=products[line.product_id].price,  # <-- price snapshot
            )
            for line in lines
        ]
