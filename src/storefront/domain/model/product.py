"""Product read model.

Products are owned by the external catalog; the order engine only reads
their current price, name and stock level.  Nothing here mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product as seen by the order engine.

    ``price`` is the *current* catalog price.  Orders copy it into their
    line items at placement time, so later catalog changes never reach
    existing orders.
    """

    id: int
    name: str
    price: Money
    stock_quantity: int = 0
