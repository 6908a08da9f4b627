"""Tests for the CartLedger use cases.

Uses in-memory fake repositories; no database.
"""

import pytest

from storefront.application.cart_ledger import CartLedger
from storefront.domain.exceptions import EntityNotFoundError, ProductNotFoundError, ValidationError
from tests.fakes import ALICE, BOB, make_uow


def _setup():
    uow = make_uow()
    return CartLedger(uow), uow


def _quantities(ledger: CartLedger, customer_id: int) -> dict[int, int]:
    return {line.product_id: line.quantity.value for line in ledger.list_lines(customer_id)}


class TestAddOrMerge:

    def test_adds_new_line(self):
        ledger, _ = _setup()
        ledger.add_or_merge_line(ALICE, 1, 2)
        assert _quantities(ledger, ALICE) == {1: 2}

    def test_merges_existing_line(self):
        ledger, _ = _setup()
        ledger.add_or_merge_line(ALICE, 1, 2)
        ledger.add_or_merge_line(ALICE, 1, 3)
        assert _quantities(ledger, ALICE) == {1: 5}
        assert len(ledger.list_lines(ALICE)) == 1

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        ledger, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            ledger.add_or_merge_line(ALICE, 1, qty)
        assert ledger.list_lines(ALICE) == []

    def test_unknown_product_rejected(self):
        ledger, _ = _setup()
        with pytest.raises(ProductNotFoundError, match="#42"):
            ledger.add_or_merge_line(ALICE, 42, 1)

    def test_carts_are_per_customer(self):
        ledger, _ = _setup()
        ledger.add_or_merge_line(ALICE, 1, 1)
        ledger.add_or_merge_line(BOB, 2, 4)
        assert _quantities(ledger, ALICE) == {1: 1}
        assert _quantities(ledger, BOB) == {2: 4}

    def test_commits(self):
        ledger, uow = _setup()
        ledger.add_or_merge_line(ALICE, 1, 1)
        assert uow.commits == 1


class TestSetQuantity:

    def test_overwrites_quantity(self):
        ledger, _ = _setup()
        ledger.add_or_merge_line(ALICE, 1, 2)
        ledger.set_line_quantity(ALICE, 1, 7)
        assert _quantities(ledger, ALICE) == {1: 7}

    def test_missing_line_rejected(self):
        ledger, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Cart item for product #1 not found"):
            ledger.set_line_quantity(ALICE, 1, 3)

    def test_zero_rejected(self):
        ledger, _ = _setup()
        ledger.add_or_merge_line(ALICE, 1, 2)
        with pytest.raises(ValidationError):
            ledger.set_line_quantity(ALICE, 1, 0)
        assert _quantities(ledger, ALICE) == {1: 2}


class TestRemoveAndClear:

    def test_remove_line(self):
        ledger, _ = _setup()
        ledger.add_or_merge_line(ALICE, 1, 1)
        ledger.add_or_merge_line(ALICE, 2, 1)
        ledger.remove_line(ALICE, 1)
        assert _quantities(ledger, ALICE) == {2: 1}

    def test_remove_absent_line_is_noop(self):
        ledger, _ = _setup()
        ledger.remove_line(ALICE, 3)
        assert ledger.list_lines(ALICE) == []

    def test_clear_only_touches_own_cart(self):
        ledger, _ = _setup()
        ledger.add_or_merge_line(ALICE, 1, 1)
        ledger.add_or_merge_line(ALICE, 2, 1)
        ledger.add_or_merge_line(BOB, 1, 1)
        ledger.clear_cart(ALICE)
        assert ledger.list_lines(ALICE) == []
        assert _quantities(ledger, BOB) == {1: 1}


class TestShowCart:

    def test_enriches_with_current_catalog_data(self):
        ledger, uow = _setup()
        ledger.add_or_merge_line(ALICE, 2, 3)
        uow.catalog.set_price(2, "30.00")

        [line] = ledger.show_cart(ALICE)

        assert line.product_id == 2
        assert line.quantity == 3
        assert line.name == "Gadget"
        assert line.unit_price == "30.00"

    def test_product_gone_from_catalog(self):
        ledger, uow = _setup()
        ledger.add_or_merge_line(ALICE, 3, 1)
        uow.catalog.delete(3)

        [line] = ledger.show_cart(ALICE)

        assert line.name is None
        assert line.unit_price is None
