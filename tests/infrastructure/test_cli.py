"""CLI tests through click's CliRunner on a file-backed SQLite database."""

import pytest
from click.testing import CliRunner

from storefront.application.cart_ledger import CartLedger
from storefront.application.order_ledger import OrderLedger
from storefront.infrastructure.bootstrap import session_factory as build_session_factory
from storefront.infrastructure.cli.main import cli
from storefront.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork
from storefront.infrastructure.settings import Settings
from tests.fakes import ADMIN, ALICE
from tests.infrastructure.dataset import seed


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'shop.db'}"


@pytest.fixture
def run(database_url):
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, ["--database-url", database_url, *args])

    return invoke


@pytest.fixture
def seeded(run, database_url):
    result = run("db", "init")
    assert result.exit_code == 0, result.output
    factory = build_session_factory(Settings(DATABASE_URL=database_url, _env_file=None))
    seed(factory)
    return factory


def _place_order(factory) -> int:
    uow = SqlAlchemyUnitOfWork(factory)
    CartLedger(uow).add_or_merge_line(ALICE, 1, 2)
    return OrderLedger(uow).place_order(ALICE, "12 Market St").id


class TestDbCommands:

    def test_init_is_idempotent(self, run):
        assert run("db", "init").exit_code == 0
        result = run("db", "init")
        assert result.exit_code == 0
        assert "Database schema created." in result.output


class TestOrderCommands:

    def test_show(self, run, seeded):
        order_id = _place_order(seeded)

        result = run("order", "show", "--id", str(order_id), "--customer", str(ALICE))

        assert result.exit_code == 0, result.output
        assert f"Order #{order_id}  (status=Pending)" in result.output
        assert "Widget" in result.output
        assert "20.00" in result.output

    def test_show_of_other_customer_fails(self, run, seeded):
        order_id = _place_order(seeded)
        result = run("order", "show", "--id", str(order_id), "--customer", "2")
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_list(self, run, seeded):
        order_id = _place_order(seeded)
        result = run("order", "list", "--customer", str(ALICE))
        assert result.exit_code == 0
        assert "Pending" in result.output
        assert str(order_id) in result.output

    def test_set_status_as_admin(self, run, seeded):
        order_id = _place_order(seeded)

        result = run("order", "set-status", "--id", str(order_id), "--status", "Shipped", "--admin", str(ADMIN))

        assert result.exit_code == 0, result.output
        assert "status set to Shipped" in result.output

    def test_set_status_as_customer_fails(self, run, seeded):
        order_id = _place_order(seeded)
        result = run("order", "set-status", "--id", str(order_id), "--status", "Shipped", "--admin", str(ALICE))
        assert result.exit_code != 0
        assert "Requires admin privileges" in result.output


class TestCouponCommands:

    def test_create(self, run, seeded):
        result = run(
            "coupon", "create", "--code", "CLI5", "--percent", "5",
            "--from", "2024-01-01", "--to", "2024-03-31", "--admin", str(ADMIN),
        )
        assert result.exit_code == 0, result.output
        assert "Coupon 'CLI5' created: 5.00% off" in result.output

    def test_duplicate_fails(self, run, seeded):
        result = run(
            "coupon", "create", "--code", "SAVE10", "--percent", "5",
            "--from", "2024-01-01", "--to", "2024-03-31", "--admin", str(ADMIN),
        )
        assert result.exit_code != 0
        assert "already exists" in result.output


class TestReportCommands:

    def test_low_stock(self, run, seeded):
        result = run("report", "low-stock", "--admin", str(ADMIN))
        assert result.exit_code == 0, result.output
        assert "Gadget" in result.output
        assert "Widget" not in result.output

    def test_sales_empty_period(self, run, seeded):
        result = run("report", "sales", "--start", "1999-01-01", "--end", "1999-01-31", "--admin", str(ADMIN))
        assert result.exit_code == 0, result.output
        assert "No sales in this period." in result.output

    def test_sales_requires_admin(self, run, seeded):
        result = run("report", "sales", "--start", "1999-01-01", "--end", "1999-01-31", "--admin", str(ALICE))
        assert result.exit_code != 0
