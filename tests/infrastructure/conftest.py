"""Shared fixtures: an in-memory SQLite database with a seeded catalog."""

from __future__ import annotations

import pytest

from storefront.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
    init_database,
)
from storefront.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork
from storefront.infrastructure.settings import Settings
from tests.infrastructure.dataset import seed


@pytest.fixture
def settings() -> Settings:
    return Settings(DATABASE_URL="sqlite://", LOG_LEVEL="WARNING", _env_file=None)


@pytest.fixture
def engine(settings):
    engine = create_database_engine(settings)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = create_session_factory(engine)
    seed(factory)
    return factory


@pytest.fixture
def uow(session_factory) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory)
