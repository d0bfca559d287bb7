"""Shared fixtures: an in-memory SQLite store seeded with a small catalog."""

from __future__ import annotations

import pytest

from scm.infrastructure.persistence.database import (
    create_db_engine,
    init_schema,
    make_session_factory,
)
from scm.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork
from tests.fakes import RecordingSink
from tests.helpers import Seed, seed_catalog


@pytest.fixture
def session_factory():
    engine = create_db_engine("sqlite://")
    init_schema(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def uow(session_factory) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory)


@pytest.fixture
def seed(uow) -> Seed:
    return seed_catalog(uow)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
