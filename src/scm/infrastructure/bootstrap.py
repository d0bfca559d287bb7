"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.orm import sessionmaker

from scm.domain.service.stock_policy import StockPolicy
from scm.infrastructure.config import Settings, get_settings
from scm.infrastructure.notifications.hub import WILDCARD, NotificationHub, log_notification
from scm.infrastructure.persistence.database import (
    create_db_engine,
    init_schema,
    make_session_factory,
)
from scm.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork

# One engine per database URL for the life of the process.
_session_factories: dict[str, sessionmaker] = {}


def settings() -> Settings:
    return get_settings()


def session_factory() -> sessionmaker:
    s = settings()
    factory = _session_factories.get(s.DATABASE_URL)
    if factory is None:
        engine = create_db_engine(s.DATABASE_URL, echo=s.DATABASE_ECHO)
        init_schema(engine)
        factory = _session_factories[s.DATABASE_URL] = make_session_factory(engine)
    return factory


def unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory())


@lru_cache
def notification_hub() -> NotificationHub:
    hub = NotificationHub()
    hub.subscribe(WILDCARD, log_notification)
    return hub


def stock_policy() -> StockPolicy:
    return StockPolicy(low_stock_threshold=settings().LOW_STOCK_THRESHOLD)


def reset() -> None:
    """Forget cached settings, engines and the hub (tests switch databases)."""
    get_settings.cache_clear()
    notification_hub.cache_clear()
    for factory in _session_factories.values():
        factory.kw["bind"].dispose()
    _session_factories.clear()
