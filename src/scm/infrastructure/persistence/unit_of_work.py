"""SQLAlchemy Unit of Work: one session, one transaction per ``with`` block."""

from __future__ import annotations

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from scm.domain.repository.unit_of_work import UnitOfWork
from scm.infrastructure.persistence.sql_delivery_repository import SqlDeliveryRepository
from scm.infrastructure.persistence.sql_inventory_repository import SqlInventoryRepository
from scm.infrastructure.persistence.sql_location_repository import SqlLocationRepository
from scm.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from scm.infrastructure.persistence.sql_party_repository import (
    SqlCustomerRepository,
    SqlSupplierRepository,
)
from scm.infrastructure.persistence.sql_product_repository import SqlProductRepository

logger = structlog.get_logger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self.session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self.session is not None:
            raise RuntimeError("Unit of work is already in progress")
        self.session = self._session_factory()
        self.orders = SqlOrderRepository(self.session)
        self.inventory = SqlInventoryRepository(self.session)
        self.products = SqlProductRepository(self.session)
        self.locations = SqlLocationRepository(self.session)
        self.customers = SqlCustomerRepository(self.session)
        self.suppliers = SqlSupplierRepository(self.session)
        self.deliveries = SqlDeliveryRepository(self.session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None and issubclass(exc_type, SQLAlchemyError):
            logger.error(
                "Store operation failed",
                error=exc_type.__name__,
                exc_info=(exc_type, exc, tb),
            )
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self.session.close()
            self.session = None

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
