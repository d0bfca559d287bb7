"""Counterparties of an order: customers buy, suppliers sell to us."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from scm.domain.exceptions import ValidationError


@dataclass
class Customer:
    id: str
    name: str
    email: str

    @staticmethod
    def create(name: str, email: str) -> Customer:
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        if not email or "@" not in email:
            raise ValidationError(f"Invalid customer email: {email!r}")
        return Customer(id=str(uuid.uuid4()), name=name.strip(), email=email.strip().lower())


@dataclass
class Supplier:
    id: str
    name: str
    email: str | None = None
    contact_name: str | None = None

    @staticmethod
    def create(
        name: str, email: str | None = None, contact_name: str | None = None
    ) -> Supplier:
        if not name or not name.strip():
            raise ValidationError("Supplier name is required")
        return Supplier(
            id=str(uuid.uuid4()), name=name.strip(), email=email, contact_name=contact_name
        )
