"""Integration tests for catalog and counterparty maintenance."""

import pytest

from scm.application.add_location import AddLocationHandler
from scm.application.add_party import AddCustomerHandler, AddSupplierHandler
from scm.application.add_product import AddProductHandler
from scm.application.update_product import UpdateProductHandler
from scm.domain.exceptions import EntityNotFoundError, ValidationError
from scm.domain.model.location import LocationType


class TestProducts:

    def test_add_normalizes_sku(self, uow):
        product = AddProductHandler(uow).handle(" bolt-1 ", "Bolt", "0.25")
        assert product.sku == "BOLT-1"
        with uow:
            assert uow.products.get_by_sku("BOLT-1").name == "Bolt"

    def test_duplicate_sku_rejected(self, uow):
        AddProductHandler(uow).handle("BOLT-1", "Bolt", "0.25")
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(uow).handle("bolt-1", "Other Bolt", "0.30")

    def test_negative_price_rejected(self, uow):
        with pytest.raises(ValidationError):
            AddProductHandler(uow).handle("NUT-1", "Nut", "-1")

    def test_update_price(self, uow):
        product = AddProductHandler(uow).handle("NUT-1", "Nut", "0.10")
        UpdateProductHandler(uow).handle(product.id, "0.15")
        with uow:
            assert str(uow.products.get_by_id(product.id).unit_price) == "$0.15"

    def test_update_unknown(self, uow):
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(uow).handle("missing", "1.00")


class TestLocations:

    def test_add_and_list(self, uow):
        AddLocationHandler(uow).handle("North DC", "distribution_center", "Ogdenville")
        with uow:
            [loc] = uow.locations.list_all()
        assert loc.type == LocationType.DISTRIBUTION_CENTER
        assert loc.city == "Ogdenville"

    def test_invalid_type(self, uow):
        with pytest.raises(ValidationError, match="Invalid location type"):
            AddLocationHandler(uow).handle("Somewhere", "castle")


class TestParties:

    def test_customer_email_is_lowercased(self, uow):
        customer = AddCustomerHandler(uow).handle("Bob", "Bob@Example.COM")
        assert customer.email == "bob@example.com"

    def test_duplicate_customer_email_rejected(self, uow):
        AddCustomerHandler(uow).handle("Bob", "bob@example.com")
        with pytest.raises(ValidationError, match="already exists"):
            AddCustomerHandler(uow).handle("Robert", "BOB@example.com")

    def test_invalid_email_rejected(self, uow):
        with pytest.raises(ValidationError, match="Invalid customer email"):
            AddCustomerHandler(uow).handle("Bob", "not-an-email")

    def test_supplier(self, uow):
        supplier = AddSupplierHandler(uow).handle("Parts Co", contact_name="Pat")
        with uow:
            assert uow.suppliers.get_by_id(supplier.id).contact_name == "Pat"
