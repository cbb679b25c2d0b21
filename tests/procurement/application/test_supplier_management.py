"""Application tests for supplier management commands."""

import pytest
from procurement.supplier.management import DeactivateSupplier, RegisterSupplier, UpdateSupplier
from procurement.supplier.supplier import Supplier
from protean import current_domain
from shared.errors import NotFound


def _register(**overrides):
    defaults = {"name": "ABC Electronics", "city": "Chicago", "contact_person": "John Smith"}
    defaults.update(overrides)
    return current_domain.process(RegisterSupplier(**defaults), asynchronous=False)


class TestSupplierManagement:
    def test_register_persists(self):
        supplier = current_domain.repository_for(Supplier).get(_register())
        assert supplier.contact_person == "John Smith"
        assert supplier.city == "Chicago"

    def test_update(self):
        supplier_id = _register()
        current_domain.process(UpdateSupplier(supplier_id=supplier_id, tax_id="12-3456789"), asynchronous=False)
        supplier = current_domain.repository_for(Supplier).get(supplier_id)
        assert supplier.tax_id == "12-3456789"
        assert supplier.name == "ABC Electronics"

    def test_deactivate(self):
        supplier_id = _register()
        current_domain.process(DeactivateSupplier(supplier_id=supplier_id), asynchronous=False)
        assert current_domain.repository_for(Supplier).get(supplier_id).is_active is False

    def test_unknown_supplier(self):
        with pytest.raises(NotFound):
            current_domain.process(DeactivateSupplier(supplier_id="missing"), asynchronous=False)

    def test_deactivated_supplier_cannot_be_updated(self):
        supplier_id = _register()
        current_domain.process(DeactivateSupplier(supplier_id=supplier_id), asynchronous=False)
        with pytest.raises(NotFound):
            current_domain.process(UpdateSupplier(supplier_id=supplier_id, phone="555-0000"), asynchronous=False)
