"""Tests for the Supplier aggregate."""

import pytest
from procurement.supplier.supplier import Supplier
from shared.errors import InvalidTransition


class TestSupplier:
    def test_register(self):
        supplier = Supplier.register(name="ABC Electronics", contact_person="John Smith", city="Chicago")
        assert supplier.name == "ABC Electronics"
        assert supplier.country == "USA"
        assert supplier.is_active is True

    def test_update_details(self):
        supplier = Supplier.register(name="ABC Electronics")
        supplier.update_details(phone="555-111-2222", name=None)
        assert supplier.phone == "555-111-2222"
        assert supplier.name == "ABC Electronics"

    def test_deactivate_once(self):
        supplier = Supplier.register(name="XYZ Manufacturing")
        supplier.deactivate()
        assert supplier.is_active is False
        with pytest.raises(InvalidTransition):
            supplier.deactivate()
