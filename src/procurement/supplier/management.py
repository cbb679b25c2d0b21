"""Supplier management — commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from procurement.domain import procurement
from procurement.supplier.supplier import Supplier
from shared.repository import get_active_or_raise

_DETAIL_FIELDS = (
    "street",
    "city",
    "state",
    "zip_code",
    "country",
    "phone",
    "email",
    "contact_person",
    "tax_id",
)


@procurement.command(part_of="Supplier")
class RegisterSupplier:
    name = String(required=True, max_length=100)
    street = String(max_length=200)
    city = String(max_length=100)
    state = String(max_length=50)
    zip_code = String(max_length=20)
    country = String(max_length=50)
    phone = String(max_length=20)
    email = String(max_length=100)
    contact_person = String(max_length=100)
    tax_id = String(max_length=50)


@procurement.command(part_of="Supplier")
class UpdateSupplier:
    supplier_id = Identifier(required=True)
    name = String(max_length=100)
    street = String(max_length=200)
    city = String(max_length=100)
    state = String(max_length=50)
    zip_code = String(max_length=20)
    country = String(max_length=50)
    phone = String(max_length=20)
    email = String(max_length=100)
    contact_person = String(max_length=100)
    tax_id = String(max_length=50)


@procurement.command(part_of="Supplier")
class DeactivateSupplier:
    supplier_id = Identifier(required=True)


@procurement.command_handler(part_of=Supplier)
class SupplierManagementHandler:
    @handle(RegisterSupplier)
    def register_supplier(self, command):
        details = {name: getattr(command, name) for name in _DETAIL_FIELDS if getattr(command, name) is not None}
        supplier = Supplier.register(name=command.name, **details)
        current_domain.repository_for(Supplier).add(supplier)
        return str(supplier.id)

    @handle(UpdateSupplier)
    def update_supplier(self, command):
        supplier = get_active_or_raise(Supplier, command.supplier_id)
        supplier.update_details(name=command.name, **{name: getattr(command, name) for name in _DETAIL_FIELDS})
        current_domain.repository_for(Supplier).add(supplier)

    @handle(DeactivateSupplier)
    def deactivate_supplier(self, command):
        supplier = get_active_or_raise(Supplier, command.supplier_id)
        supplier.deactivate()
        current_domain.repository_for(Supplier).add(supplier)
