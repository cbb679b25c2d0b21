"""Domain events for the Supplier aggregate."""

from protean.fields import DateTime, Identifier, String

from procurement.domain import procurement


@procurement.event(part_of="Supplier")
class SupplierRegistered:
    __version__ = 1

    supplier_id = Identifier(required=True)
    name = String(required=True)
    contact_person = String()
    registered_at = DateTime(required=True)


@procurement.event(part_of="Supplier")
class SupplierUpdated:
    __version__ = 1

    supplier_id = Identifier(required=True)
    name = String(required=True)
    updated_at = DateTime(required=True)


@procurement.event(part_of="Supplier")
class SupplierDeactivated:
    __version__ = 1

    supplier_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
