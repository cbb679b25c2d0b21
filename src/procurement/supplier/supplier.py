"""Supplier aggregate (CQRS) — a vendor purchase orders are placed with.

Suppliers are deactivated rather than deleted so purchase orders always
reference a valid supplier.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, String

from procurement.domain import procurement
from procurement.supplier.events import SupplierDeactivated, SupplierRegistered, SupplierUpdated
from shared.errors import InvalidTransition

_UPDATABLE_FIELDS = (
    "name",
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


@procurement.aggregate
class Supplier:
    name = String(required=True, max_length=100)
    street = String(max_length=200)
    city = String(max_length=100)
    state = String(max_length=50)
    zip_code = String(max_length=20)
    country = String(max_length=50, default="USA")
    phone = String(max_length=20)
    email = String(max_length=100)
    contact_person = String(max_length=100)
    tax_id = String(max_length=50)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def register(cls, name, **details):
        now = datetime.now(UTC)
        supplier = cls(name=name, created_at=now, updated_at=now, **details)
        supplier.raise_(
            SupplierRegistered(
                supplier_id=str(supplier.id),
                name=name,
                contact_person=supplier.contact_person,
                registered_at=now,
            )
        )
        return supplier

    def update_details(self, **changes):
        for field_name in _UPDATABLE_FIELDS:
            value = changes.get(field_name)
            if value is not None:
                setattr(self, field_name, value)
        self.updated_at = datetime.now(UTC)
        self.raise_(SupplierUpdated(supplier_id=str(self.id), name=self.name, updated_at=self.updated_at))

    def deactivate(self):
        if not self.is_active:
            raise InvalidTransition("Supplier is already inactive", details={"supplier_id": str(self.id)})
        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(SupplierDeactivated(supplier_id=str(self.id), deactivated_at=self.updated_at))
