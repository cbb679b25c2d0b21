"""Warehouse aggregate (CQRS) — physical location where inventory is stored.

Warehouses are reference data for the stock ledger: inventory records point
at them by id and alert messages quote their names. A warehouse is never
hard-deleted; it is deactivated instead so ledger rows and alerts keep a
valid reference.
"""

import json
from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, String, ValueObject

from inventory.domain import inventory
from inventory.warehouse.events import (
    WarehouseCreated,
    WarehouseDeactivated,
    WarehouseUpdated,
)
from shared.errors import InvalidTransition


@inventory.value_object(part_of="Warehouse")
class WarehouseAddress:
    """Postal address of a warehouse."""

    street = String(max_length=200)
    city = String(max_length=100)
    state = String(max_length=50)
    zip_code = String(max_length=20)
    country = String(max_length=50, default="USA")


@inventory.aggregate
class Warehouse:
    """A physical location where inventory is stored."""

    name = String(required=True, max_length=100)
    address = ValueObject(WarehouseAddress)
    phone = String(max_length=20)
    email = String(max_length=100)
    manager = String(max_length=100)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def location(self):
        """``"City, State"`` as shown on warehouse summaries."""
        if not self.address:
            return ""
        return ", ".join(part for part in (self.address.city, self.address.state) if part)

    @classmethod
    def create(cls, name, address=None, phone=None, email=None, manager=None):
        """Create a new warehouse."""
        now = datetime.now(UTC)
        if isinstance(address, dict):
            address = WarehouseAddress(**address) if any(address.values()) else None
        warehouse = cls(
            name=name,
            address=address,
            phone=phone,
            email=email,
            manager=manager,
            created_at=now,
            updated_at=now,
        )
        warehouse.raise_(
            WarehouseCreated(
                warehouse_id=str(warehouse.id),
                name=name,
                address=json.dumps(warehouse.address.to_dict() if warehouse.address else {}),
                created_at=now,
            )
        )
        return warehouse

    def update_details(self, name=None, address=None, phone=None, email=None, manager=None):
        """Update the descriptive fields that were supplied."""
        if name is not None:
            self.name = name
        if address is not None:
            self.address = WarehouseAddress(**address) if isinstance(address, dict) else address
        if phone is not None:
            self.phone = phone
        if email is not None:
            self.email = email
        if manager is not None:
            self.manager = manager
        self.updated_at = datetime.now(UTC)
        self.raise_(
            WarehouseUpdated(
                warehouse_id=str(self.id),
                name=self.name,
                updated_at=self.updated_at,
            )
        )

    def deactivate(self):
        """Deactivate the warehouse."""
        if not self.is_active:
            raise InvalidTransition("Warehouse is already inactive", details={"warehouse_id": str(self.id)})
        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(
            WarehouseDeactivated(
                warehouse_id=str(self.id),
                deactivated_at=self.updated_at,
            )
        )
