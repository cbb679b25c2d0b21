"""Domain events for the Warehouse aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from inventory.domain import inventory


@inventory.event(part_of="Warehouse")
class WarehouseCreated:
    """A new warehouse was registered."""

    __version__ = 1

    warehouse_id = Identifier(required=True)
    name = String(required=True)
    address = Text()  # JSON-serialized address
    created_at = DateTime(required=True)


@inventory.event(part_of="Warehouse")
class WarehouseUpdated:
    """Warehouse details were updated."""

    __version__ = 1

    warehouse_id = Identifier(required=True)
    name = String(required=True)
    updated_at = DateTime(required=True)


@inventory.event(part_of="Warehouse")
class WarehouseDeactivated:
    """A warehouse was deactivated."""

    __version__ = 1

    warehouse_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
