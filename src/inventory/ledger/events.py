"""Domain events for the InventoryRecord aggregate.

Each event is a versioned fact about one ledger movement. Amounts are always
positive; the event type carries the direction.
"""

from protean.fields import DateTime, Identifier, Integer, String

from inventory.domain import inventory


@inventory.event(part_of="InventoryRecord")
class InventoryRecordCreated:
    """A ledger entry was opened for a product at a warehouse."""

    __version__ = 1

    inventory_record_id = Identifier(required=True)
    product_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    quantity = Integer(default=0)
    reserved_quantity = Integer(default=0)
    created_at = DateTime(required=True)


@inventory.event(part_of="InventoryRecord")
class StockAdded:
    """On-hand stock increased."""

    __version__ = 1

    inventory_record_id = Identifier(required=True)
    amount = Integer(required=True)
    previous_quantity = Integer(default=0)
    new_quantity = Integer(default=0)
    new_available = Integer(default=0)
    adjusted_at = DateTime(required=True)


@inventory.event(part_of="InventoryRecord")
class StockRemoved:
    """On-hand stock decreased."""

    __version__ = 1

    inventory_record_id = Identifier(required=True)
    amount = Integer(required=True)
    previous_quantity = Integer(default=0)
    new_quantity = Integer(default=0)
    new_available = Integer(default=0)
    adjusted_at = DateTime(required=True)


@inventory.event(part_of="InventoryRecord")
class StockReserved:
    """A soft hold was placed on available stock."""

    __version__ = 1

    inventory_record_id = Identifier(required=True)
    amount = Integer(required=True)
    previous_reserved = Integer(default=0)
    new_reserved = Integer(default=0)
    new_available = Integer(default=0)
    adjusted_at = DateTime(required=True)


@inventory.event(part_of="InventoryRecord")
class StockReleased:
    """Reserved stock was returned to available."""

    __version__ = 1

    inventory_record_id = Identifier(required=True)
    amount = Integer(required=True)
    previous_reserved = Integer(default=0)
    new_reserved = Integer(default=0)
    new_available = Integer(default=0)
    adjusted_at = DateTime(required=True)


@inventory.event(part_of="InventoryRecord")
class InventoryRecordUpdated:
    """Bin location or notes changed."""

    __version__ = 1

    inventory_record_id = Identifier(required=True)
    location = String()
    notes = String()
    updated_at = DateTime(required=True)


