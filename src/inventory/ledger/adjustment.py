"""Stock adjustment — the single command through which quantities move.

Adjustments are serialized per record, so two reservations against the same
record are checked one after the other and cannot both take the same units.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.record import InventoryRecord
from inventory.ledger.stocking import record_key
from shared.locking import serialized
from shared.repository import get_or_raise

logger = structlog.get_logger(__name__)


@inventory.command(part_of="InventoryRecord")
class AdjustInventory:
    """Apply an ``add`` / ``subtract`` / ``reserve`` / ``release`` movement."""

    inventory_record_id = Identifier(required=True)
    adjustment_type = String(required=True, max_length=20)
    amount = Integer()


@inventory.command_handler(part_of=InventoryRecord)
class InventoryAdjustmentHandler:
    @serialized(lambda command: record_key(command.inventory_record_id))
    @handle(AdjustInventory)
    def adjust(self, command):
        record = get_or_raise(InventoryRecord, command.inventory_record_id, label="Inventory record")
        record.adjust(command.adjustment_type, command.amount)
        current_domain.repository_for(InventoryRecord).add(record)

        logger.info(
            "inventory_adjusted",
            inventory_record_id=str(record.id),
            adjustment_type=command.adjustment_type,
            amount=command.amount,
            quantity=record.quantity,
            reserved_quantity=record.reserved_quantity,
        )
        return record
