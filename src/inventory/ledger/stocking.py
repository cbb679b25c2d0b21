"""Ledger entry lifecycle — open, annotate and remove inventory records.

A product may hold at most one record per warehouse. Creation is serialized
on the ``(product_id, warehouse_id)`` pair so the existence check and the
insert cannot interleave with another creation for the same pair. Updates
and deletes share the per-record key with stock adjustments.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.ledger.record import InventoryRecord
from inventory.product.product import Product
from inventory.warehouse.warehouse import Warehouse
from shared.errors import DuplicateKey
from shared.locking import serialized
from shared.repository import fetch_first, get_or_raise

logger = structlog.get_logger(__name__)


def pair_key(product_id, warehouse_id) -> str:
    return f"inventory-pair:{product_id}:{warehouse_id}"


def record_key(inventory_record_id) -> str:
    return f"inventory-record:{inventory_record_id}"


@inventory.command(part_of="InventoryRecord")
class CreateInventoryRecord:
    product_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    quantity = Integer(default=0)
    reserved_quantity = Integer(default=0)
    location = String(max_length=100)
    notes = String(max_length=500)


@inventory.command(part_of="InventoryRecord")
class UpdateInventoryRecord:
    inventory_record_id = Identifier(required=True)
    location = String(max_length=100)
    notes = String(max_length=500)


@inventory.command(part_of="InventoryRecord")
class DeleteInventoryRecord:
    inventory_record_id = Identifier(required=True)


@inventory.command_handler(part_of=InventoryRecord)
class InventoryRecordHandler:
    @serialized(lambda command: pair_key(command.product_id, command.warehouse_id))
    @handle(CreateInventoryRecord)
    def create_record(self, command):
        get_or_raise(Product, command.product_id)
        get_or_raise(Warehouse, command.warehouse_id)

        existing = fetch_first(
            InventoryRecord,
            product_id=str(command.product_id),
            warehouse_id=str(command.warehouse_id),
        )
        if existing is not None:
            raise DuplicateKey(
                "Inventory record already exists for this product and warehouse",
                details={
                    "product_id": str(command.product_id),
                    "warehouse_id": str(command.warehouse_id),
                    "inventory_record_id": str(existing.id),
                },
            )

        record = InventoryRecord.create(
            product_id=command.product_id,
            warehouse_id=command.warehouse_id,
            quantity=command.quantity,
            reserved_quantity=command.reserved_quantity,
            location=command.location,
            notes=command.notes,
        )
        current_domain.repository_for(InventoryRecord).add(record)
        logger.info(
            "inventory_record_created",
            inventory_record_id=str(record.id),
            product_id=str(command.product_id),
            warehouse_id=str(command.warehouse_id),
            quantity=record.quantity,
        )
        return str(record.id)

    @serialized(lambda command: record_key(command.inventory_record_id))
    @handle(UpdateInventoryRecord)
    def update_record(self, command):
        record = get_or_raise(InventoryRecord, command.inventory_record_id, label="Inventory record")
        record.update_details(location=command.location, notes=command.notes)
        current_domain.repository_for(InventoryRecord).add(record)

    @serialized(lambda command: record_key(command.inventory_record_id))
    @handle(DeleteInventoryRecord)
    def delete_record(self, command):
        record = get_or_raise(InventoryRecord, command.inventory_record_id, label="Inventory record")
        current_domain.repository_for(InventoryRecord)._dao.delete(record)
        logger.info("inventory_record_deleted", inventory_record_id=str(record.id))
