"""Warehouse management — commands and handler."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.warehouse.warehouse import Warehouse
from shared.repository import get_active_or_raise


@inventory.command(part_of="Warehouse")
class CreateWarehouse:
    """Register a new warehouse."""

    name = String(required=True, max_length=100)
    address = Text()  # JSON-encoded address
    phone = String(max_length=20)
    email = String(max_length=100)
    manager = String(max_length=100)


@inventory.command(part_of="Warehouse")
class UpdateWarehouse:
    """Update warehouse details."""

    warehouse_id = Identifier(required=True)
    name = String(max_length=100)
    address = Text()  # JSON-encoded address
    phone = String(max_length=20)
    email = String(max_length=100)
    manager = String(max_length=100)


@inventory.command(part_of="Warehouse")
class DeactivateWarehouse:
    """Deactivate a warehouse."""

    warehouse_id = Identifier(required=True)


def _decode(address):
    if address is None:
        return None
    return json.loads(address) if isinstance(address, str) else address


@inventory.command_handler(part_of=Warehouse)
class WarehouseManagementHandler:
    @handle(CreateWarehouse)
    def create_warehouse(self, command):
        warehouse = Warehouse.create(
            name=command.name,
            address=_decode(command.address),
            phone=command.phone,
            email=command.email,
            manager=command.manager,
        )
        current_domain.repository_for(Warehouse).add(warehouse)
        return str(warehouse.id)

    @handle(UpdateWarehouse)
    def update_warehouse(self, command):
        warehouse = get_active_or_raise(Warehouse, command.warehouse_id)
        warehouse.update_details(
            name=command.name,
            address=_decode(command.address),
            phone=command.phone,
            email=command.email,
            manager=command.manager,
        )
        current_domain.repository_for(Warehouse).add(warehouse)

    @handle(DeactivateWarehouse)
    def deactivate_warehouse(self, command):
        warehouse = get_active_or_raise(Warehouse, command.warehouse_id)
        warehouse.deactivate()
        current_domain.repository_for(Warehouse).add(warehouse)
