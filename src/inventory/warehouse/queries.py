"""Warehouse lookups; deactivated warehouses are hidden."""

from inventory.warehouse.warehouse import Warehouse
from shared.repository import fetch_all, get_active_or_raise


def active_warehouses() -> list[Warehouse]:
    return sorted(fetch_all(Warehouse, is_active=True), key=lambda w: w.name or "")


def get_warehouse(warehouse_id) -> Warehouse:
    return get_active_or_raise(Warehouse, warehouse_id)
