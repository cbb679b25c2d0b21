"""Inventory reporting — summaries computed on demand from repository reads.

Nothing here mutates state or takes locks. Valuations use product ``cost``.
"""

import math
from collections import defaultdict

from inventory.ledger.queries import index_by_id, low_stock_records
from inventory.ledger.record import InventoryRecord
from inventory.product.product import Product
from inventory.warehouse.warehouse import Warehouse
from shared.repository import fetch_all

DAILY_USAGE_ESTIMATE = 10
UNCATEGORIZED = "Uncategorized"
TOP_PRODUCTS_LIMIT = 10


def days_until_out_of_stock(available: int) -> int:
    """Rough runway at ``DAILY_USAGE_ESTIMATE`` units a day; 0 once nothing is available."""
    if available <= 0:
        return 0
    return math.ceil(available / DAILY_USAGE_ESTIMATE)


def _value(record, product) -> float:
    return (record.quantity or 0) * ((product.cost or 0.0) if product else 0.0)


def _is_low(record, product) -> bool:
    return product is not None and record.available_quantity <= (product.minimum_stock_level or 0)


def inventory_summary() -> dict:
    products = index_by_id(Product)
    warehouses = fetch_all(Warehouse)
    records = fetch_all(InventoryRecord)

    low = out = 0
    total_value = 0.0
    for record in records:
        product = products.get(str(record.product_id))
        total_value += _value(record, product)
        if _is_low(record, product):
            low += 1
        if record.available_quantity == 0:
            out += 1

    return {
        "total_products": sum(1 for p in products.values() if p.is_active),
        "total_warehouses": sum(1 for w in warehouses if w.is_active),
        "total_inventory_records": len(records),
        "low_stock_items": low,
        "out_of_stock_items": out,
        "total_inventory_value": round(total_value, 2),
    }


def low_stock_report() -> list[dict]:
    """One row per low ledger entry, ordered by current (available) stock."""
    warehouses = index_by_id(Warehouse)
    rows = []
    for record, product in low_stock_records():
        warehouse = warehouses.get(str(record.warehouse_id))
        available = record.available_quantity
        rows.append(
            {
                "inventory_record_id": str(record.id),
                "product_id": str(record.product_id),
                "product_name": product.name,
                "sku": product.sku,
                "warehouse_id": str(record.warehouse_id),
                "warehouse_name": warehouse.name if warehouse else None,
                "current_stock": available,
                "minimum_stock_level": product.minimum_stock_level or 0,
                "days_until_out_of_stock": days_until_out_of_stock(available),
            }
        )
    return rows


def inventory_value_report() -> list[dict]:
    """Stock value grouped by product category and warehouse."""
    products = index_by_id(Product)
    warehouses = index_by_id(Warehouse)

    groups = defaultdict(lambda: {"total_quantity": 0, "total_value": 0.0, "costs": []})
    for record in fetch_all(InventoryRecord):
        product = products.get(str(record.product_id))
        if product is None:
            continue
        warehouse = warehouses.get(str(record.warehouse_id))
        key = (product.category or UNCATEGORIZED, warehouse.name if warehouse else str(record.warehouse_id))
        group = groups[key]
        group["total_quantity"] += record.quantity or 0
        group["total_value"] += _value(record, product)
        group["costs"].append(product.cost or 0.0)

    report = []
    for (category, warehouse_name), group in sorted(groups.items()):
        report.append(
            {
                "category": category,
                "warehouse_name": warehouse_name,
                "total_quantity": group["total_quantity"],
                "total_value": round(group["total_value"], 2),
                "average_cost": round(sum(group["costs"]) / len(group["costs"]), 2),
            }
        )
    return report


def top_products_by_value(limit: int = TOP_PRODUCTS_LIMIT) -> list[dict]:
    products = index_by_id(Product)

    totals = defaultdict(lambda: {"total_quantity": 0, "total_value": 0.0, "warehouses": set()})
    for record in fetch_all(InventoryRecord):
        product = products.get(str(record.product_id))
        if product is None:
            continue
        entry = totals[str(product.id)]
        entry["total_quantity"] += record.quantity or 0
        entry["total_value"] += _value(record, product)
        entry["warehouses"].add(str(record.warehouse_id))

    ranked = sorted(totals.items(), key=lambda item: item[1]["total_value"], reverse=True)[:limit]
    return [
        {
            "product_id": product_id,
            "product_name": products[product_id].name,
            "sku": products[product_id].sku,
            "total_quantity": entry["total_quantity"],
            "total_value": round(entry["total_value"], 2),
            "warehouse_count": len(entry["warehouses"]),
        }
        for product_id, entry in ranked
    ]


def warehouse_summary() -> list[dict]:
    products = index_by_id(Product)
    records_by_warehouse = defaultdict(list)
    for record in fetch_all(InventoryRecord):
        records_by_warehouse[str(record.warehouse_id)].append(record)

    summary = []
    for warehouse in sorted(fetch_all(Warehouse), key=lambda w: w.name or ""):
        if not warehouse.is_active:
            continue
        records = records_by_warehouse.get(str(warehouse.id), [])
        summary.append(
            {
                "warehouse_id": str(warehouse.id),
                "warehouse_name": warehouse.name,
                "location": warehouse.location,
                "product_count": len({str(r.product_id) for r in records}),
                "total_quantity": sum(r.quantity or 0 for r in records),
                "total_value": round(sum(_value(r, products.get(str(r.product_id))) for r in records), 2),
                "low_stock_count": sum(1 for r in records if _is_low(r, products.get(str(r.product_id)))),
                "out_of_stock_count": sum(1 for r in records if r.available_quantity == 0),
            }
        )
    return summary
