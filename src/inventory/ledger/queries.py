"""Read-side queries over the ledger.

Listings are joined with product and warehouse names in memory; the data set
per tenant is small enough that the ledger is read in full.
"""

from inventory.ledger.record import InventoryRecord
from inventory.product.product import Product
from inventory.warehouse.warehouse import Warehouse
from shared.repository import fetch_all, get_or_raise


def index_by_id(aggregate_cls) -> dict:
    return {str(item.id): item for item in fetch_all(aggregate_cls)}


def _sort_key(products, warehouses):
    def key(record):
        product = products.get(str(record.product_id))
        warehouse = warehouses.get(str(record.warehouse_id))
        return (
            product.name if product else "",
            warehouse.name if warehouse else "",
            str(record.id),
        )

    return key


def get_record(inventory_record_id) -> InventoryRecord:
    return get_or_raise(InventoryRecord, inventory_record_id, label="Inventory record")


def list_records(**filters) -> list[InventoryRecord]:
    """All records matching ``filters``, ordered by product name then warehouse name."""
    records = fetch_all(InventoryRecord, **filters)
    return sorted(records, key=_sort_key(index_by_id(Product), index_by_id(Warehouse)))


def records_for_product(product_id) -> list[InventoryRecord]:
    get_or_raise(Product, product_id)
    return list_records(product_id=str(product_id))


def records_for_warehouse(warehouse_id) -> list[InventoryRecord]:
    get_or_raise(Warehouse, warehouse_id)
    return list_records(warehouse_id=str(warehouse_id))


def low_stock_records(products: dict | None = None) -> list[tuple[InventoryRecord, Product]]:
    """Records whose available quantity is at or below the product minimum.

    Returned as ``(record, product)`` pairs ordered by available quantity,
    lowest first. Records of unknown products are skipped.
    """
    products = products if products is not None else index_by_id(Product)
    pairs = []
    for record in fetch_all(InventoryRecord):
        product = products.get(str(record.product_id))
        if product is None:
            continue
        if record.available_quantity <= (product.minimum_stock_level or 0):
            pairs.append((record, product))
    pairs.sort(key=lambda pair: (pair[0].available_quantity, pair[1].name or ""))
    return pairs
