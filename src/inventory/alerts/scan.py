"""Low-stock scan — raises alerts for every ledger entry at or below its minimum.

The scan runs as one command, so all alerts it creates are committed in a
single unit of work. It is serialized on the shared alert lock key.
"""

import structlog
from protean import handle
from protean.fields import Boolean
from protean.utils.globals import current_domain

from inventory.alerts.alert import MESSAGE_MAX_LENGTH, AlertType, StockAlert
from inventory.alerts.management import ALERTS_LOCK_KEY, active_alert_for
from inventory.domain import inventory
from inventory.ledger.queries import index_by_id, low_stock_records
from inventory.product.product import Product
from inventory.warehouse.warehouse import Warehouse
from shared.locking import serialized

logger = structlog.get_logger(__name__)

OUT_OF_STOCK_MESSAGE = "Product {product} is out of stock in {warehouse}"
LOW_STOCK_MESSAGE = "Product {product} is running low on stock in {warehouse}"


@inventory.command(part_of="StockAlert")
class ScanLowStock:
    """Check every ledger entry against its product minimum."""

    active_products_only = Boolean(default=False)


def alert_for(record, product, warehouse):
    """The alert a low ledger entry warrants."""
    available = record.available_quantity
    if available == 0:
        alert_type, template = AlertType.OUT_OF_STOCK, OUT_OF_STOCK_MESSAGE
    else:
        alert_type, template = AlertType.LOW_STOCK, LOW_STOCK_MESSAGE

    warehouse_name = warehouse.name if warehouse else str(record.warehouse_id)
    return StockAlert.raise_alert(
        product_id=record.product_id,
        warehouse_id=record.warehouse_id,
        alert_type=alert_type,
        message=template.format(product=product.name, warehouse=warehouse_name)[:MESSAGE_MAX_LENGTH],
        current_stock=available,
        threshold_level=product.minimum_stock_level or 0,
    )


@inventory.command_handler(part_of=StockAlert)
class LowStockScanHandler:
    @serialized(lambda command: ALERTS_LOCK_KEY)
    @handle(ScanLowStock)
    def scan(self, command):
        products = index_by_id(Product)
        if command.active_products_only:
            products = {key: product for key, product in products.items() if product.is_active}
        warehouses = index_by_id(Warehouse)

        repo = current_domain.repository_for(StockAlert)
        created = 0
        for record, product in low_stock_records(products):
            if active_alert_for(record.product_id, record.warehouse_id) is not None:
                continue
            warehouse = warehouses.get(str(record.warehouse_id))
            repo.add(alert_for(record, product, warehouse))
            created += 1

        logger.info("low_stock_scan_completed", alerts_created=created)
        return created
