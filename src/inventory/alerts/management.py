"""Stock alert management — manual raise, lifecycle transitions and removal.

Every alert handler is serialized on ``ALERTS_LOCK_KEY``, the same key the
low-stock scan holds, so the Active-alert existence check and the insert are
atomic with respect to each other.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.alerts.alert import AlertStatus, StockAlert
from inventory.domain import inventory
from inventory.product.product import Product
from inventory.warehouse.warehouse import Warehouse
from shared.errors import DuplicateKey
from shared.locking import serialized
from shared.repository import fetch_first, get_or_raise

logger = structlog.get_logger(__name__)

ALERTS_LOCK_KEY = "stock-alerts"


def active_alert_for(product_id, warehouse_id):
    """The Active alert for the pair, or None."""
    return fetch_first(
        StockAlert,
        product_id=str(product_id),
        warehouse_id=str(warehouse_id),
        status=AlertStatus.ACTIVE.value,
    )


@inventory.command(part_of="StockAlert")
class RaiseStockAlert:
    product_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    alert_type = String(required=True, max_length=20)
    message = String(required=True, max_length=200)
    threshold_level = Integer()
    current_stock = Integer()


@inventory.command(part_of="StockAlert")
class AcknowledgeStockAlert:
    stock_alert_id = Identifier(required=True)
    acknowledged_by = String(required=True, max_length=100)


@inventory.command(part_of="StockAlert")
class ResolveStockAlert:
    stock_alert_id = Identifier(required=True)
    resolution_notes = String(max_length=500)


@inventory.command(part_of="StockAlert")
class DeleteStockAlert:
    stock_alert_id = Identifier(required=True)


@inventory.command_handler(part_of=StockAlert)
class StockAlertManagementHandler:
    @serialized(lambda command: ALERTS_LOCK_KEY)
    @handle(RaiseStockAlert)
    def raise_alert(self, command):
        get_or_raise(Product, command.product_id)
        get_or_raise(Warehouse, command.warehouse_id)

        existing = active_alert_for(command.product_id, command.warehouse_id)
        if existing is not None:
            raise DuplicateKey(
                "An active alert already exists for this product and warehouse",
                details={"stock_alert_id": str(existing.id)},
            )

        alert = StockAlert.raise_alert(
            product_id=command.product_id,
            warehouse_id=command.warehouse_id,
            alert_type=command.alert_type,
            message=command.message,
            current_stock=command.current_stock,
            threshold_level=command.threshold_level,
        )
        current_domain.repository_for(StockAlert).add(alert)
        logger.info("stock_alert_raised", stock_alert_id=str(alert.id), alert_type=alert.alert_type)
        return str(alert.id)

    @serialized(lambda command: ALERTS_LOCK_KEY)
    @handle(AcknowledgeStockAlert)
    def acknowledge(self, command):
        alert = get_or_raise(StockAlert, command.stock_alert_id, label="Stock alert")
        alert.acknowledge(command.acknowledged_by)
        current_domain.repository_for(StockAlert).add(alert)
        return alert

    @serialized(lambda command: ALERTS_LOCK_KEY)
    @handle(ResolveStockAlert)
    def resolve(self, command):
        alert = get_or_raise(StockAlert, command.stock_alert_id, label="Stock alert")
        alert.resolve(command.resolution_notes)
        current_domain.repository_for(StockAlert).add(alert)
        return alert

    @serialized(lambda command: ALERTS_LOCK_KEY)
    @handle(DeleteStockAlert)
    def delete(self, command):
        alert = get_or_raise(StockAlert, command.stock_alert_id, label="Stock alert")
        current_domain.repository_for(StockAlert)._dao.delete(alert)
