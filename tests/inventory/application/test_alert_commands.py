"""Application tests for the low-stock scan and alert management commands."""

import json
import threading

import pytest
from inventory.alerts.alert import AlertStatus, AlertType, StockAlert
from inventory.alerts.management import (
    AcknowledgeStockAlert,
    DeleteStockAlert,
    RaiseStockAlert,
    ResolveStockAlert,
)
from inventory.alerts.queries import active_alerts, alert_summary, alerts_by_status, alerts_by_type, list_alerts
from inventory.alerts.scan import ScanLowStock
from inventory.domain import inventory
from inventory.ledger.adjustment import AdjustInventory
from inventory.ledger.stocking import CreateInventoryRecord
from inventory.product.management import CreateProduct, DeactivateProduct
from inventory.warehouse.management import CreateWarehouse
from protean import current_domain
from shared.errors import DuplicateKey, InvalidArgument, InvalidTransition


def _setup_stock(quantity=8, reserved_quantity=0, minimum_stock_level=10, name="Laptop", sku="LAPTOP-001"):
    product_id = current_domain.process(
        CreateProduct(name=name, sku=sku, minimum_stock_level=minimum_stock_level),
        asynchronous=False,
    )
    warehouse_id = current_domain.process(
        CreateWarehouse(name="Main", address=json.dumps({"city": "New York"})),
        asynchronous=False,
    )
    record_id = current_domain.process(
        CreateInventoryRecord(
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
            reserved_quantity=reserved_quantity,
        ),
        asynchronous=False,
    )
    return product_id, warehouse_id, record_id


def _scan():
    return current_domain.process(ScanLowStock(), asynchronous=False)


class TestLowStockScan:
    def test_low_stock_raises_one_alert(self):
        product_id, warehouse_id, _ = _setup_stock(quantity=8, minimum_stock_level=10)

        assert _scan() == 1

        [alert] = list_alerts()
        assert alert.alert_type == AlertType.LOW_STOCK.value
        assert alert.status == AlertStatus.ACTIVE.value
        assert alert.current_stock == 8
        assert alert.threshold_level == 10
        assert alert.message == "Product Laptop is running low on stock in Main"
        assert str(alert.product_id) == product_id
        assert str(alert.warehouse_id) == warehouse_id

    def test_fully_reserved_is_out_of_stock(self):
        _setup_stock(quantity=5, reserved_quantity=5, minimum_stock_level=10)

        assert _scan() == 1

        [alert] = list_alerts()
        assert alert.alert_type == AlertType.OUT_OF_STOCK.value
        assert alert.current_stock == 0
        assert alert.message == "Product Laptop is out of stock in Main"

    def test_rescan_without_changes_creates_nothing(self):
        _setup_stock(quantity=8)
        assert _scan() == 1
        assert _scan() == 0
        assert len(list_alerts()) == 1

    def test_healthy_stock_raises_nothing(self):
        _setup_stock(quantity=50, minimum_stock_level=10)
        assert _scan() == 0

    def test_acknowledged_alert_does_not_block_new_one(self):
        _setup_stock(quantity=8)
        _scan()
        [alert] = list_alerts()
        current_domain.process(AcknowledgeStockAlert(stock_alert_id=str(alert.id), acknowledged_by="manager"), asynchronous=False)

        assert _scan() == 1
        assert len(active_alerts()) == 1

    def test_active_products_only_skips_deactivated(self):
        product_id, _, _ = _setup_stock(quantity=8)
        current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)

        assert current_domain.process(ScanLowStock(active_products_only=True), asynchronous=False) == 0
        assert _scan() == 1

    def test_stock_movement_then_rescan(self):
        _, _, record_id = _setup_stock(quantity=20, minimum_stock_level=10)
        assert _scan() == 0
        current_domain.process(
            AdjustInventory(inventory_record_id=record_id, adjustment_type="subtract", amount=15),
            asynchronous=False,
        )
        assert _scan() == 1

    def test_concurrent_scans_create_single_alert(self):
        _setup_stock(quantity=8)
        results = []

        def worker():
            with inventory.domain_context():
                results.append(_scan())

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sorted(results) == [0, 0, 0, 1]
        assert len(list_alerts()) == 1


class TestAlertManagement:
    def _raise(self, product_id, warehouse_id, alert_type="LowStock"):
        command = RaiseStockAlert(
            product_id=product_id,
            warehouse_id=warehouse_id,
            alert_type=alert_type,
            message="Manual check",
            current_stock=8,
            threshold_level=10,
        )
        return current_domain.process(command, asynchronous=False)

    def test_manual_alert_honours_single_active_rule(self):
        product_id, warehouse_id, _ = _setup_stock()
        self._raise(product_id, warehouse_id)
        with pytest.raises(DuplicateKey):
            self._raise(product_id, warehouse_id)

    def test_scan_skips_pair_with_manual_alert(self):
        product_id, warehouse_id, _ = _setup_stock()
        self._raise(product_id, warehouse_id)
        assert _scan() == 0

    def test_full_lifecycle(self):
        product_id, warehouse_id, _ = _setup_stock()
        alert_id = self._raise(product_id, warehouse_id)

        acknowledged = current_domain.process(AcknowledgeStockAlert(stock_alert_id=alert_id, acknowledged_by="manager"), asynchronous=False)
        assert acknowledged.status == AlertStatus.ACKNOWLEDGED.value

        resolved = current_domain.process(ResolveStockAlert(stock_alert_id=alert_id, resolution_notes="Restocked"), asynchronous=False)
        assert resolved.status == AlertStatus.RESOLVED.value

        stored = current_domain.repository_for(StockAlert).get(alert_id)
        assert stored.resolution_notes == "Restocked"

    def test_acknowledging_resolved_alert_rejected(self):
        product_id, warehouse_id, _ = _setup_stock()
        alert_id = self._raise(product_id, warehouse_id)
        for command in (
            AcknowledgeStockAlert(stock_alert_id=alert_id, acknowledged_by="manager"),
            ResolveStockAlert(stock_alert_id=alert_id),
        ):
            current_domain.process(command, asynchronous=False)

        with pytest.raises(InvalidTransition):
            current_domain.process(
                AcknowledgeStockAlert(stock_alert_id=alert_id, acknowledged_by="manager"),
                asynchronous=False,
            )

    def test_delete_alert(self):
        product_id, warehouse_id, _ = _setup_stock()
        alert_id = self._raise(product_id, warehouse_id)
        current_domain.process(DeleteStockAlert(stock_alert_id=alert_id), asynchronous=False)
        assert list_alerts() == []


class TestAlertQueries:
    def test_filters_and_summary(self):
        _setup_stock(quantity=8, name="Laptop", sku="LAPTOP-001")
        _setup_stock(quantity=0, name="Mouse", sku="MOUSE-001")
        _scan()

        assert len(alerts_by_type("LowStock")) == 1
        assert len(alerts_by_type("OutOfStock")) == 1
        assert len(alerts_by_status("Active")) == 2

        summary = alert_summary()
        assert summary["total_alerts"] == 2
        assert summary["active_alerts"] == 2
        assert summary["low_stock_alerts"] == 1
        assert summary["out_of_stock_alerts"] == 1
        assert summary["resolved_alerts"] == 0

    def test_unknown_status_rejected(self):
        with pytest.raises(InvalidArgument):
            alerts_by_status("Snoozed")
