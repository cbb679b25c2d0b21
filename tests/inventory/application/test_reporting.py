"""Application tests for on-demand inventory reports."""

import json

import pytest
from inventory.ledger.stocking import CreateInventoryRecord
from inventory.product.management import CreateProduct, DeactivateProduct
from inventory.reporting.summaries import (
    days_until_out_of_stock,
    inventory_summary,
    inventory_value_report,
    low_stock_report,
    top_products_by_value,
    warehouse_summary,
)
from inventory.warehouse.management import CreateWarehouse
from protean import current_domain


def _process(command):
    return current_domain.process(command, asynchronous=False)


@pytest.fixture
def catalogue():
    """Two warehouses, three products and four ledger entries."""
    main = _process(CreateWarehouse(name="Main Warehouse", address=json.dumps({"city": "New York", "state": "NY"})))
    west = _process(CreateWarehouse(name="West Coast Warehouse", address=json.dumps({"city": "Los Angeles"})))
    laptop = _process(
        CreateProduct(name="Laptop Computer", sku="LAPTOP-001", cost=750.0, category="Electronics", minimum_stock_level=10)
    )
    mouse = _process(
        CreateProduct(name="Wireless Mouse", sku="MOUSE-001", cost=15.0, category="Electronics", minimum_stock_level=50)
    )
    chair = _process(CreateProduct(name="Office Chair", sku="CHAIR-001", cost=120.0, minimum_stock_level=5))

    for product_id, warehouse_id, quantity, reserved in (
        (laptop, main, 25, 5),
        (laptop, west, 15, 2),
        (mouse, main, 100, 10),
        (chair, main, 8, 8),
    ):
        _process(
            CreateInventoryRecord(
                product_id=product_id,
                warehouse_id=warehouse_id,
                quantity=quantity,
                reserved_quantity=reserved,
            )
        )
    return {"main": main, "west": west, "laptop": laptop, "mouse": mouse, "chair": chair}


class TestDaysUntilOutOfStock:
    @pytest.mark.parametrize("available, days", [(0, 0), (1, 1), (10, 1), (11, 2), (95, 10)])
    def test_estimate(self, available, days):
        assert days_until_out_of_stock(available) == days


class TestInventorySummary:
    def test_counts_and_value(self, catalogue):
        summary = inventory_summary()
        assert summary["total_products"] == 3
        assert summary["total_warehouses"] == 2
        assert summary["total_inventory_records"] == 4
        # chair: available 0 <= 5
        assert summary["low_stock_items"] == 1
        assert summary["out_of_stock_items"] == 1
        assert summary["total_inventory_value"] == pytest.approx(25 * 750 + 15 * 750 + 100 * 15 + 8 * 120)

    def test_inactive_products_not_counted(self, catalogue):
        _process(DeactivateProduct(product_id=catalogue["chair"]))
        assert inventory_summary()["total_products"] == 2


class TestLowStockReport:
    def test_rows(self, catalogue):
        [row] = low_stock_report()
        assert row["product_name"] == "Office Chair"
        assert row["warehouse_name"] == "Main Warehouse"
        assert row["current_stock"] == 0
        assert row["days_until_out_of_stock"] == 0


class TestValueReport:
    def test_grouped_by_category_and_warehouse(self, catalogue):
        rows = {(r["category"], r["warehouse_name"]): r for r in inventory_value_report()}
        assert set(rows) == {
            ("Electronics", "Main Warehouse"),
            ("Electronics", "West Coast Warehouse"),
            ("Uncategorized", "Main Warehouse"),
        }
        main_electronics = rows[("Electronics", "Main Warehouse")]
        assert main_electronics["total_quantity"] == 125
        assert main_electronics["total_value"] == pytest.approx(25 * 750 + 100 * 15)
        assert main_electronics["average_cost"] == pytest.approx((750 + 15) / 2)


class TestTopProducts:
    def test_ranked_by_value(self, catalogue):
        ranked = top_products_by_value()
        assert [row["sku"] for row in ranked] == ["LAPTOP-001", "MOUSE-001", "CHAIR-001"]
        assert ranked[0]["warehouse_count"] == 2
        assert ranked[0]["total_quantity"] == 40

    def test_limit(self, catalogue):
        assert len(top_products_by_value(limit=1)) == 1


class TestWarehouseSummary:
    def test_per_warehouse_rows(self, catalogue):
        rows = {row["warehouse_name"]: row for row in warehouse_summary()}
        main = rows["Main Warehouse"]
        assert main["location"] == "New York, NY"
        assert main["product_count"] == 3
        assert main["total_quantity"] == 133
        assert main["low_stock_count"] == 1
        assert main["out_of_stock_count"] == 1
        assert rows["West Coast Warehouse"]["product_count"] == 1
