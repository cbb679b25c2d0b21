"""Integration tests for the Inventory API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from inventory.api.routes import alert_router, inventory_router, product_router, report_router, warehouse_router
from inventory.ledger.record import InventoryRecord
from protean import current_domain
from shared.api import register_exception_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    for router in (product_router, warehouse_router, inventory_router, alert_router, report_router):
        app.include_router(router)
    return TestClient(app)


def _create_product(client, **overrides):
    payload = {"name": "Laptop Computer", "sku": "LAPTOP-001", "cost": 750.0, "minimum_stock_level": 10}
    payload.update(overrides)
    response = client.post("/products", json=payload)
    assert response.status_code == 201
    return response.json()["product_id"]


def _create_warehouse(client, name="Main Warehouse"):
    response = client.post(
        "/warehouses",
        json={"name": name, "address": {"street": "123 Main St", "city": "New York", "state": "NY"}},
    )
    assert response.status_code == 201
    return response.json()["warehouse_id"]


def _create_record(client, product_id, warehouse_id, quantity=20, reserved_quantity=0):
    response = client.post(
        "/inventory",
        json={
            "product_id": product_id,
            "warehouse_id": warehouse_id,
            "quantity": quantity,
            "reserved_quantity": reserved_quantity,
        },
    )
    assert response.status_code == 201
    return response.json()["inventory_record_id"]


@pytest.fixture()
def stocked(client):
    product_id = _create_product(client)
    warehouse_id = _create_warehouse(client)
    record_id = _create_record(client, product_id, warehouse_id, quantity=8)
    return {"product_id": product_id, "warehouse_id": warehouse_id, "record_id": record_id}


class TestReferenceDataEndpoints:
    def test_product_round_trip(self, client):
        product_id = _create_product(client, category="Electronics")
        response = client.get(f"/products/{product_id}")
        assert response.status_code == 200
        assert response.json()["category"] == "Electronics"

    def test_duplicate_sku_is_conflict(self, client):
        _create_product(client)
        response = client.post("/products", json={"name": "Other", "sku": "LAPTOP-001"})
        assert response.status_code == 409
        assert response.json()["code"] == "duplicate_key"

    def test_missing_product_is_not_found(self, client):
        response = client.get("/products/does-not-exist")
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_deactivated_product_is_hidden(self, client):
        product_id = _create_product(client)
        _create_product(client, name="Office Chair", sku="CHAIR-001")
        assert client.delete(f"/products/{product_id}").status_code == 200

        assert client.get(f"/products/{product_id}").status_code == 404
        assert client.get("/products/sku/LAPTOP-001").status_code == 404
        assert [p["sku"] for p in client.get("/products").json()] == ["CHAIR-001"]
        assert client.put(f"/products/{product_id}", json={"price": 1.0}).status_code == 404
        assert client.delete(f"/products/{product_id}").status_code == 404

    def test_lookup_by_sku(self, client):
        product_id = _create_product(client)
        response = client.get("/products/sku/LAPTOP-001")
        assert response.status_code == 200
        assert response.json()["product_id"] == product_id
        assert client.get("/products/sku/NOPE-404").json()["code"] == "not_found"

    def test_categories_and_brands(self, client):
        _create_product(client, category="Electronics", brand="TechBrand")
        _create_product(client, name="Office Chair", sku="CHAIR-001", category="Furniture", brand="ComfortMax")
        _create_product(client, name="Mouse", sku="MOUSE-001", category="Electronics")
        retired = _create_product(client, name="Lamp", sku="LAMP-001", category="Lighting", brand="Glow")
        client.delete(f"/products/{retired}")

        assert client.get("/products/categories").json() == ["Electronics", "Furniture"]
        assert client.get("/products/brands").json() == ["ComfortMax", "TechBrand"]

    def test_deactivated_warehouse_is_hidden(self, client):
        warehouse_id = _create_warehouse(client, "West Coast Warehouse")
        _create_warehouse(client, "Main Warehouse")
        client.delete(f"/warehouses/{warehouse_id}")

        assert client.get(f"/warehouses/{warehouse_id}").status_code == 404
        assert [w["name"] for w in client.get("/warehouses").json()] == ["Main Warehouse"]

    def test_warehouse_listing(self, client):
        _create_warehouse(client, "West Coast Warehouse")
        _create_warehouse(client, "Main Warehouse")
        names = [w["name"] for w in client.get("/warehouses").json()]
        assert names == ["Main Warehouse", "West Coast Warehouse"]

    def test_update_warehouse(self, client):
        warehouse_id = _create_warehouse(client)
        response = client.put(f"/warehouses/{warehouse_id}", json={"manager": "Pat Lee"})
        assert response.status_code == 200
        assert client.get(f"/warehouses/{warehouse_id}").json()["location"] == "New York, NY"


class TestInventoryEndpoints:
    def test_get_record(self, client, stocked):
        response = client.get(f"/inventory/{stocked['record_id']}")
        assert response.status_code == 200
        data = response.json()
        assert data["quantity"] == 8
        assert data["available_quantity"] == 8

    def test_duplicate_pair_is_conflict(self, client, stocked):
        response = client.post(
            "/inventory",
            json={"product_id": stocked["product_id"], "warehouse_id": stocked["warehouse_id"]},
        )
        assert response.status_code == 409

    def test_adjust_reserve(self, client, stocked):
        response = client.post(f"/inventory/{stocked['record_id']}/adjust", json={"type": "reserve", "amount": 3})
        assert response.status_code == 200
        assert response.json()["reserved_quantity"] == 3
        assert response.json()["available_quantity"] == 5

    def test_adjust_oversize_subtract(self, client, stocked):
        response = client.post(f"/inventory/{stocked['record_id']}/adjust", json={"type": "subtract", "amount": 9})
        assert response.status_code == 400
        assert response.json()["code"] == "insufficient_stock"
        assert current_domain.repository_for(InventoryRecord).get(stocked["record_id"]).quantity == 8

    def test_adjust_unknown_type(self, client, stocked):
        response = client.post(f"/inventory/{stocked['record_id']}/adjust", json={"type": "teleport", "amount": 1})
        assert response.status_code == 400
        assert response.json()["code"] == "invalid_argument"

    def test_listing_by_product_and_warehouse(self, client, stocked):
        assert len(client.get(f"/inventory/product/{stocked['product_id']}").json()) == 1
        assert len(client.get(f"/inventory/warehouse/{stocked['warehouse_id']}").json()) == 1
        assert client.get("/inventory/product/unknown").status_code == 404

    def test_low_stock_listing(self, client, stocked):
        [row] = client.get("/inventory/low-stock").json()
        assert row["inventory_record_id"] == stocked["record_id"]

    def test_summary(self, client, stocked):
        summary = client.get("/inventory/summary").json()
        assert summary["total_inventory_records"] == 1
        assert summary["low_stock_items"] == 1

    def test_update_and_delete(self, client, stocked):
        record_id = stocked["record_id"]
        assert client.put(f"/inventory/{record_id}", json={"location": "A-01"}).status_code == 200
        assert client.get(f"/inventory/{record_id}").json()["location"] == "A-01"
        assert client.delete(f"/inventory/{record_id}").status_code == 200
        assert client.get(f"/inventory/{record_id}").status_code == 404


class TestStockAlertEndpoints:
    def test_check_low_stock_then_lifecycle(self, client, stocked):
        response = client.post("/stock-alerts/check-low-stock")
        assert response.status_code == 200
        assert response.json()["alerts_created"] == 1
        assert client.post("/stock-alerts/check-low-stock").json()["alerts_created"] == 0

        [alert] = client.get("/stock-alerts/active").json()
        assert alert["alert_type"] == "LowStock"
        alert_id = alert["stock_alert_id"]

        resolve_early = client.put(f"/stock-alerts/{alert_id}/resolve", json={"resolution_notes": "x"})
        assert resolve_early.status_code == 409
        assert resolve_early.json()["code"] == "invalid_transition"

        acknowledged = client.put(f"/stock-alerts/{alert_id}/acknowledge", json={"acknowledged_by": "manager"})
        assert acknowledged.json()["status"] == "Acknowledged"

        resolved = client.put(f"/stock-alerts/{alert_id}/resolve", json={"resolution_notes": "Reordered"})
        assert resolved.json()["status"] == "Resolved"

        summary = client.get("/stock-alerts/summary").json()
        assert summary["resolved_alerts"] == 1
        assert len(client.get("/stock-alerts/status/Resolved").json()) == 1
        assert len(client.get("/stock-alerts/type/LowStock").json()) == 1

    def test_manual_alert_duplicate(self, client, stocked):
        payload = {
            "product_id": stocked["product_id"],
            "warehouse_id": stocked["warehouse_id"],
            "alert_type": "ReorderPoint",
            "message": "Reorder soon",
        }
        assert client.post("/stock-alerts", json=payload).status_code == 201
        assert client.post("/stock-alerts", json=payload).status_code == 409

    def test_invalid_status_filter(self, client):
        assert client.get("/stock-alerts/status/Snoozed").status_code == 400


class TestReportEndpoints:
    def test_reports(self, client, stocked):
        [low] = client.get("/reports/low-stock").json()
        assert low["days_until_out_of_stock"] == 1

        [value] = client.get("/reports/inventory-value").json()
        assert value["category"] == "Uncategorized"
        assert value["total_value"] == pytest.approx(8 * 750.0)

        [top] = client.get("/reports/top-products").json()
        assert top["sku"] == "LAPTOP-001"

        [warehouse] = client.get("/reports/warehouse-summary").json()
        assert warehouse["low_stock_count"] == 1

        assert client.get("/reports/overview").json()["total_products"] == 1
