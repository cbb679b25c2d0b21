"""End-to-end tests through the full Stockroom application."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def client(app):
    return TestClient(app)


class TestHealth:
    def test_health_lists_domains(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert set(response.json()["domains"]) == {"inventory", "procurement"}


class TestCrossContextFlow:
    def test_stock_and_purchase_order(self, client):
        product_id = client.post(
            "/products",
            json={"name": "Office Chair", "sku": "CHAIR-001", "cost": 120.0, "minimum_stock_level": 5},
        ).json()["product_id"]
        warehouse_id = client.post("/warehouses", json={"name": "Main Warehouse"}).json()["warehouse_id"]
        record_id = client.post(
            "/inventory",
            json={"product_id": product_id, "warehouse_id": warehouse_id, "quantity": 8, "reserved_quantity": 1},
        ).json()["inventory_record_id"]

        adjusted = client.post(f"/inventory/{record_id}/adjust", json={"type": "subtract", "amount": 4})
        assert adjusted.json()["available_quantity"] == 3
        assert client.post("/stock-alerts/check-low-stock").json()["alerts_created"] == 1

        supplier_id = client.post("/suppliers", json={"name": "ComfortMax Supply"}).json()["supplier_id"]
        created = client.post(
            "/purchase-orders",
            json={
                "supplier_id": supplier_id,
                "warehouse_id": warehouse_id,
                "items": [{"product_id": product_id, "quantity": 20, "unit_price": 120.0}],
            },
        )
        assert created.status_code == 201
        assert created.json()["order_number"] == "PO-000001"

        # Receiving is recorded on the order only; the ledger is unchanged.
        order_id = created.json()["purchase_order_id"]
        for status in ("Submitted", "Approved", "Ordered"):
            client.put(f"/purchase-orders/{order_id}/status", json={"status": status})
        item_id = client.get(f"/purchase-orders/{order_id}").json()["items"][0]["item_id"]
        received = client.post(f"/purchase-orders/{order_id}/items/{item_id}/receive", json={"quantity": 20})
        assert received.json()["status"] == "Received"
        assert client.get(f"/inventory/{record_id}").json()["quantity"] == 4

    def test_domain_errors_render_as_json(self, client):
        response = client.get("/inventory/missing")
        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "not_found"
        assert "message" in body
