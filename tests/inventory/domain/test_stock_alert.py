"""Tests for the StockAlert lifecycle."""

from types import SimpleNamespace

import pytest
from inventory.alerts.alert import MESSAGE_MAX_LENGTH, AlertStatus, AlertType, StockAlert
from inventory.alerts.events import StockAlertAcknowledged, StockAlertRaised, StockAlertResolved
from inventory.alerts.scan import alert_for
from protean.exceptions import ValidationError
from shared.errors import InvalidArgument, InvalidTransition


def _raise_alert(**overrides):
    defaults = {
        "product_id": "prod-001",
        "warehouse_id": "wh-001",
        "alert_type": AlertType.LOW_STOCK,
        "message": "Product Laptop is running low on stock in Main",
        "current_stock": 8,
        "threshold_level": 10,
    }
    defaults.update(overrides)
    return StockAlert.raise_alert(**defaults)


class TestRaiseAlert:
    def test_new_alert_is_active(self):
        alert = _raise_alert()
        assert alert.status == AlertStatus.ACTIVE.value
        assert alert.is_active
        assert alert.alert_type == "LowStock"
        assert alert.created_at is not None

    def test_raise_emits_event(self):
        alert = _raise_alert()
        event = alert._events[-1]
        assert isinstance(event, StockAlertRaised)
        assert event.current_stock == 8

    def test_alert_type_accepts_string(self):
        alert = _raise_alert(alert_type="OverStock")
        assert alert.alert_type == AlertType.OVER_STOCK.value

    def test_unknown_alert_type_rejected(self):
        with pytest.raises(InvalidArgument):
            _raise_alert(alert_type="Sideways")

    def test_message_longer_than_200_characters_rejected(self):
        with pytest.raises(ValidationError):
            _raise_alert(message="x" * 201)

    def test_scan_message_is_cut_to_fit(self):
        record = SimpleNamespace(product_id="prod-001", warehouse_id="wh-001", available_quantity=0)
        product = SimpleNamespace(name="P" * 100, minimum_stock_level=5)
        warehouse = SimpleNamespace(name="W" * 100)

        alert = alert_for(record, product, warehouse)

        assert len(alert.message) == MESSAGE_MAX_LENGTH
        assert alert.alert_type == AlertType.OUT_OF_STOCK.value


class TestAcknowledge:
    def test_acknowledge_active_alert(self):
        alert = _raise_alert()
        alert.acknowledge("manager@example.com")
        assert alert.status == AlertStatus.ACKNOWLEDGED.value
        assert alert.acknowledged_by == "manager@example.com"
        assert alert.acknowledged_at is not None
        assert isinstance(alert._events[-1], StockAlertAcknowledged)

    def test_acknowledge_twice_rejected(self):
        alert = _raise_alert()
        alert.acknowledge("manager")
        with pytest.raises(InvalidTransition):
            alert.acknowledge("manager")

    def test_acknowledge_resolved_alert_rejected(self):
        alert = _raise_alert()
        alert.acknowledge("manager")
        alert.resolve("Restocked")
        with pytest.raises(InvalidTransition):
            alert.acknowledge("manager")
        assert alert.status == AlertStatus.RESOLVED.value


class TestResolve:
    def test_resolve_acknowledged_alert(self):
        alert = _raise_alert()
        alert.acknowledge("manager")
        alert.resolve("Reorder placed")
        assert alert.status == AlertStatus.RESOLVED.value
        assert alert.resolution_notes == "Reorder placed"
        assert alert.resolved_at is not None
        assert isinstance(alert._events[-1], StockAlertResolved)

    def test_resolve_active_alert_rejected(self):
        alert = _raise_alert()
        with pytest.raises(InvalidTransition):
            alert.resolve("Skipping ahead")
        assert alert.status == AlertStatus.ACTIVE.value

    def test_resolution_notes_longer_than_500_characters_rejected(self):
        alert = _raise_alert()
        alert.acknowledge("ops")
        with pytest.raises(ValidationError):
            alert.resolve("n" * 501)
