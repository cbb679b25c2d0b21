"""StockAlert aggregate (CQRS) — a notice that a ledger entry needs attention.

Lifecycle::

    Active → Acknowledged → Resolved

Only one Active alert may exist per ``(product_id, warehouse_id)`` pair.
Acknowledged and Resolved alerts no longer count, so a record that crosses
its threshold again raises a fresh alert.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, Integer, String

from inventory.alerts.events import StockAlertAcknowledged, StockAlertRaised, StockAlertResolved
from inventory.domain import inventory
from shared.errors import InvalidArgument, InvalidTransition


class AlertType(Enum):
    LOW_STOCK = "LowStock"
    OUT_OF_STOCK = "OutOfStock"
    REORDER_POINT = "ReorderPoint"
    OVER_STOCK = "OverStock"


class AlertStatus(Enum):
    ACTIVE = "Active"
    ACKNOWLEDGED = "Acknowledged"
    RESOLVED = "Resolved"


def parse_alert_type(value) -> AlertType:
    try:
        return AlertType(value)
    except ValueError:
        raise InvalidArgument(
            f"Invalid alert type: {value}",
            details={"alert_type": value, "allowed": [t.value for t in AlertType]},
        ) from None


def parse_alert_status(value) -> AlertStatus:
    try:
        return AlertStatus(value)
    except ValueError:
        raise InvalidArgument(
            f"Invalid alert status: {value}",
            details={"status": value, "allowed": [s.value for s in AlertStatus]},
        ) from None


MESSAGE_MAX_LENGTH = 200


@inventory.aggregate
class StockAlert:
    product_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    alert_type = String(choices=AlertType, required=True)
    status = String(choices=AlertStatus, default=AlertStatus.ACTIVE.value)
    message = String(required=True, max_length=MESSAGE_MAX_LENGTH)
    threshold_level = Integer()
    current_stock = Integer()
    acknowledged_by = String(max_length=100)
    acknowledged_at = DateTime()
    resolved_at = DateTime()
    resolution_notes = String(max_length=500)
    created_at = DateTime()

    @classmethod
    def raise_alert(cls, product_id, warehouse_id, alert_type, message, current_stock=None, threshold_level=None):
        """Open a new Active alert."""
        kind = parse_alert_type(alert_type.value if isinstance(alert_type, AlertType) else alert_type)
        now = datetime.now(UTC)
        alert = cls(
            product_id=product_id,
            warehouse_id=warehouse_id,
            alert_type=kind.value,
            status=AlertStatus.ACTIVE.value,
            message=message,
            current_stock=current_stock,
            threshold_level=threshold_level,
            created_at=now,
        )
        alert.raise_(
            StockAlertRaised(
                stock_alert_id=str(alert.id),
                product_id=str(product_id),
                warehouse_id=str(warehouse_id),
                alert_type=kind.value,
                current_stock=current_stock,
                threshold_level=threshold_level,
                raised_at=now,
            )
        )
        return alert

    @property
    def is_active(self):
        return self.status == AlertStatus.ACTIVE.value

    def acknowledge(self, acknowledged_by):
        if self.status != AlertStatus.ACTIVE.value:
            raise InvalidTransition(
                f"Only Active alerts can be acknowledged, this alert is {self.status}",
                details={"stock_alert_id": str(self.id), "status": self.status},
            )
        self.status = AlertStatus.ACKNOWLEDGED.value
        self.acknowledged_by = acknowledged_by
        self.acknowledged_at = datetime.now(UTC)
        self.raise_(
            StockAlertAcknowledged(
                stock_alert_id=str(self.id),
                acknowledged_by=acknowledged_by,
                acknowledged_at=self.acknowledged_at,
            )
        )

    def resolve(self, resolution_notes=None):
        if self.status != AlertStatus.ACKNOWLEDGED.value:
            raise InvalidTransition(
                f"Only Acknowledged alerts can be resolved, this alert is {self.status}",
                details={"stock_alert_id": str(self.id), "status": self.status},
            )
        self.status = AlertStatus.RESOLVED.value
        self.resolution_notes = resolution_notes
        self.resolved_at = datetime.now(UTC)
        self.raise_(
            StockAlertResolved(
                stock_alert_id=str(self.id),
                resolution_notes=resolution_notes,
                resolved_at=self.resolved_at,
            )
        )
