"""Domain events for the StockAlert aggregate."""

from protean.fields import DateTime, Identifier, Integer, String, Text

from inventory.domain import inventory


@inventory.event(part_of="StockAlert")
class StockAlertRaised:
    __version__ = 1

    stock_alert_id = Identifier(required=True)
    product_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    alert_type = String(required=True)
    current_stock = Integer()
    threshold_level = Integer()
    raised_at = DateTime(required=True)


@inventory.event(part_of="StockAlert")
class StockAlertAcknowledged:
    __version__ = 1

    stock_alert_id = Identifier(required=True)
    acknowledged_by = String()
    acknowledged_at = DateTime(required=True)


@inventory.event(part_of="StockAlert")
class StockAlertResolved:
    __version__ = 1

    stock_alert_id = Identifier(required=True)
    resolution_notes = Text()
    resolved_at = DateTime(required=True)
