"""Read-side queries over stock alerts."""

from inventory.alerts.alert import AlertStatus, AlertType, StockAlert, parse_alert_status, parse_alert_type
from shared.repository import fetch_all, get_or_raise


def _newest_first(alerts):
    return sorted(alerts, key=lambda alert: (alert.created_at is not None, alert.created_at), reverse=True)


def get_alert(stock_alert_id) -> StockAlert:
    return get_or_raise(StockAlert, stock_alert_id, label="Stock alert")


def list_alerts() -> list[StockAlert]:
    return _newest_first(fetch_all(StockAlert))


def alerts_by_status(status) -> list[StockAlert]:
    return _newest_first(fetch_all(StockAlert, status=parse_alert_status(status).value))


def active_alerts() -> list[StockAlert]:
    return alerts_by_status(AlertStatus.ACTIVE.value)


def alerts_by_type(alert_type) -> list[StockAlert]:
    return _newest_first(fetch_all(StockAlert, alert_type=parse_alert_type(alert_type).value))


def alert_summary() -> dict:
    alerts = fetch_all(StockAlert)

    def count(predicate):
        return sum(1 for alert in alerts if predicate(alert))

    return {
        "total_alerts": len(alerts),
        "active_alerts": count(lambda a: a.status == AlertStatus.ACTIVE.value),
        "acknowledged_alerts": count(lambda a: a.status == AlertStatus.ACKNOWLEDGED.value),
        "resolved_alerts": count(lambda a: a.status == AlertStatus.RESOLVED.value),
        "low_stock_alerts": count(lambda a: a.alert_type == AlertType.LOW_STOCK.value),
        "out_of_stock_alerts": count(lambda a: a.alert_type == AlertType.OUT_OF_STOCK.value),
    }
