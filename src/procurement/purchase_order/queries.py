"""Read-side queries over purchase orders."""

from procurement.purchase_order.purchase_order import PurchaseOrder, PurchaseOrderStatus, parse_status
from shared.errors import NotFound
from shared.repository import fetch_all, get_or_raise

_PENDING_STATES = {
    PurchaseOrderStatus.SUBMITTED.value,
    PurchaseOrderStatus.APPROVED.value,
    PurchaseOrderStatus.ORDERED.value,
}


def _newest_first(orders):
    return sorted(
        orders,
        key=lambda order: (order.order_date is not None, order.order_date, order.order_number or ""),
        reverse=True,
    )


def get_purchase_order(purchase_order_id) -> PurchaseOrder:
    return get_or_raise(PurchaseOrder, purchase_order_id, label="Purchase order")


def list_purchase_orders() -> list[PurchaseOrder]:
    return _newest_first(fetch_all(PurchaseOrder))


def purchase_orders_by_status(status) -> list[PurchaseOrder]:
    return _newest_first(fetch_all(PurchaseOrder, status=parse_status(status).value))


def find_item(item_id):
    """``(order, item)`` for the line ``item_id``, wherever it lives."""
    for order in fetch_all(PurchaseOrder):
        for item in order.items or []:
            if str(item.id) == str(item_id):
                return order, item
    raise NotFound(f"Purchase order item {item_id} not found", details={"item_id": str(item_id)})


def purchase_order_summary() -> dict:
    orders = fetch_all(PurchaseOrder)
    return {
        "total_orders": len(orders),
        "draft_orders": sum(1 for o in orders if o.status == PurchaseOrderStatus.DRAFT.value),
        "pending_orders": sum(1 for o in orders if o.status in _PENDING_STATES),
        "received_orders": sum(1 for o in orders if o.status == PurchaseOrderStatus.RECEIVED.value),
        "total_value": round(sum(o.grand_total for o in orders), 2),
    }
