"""Purchase order workflow — status changes and receiving goods."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from procurement.domain import procurement
from procurement.purchase_order.modification import purchase_order_key
from procurement.purchase_order.purchase_order import PurchaseOrder
from shared.locking import serialized
from shared.repository import get_or_raise

logger = structlog.get_logger(__name__)


@procurement.command(part_of="PurchaseOrder")
class ChangePurchaseOrderStatus:
    purchase_order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@procurement.command(part_of="PurchaseOrder")
class ReceivePurchaseOrderItem:
    purchase_order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer()


@procurement.command_handler(part_of=PurchaseOrder)
class PurchaseOrderStatusHandler:
    @serialized(lambda command: purchase_order_key(command.purchase_order_id))
    @handle(ChangePurchaseOrderStatus)
    def change_status(self, command):
        order = get_or_raise(PurchaseOrder, command.purchase_order_id, label="Purchase order")
        previous = order.status
        order.set_status(command.status)
        current_domain.repository_for(PurchaseOrder).add(order)
        logger.info(
            "purchase_order_status_changed",
            purchase_order_id=str(order.id),
            previous_status=previous,
            new_status=order.status,
        )
        return order

    @serialized(lambda command: purchase_order_key(command.purchase_order_id))
    @handle(ReceivePurchaseOrderItem)
    def receive_item(self, command):
        order = get_or_raise(PurchaseOrder, command.purchase_order_id, label="Purchase order")
        order.receive_item(command.item_id, command.quantity)
        current_domain.repository_for(PurchaseOrder).add(order)
        logger.info(
            "purchase_order_item_received",
            purchase_order_id=str(order.id),
            item_id=str(command.item_id),
            quantity=command.quantity,
            status=order.status,
        )
        return order
