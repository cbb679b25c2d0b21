"""Purchase order creation — command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Date, Float, Identifier, Text
from protean.utils.globals import current_domain

from procurement.domain import procurement
from procurement.purchase_order.numbering import ORDER_NUMBER_LOCK_KEY, allocate_order_number
from procurement.purchase_order.purchase_order import PurchaseOrder
from procurement.supplier.supplier import Supplier
from shared.locking import serialized
from shared.repository import get_or_raise

logger = structlog.get_logger(__name__)


@procurement.command(part_of="PurchaseOrder")
class CreatePurchaseOrder:
    """Raise a new Draft order against a supplier."""

    supplier_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    items = Text()  # JSON: [{product_id, quantity, unit_price, notes}]
    expected_delivery_date = Date()
    notes = Text()
    tax_amount = Float(default=0.0)
    shipping_amount = Float(default=0.0)


@procurement.command_handler(part_of=PurchaseOrder)
class PurchaseOrderCreationHandler:
    @serialized(lambda command: ORDER_NUMBER_LOCK_KEY)
    @handle(CreatePurchaseOrder)
    def create_purchase_order(self, command):
        get_or_raise(Supplier, command.supplier_id)
        items_data = json.loads(command.items) if command.items else []
        PurchaseOrder.check_draft(items_data, command.tax_amount, command.shipping_amount)

        order = PurchaseOrder.create(
            order_number=allocate_order_number(),
            supplier_id=command.supplier_id,
            warehouse_id=command.warehouse_id,
            items_data=items_data,
            expected_delivery_date=command.expected_delivery_date,
            notes=command.notes,
            tax_amount=command.tax_amount,
            shipping_amount=command.shipping_amount,
        )
        current_domain.repository_for(PurchaseOrder).add(order)

        logger.info(
            "purchase_order_created",
            purchase_order_id=str(order.id),
            order_number=order.order_number,
            total_amount=order.total_amount,
        )
        return order
