"""Purchase order changes — line items and header fields."""

from protean import handle
from protean.fields import Date, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from procurement.domain import procurement
from procurement.purchase_order.purchase_order import PurchaseOrder
from procurement.supplier.supplier import Supplier
from shared.locking import serialized
from shared.repository import get_or_raise


def purchase_order_key(purchase_order_id) -> str:
    return f"purchase-order:{purchase_order_id}"


@procurement.command(part_of="PurchaseOrder")
class AddPurchaseOrderItem:
    purchase_order_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer()
    unit_price = Float(default=0.0)
    notes = String(max_length=200)


@procurement.command(part_of="PurchaseOrder")
class UpdatePurchaseOrderItem:
    purchase_order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer()
    unit_price = Float()
    notes = String(max_length=200)


@procurement.command(part_of="PurchaseOrder")
class RemovePurchaseOrderItem:
    purchase_order_id = Identifier(required=True)
    item_id = Identifier(required=True)


@procurement.command(part_of="PurchaseOrder")
class UpdatePurchaseOrder:
    purchase_order_id = Identifier(required=True)
    supplier_id = Identifier()
    warehouse_id = Identifier()
    expected_delivery_date = Date()
    notes = Text()
    tax_amount = Float()
    shipping_amount = Float()


@procurement.command_handler(part_of=PurchaseOrder)
class PurchaseOrderModificationHandler:
    @serialized(lambda command: purchase_order_key(command.purchase_order_id))
    @handle(AddPurchaseOrderItem)
    def add_item(self, command):
        order = get_or_raise(PurchaseOrder, command.purchase_order_id, label="Purchase order")
        item = order.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            unit_price=command.unit_price,
            notes=command.notes,
        )
        current_domain.repository_for(PurchaseOrder).add(order)
        return str(item.id)

    @serialized(lambda command: purchase_order_key(command.purchase_order_id))
    @handle(UpdatePurchaseOrderItem)
    def update_item(self, command):
        order = get_or_raise(PurchaseOrder, command.purchase_order_id, label="Purchase order")
        order.update_item(
            command.item_id,
            quantity=command.quantity,
            unit_price=command.unit_price,
            notes=command.notes,
        )
        current_domain.repository_for(PurchaseOrder).add(order)
        return order

    @serialized(lambda command: purchase_order_key(command.purchase_order_id))
    @handle(RemovePurchaseOrderItem)
    def remove_item(self, command):
        order = get_or_raise(PurchaseOrder, command.purchase_order_id, label="Purchase order")
        order.remove_item(command.item_id)
        current_domain.repository_for(PurchaseOrder).add(order)
        return order

    @serialized(lambda command: purchase_order_key(command.purchase_order_id))
    @handle(UpdatePurchaseOrder)
    def update_header(self, command):
        order = get_or_raise(PurchaseOrder, command.purchase_order_id, label="Purchase order")
        if command.supplier_id is not None:
            get_or_raise(Supplier, command.supplier_id)
        order.update_header(
            supplier_id=command.supplier_id,
            warehouse_id=command.warehouse_id,
            expected_delivery_date=command.expected_delivery_date,
            notes=command.notes,
            tax_amount=command.tax_amount,
            shipping_amount=command.shipping_amount,
        )
        current_domain.repository_for(PurchaseOrder).add(order)
        return order
