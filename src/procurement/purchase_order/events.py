"""Domain events for the PurchaseOrder aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from procurement.domain import procurement


@procurement.event(part_of="PurchaseOrder")
class PurchaseOrderCreated:
    """A draft purchase order was raised against a supplier."""

    __version__ = 1

    purchase_order_id = Identifier(required=True)
    order_number = String(required=True)
    supplier_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    item_count = Integer(default=0)
    total_amount = Float(default=0.0)
    created_at = DateTime(required=True)


@procurement.event(part_of="PurchaseOrder")
class PurchaseOrderUpdated:
    """Header fields of the order changed."""

    __version__ = 1

    purchase_order_id = Identifier(required=True)
    total_amount = Float(default=0.0)
    tax_amount = Float(default=0.0)
    shipping_amount = Float(default=0.0)
    updated_at = DateTime(required=True)


@procurement.event(part_of="PurchaseOrder")
class PurchaseOrderStatusChanged:
    __version__ = 1

    purchase_order_id = Identifier(required=True)
    order_number = String(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)


@procurement.event(part_of="PurchaseOrder")
class PurchaseOrderItemAdded:
    __version__ = 1

    purchase_order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = Float(default=0.0)
    total_amount = Float(default=0.0)


@procurement.event(part_of="PurchaseOrder")
class PurchaseOrderItemUpdated:
    __version__ = 1

    purchase_order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = Float(default=0.0)
    total_amount = Float(default=0.0)


@procurement.event(part_of="PurchaseOrder")
class PurchaseOrderItemRemoved:
    __version__ = 1

    purchase_order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    total_amount = Float(default=0.0)


@procurement.event(part_of="PurchaseOrder")
class PurchaseOrderItemReceived:
    """Goods arrived against a line item."""

    __version__ = 1

    purchase_order_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    received_quantity = Integer(required=True)
    pending_quantity = Integer(default=0)
    received_at = DateTime(required=True)
