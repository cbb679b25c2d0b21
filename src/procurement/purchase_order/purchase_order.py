"""PurchaseOrder aggregate (CQRS) — an order for goods placed with a supplier.

State Machine (forward only)::

    Draft → Submitted → Approved → Ordered ─┬→ PartiallyReceived → Received
                                            └──────────────────────→ Received

    Cancelled is reachable from every state that is not terminal.
    Received and Cancelled are terminal.

``total_amount`` is always the sum of the line totals. It is recomputed after
every item change and every header update, so it never drifts from the
items it summarises.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Date, DateTime, Float, HasMany, Identifier, Integer, String, Text

from procurement.domain import procurement
from procurement.purchase_order.events import (
    PurchaseOrderCreated,
    PurchaseOrderItemAdded,
    PurchaseOrderItemReceived,
    PurchaseOrderItemRemoved,
    PurchaseOrderItemUpdated,
    PurchaseOrderStatusChanged,
    PurchaseOrderUpdated,
)
from shared.errors import InvalidArgument, InvalidTransition, NotFound


class PurchaseOrderStatus(Enum):
    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    ORDERED = "Ordered"
    PARTIALLY_RECEIVED = "PartiallyReceived"
    RECEIVED = "Received"
    CANCELLED = "Cancelled"


_VALID_TRANSITIONS = {
    PurchaseOrderStatus.DRAFT: {PurchaseOrderStatus.SUBMITTED, PurchaseOrderStatus.CANCELLED},
    PurchaseOrderStatus.SUBMITTED: {PurchaseOrderStatus.APPROVED, PurchaseOrderStatus.CANCELLED},
    PurchaseOrderStatus.APPROVED: {PurchaseOrderStatus.ORDERED, PurchaseOrderStatus.CANCELLED},
    PurchaseOrderStatus.ORDERED: {
        PurchaseOrderStatus.PARTIALLY_RECEIVED,
        PurchaseOrderStatus.RECEIVED,
        PurchaseOrderStatus.CANCELLED,
    },
    PurchaseOrderStatus.PARTIALLY_RECEIVED: {PurchaseOrderStatus.RECEIVED, PurchaseOrderStatus.CANCELLED},
    PurchaseOrderStatus.RECEIVED: set(),  # Terminal
    PurchaseOrderStatus.CANCELLED: set(),  # Terminal
}

_TERMINAL_STATES = {PurchaseOrderStatus.RECEIVED, PurchaseOrderStatus.CANCELLED}

_RECEIVABLE_STATES = {PurchaseOrderStatus.ORDERED, PurchaseOrderStatus.PARTIALLY_RECEIVED}


def parse_status(value) -> PurchaseOrderStatus:
    try:
        return PurchaseOrderStatus(value)
    except ValueError:
        raise InvalidArgument(
            f"Invalid purchase order status: {value}",
            details={"status": value, "allowed": [s.value for s in PurchaseOrderStatus]},
        ) from None


def _check_item_values(quantity=None, unit_price=None):
    if quantity is not None and (isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1):
        raise InvalidArgument("Item quantity must be at least 1", details={"quantity": quantity})
    if unit_price is not None and unit_price < 0:
        raise InvalidArgument("Unit price cannot be negative", details={"unit_price": unit_price})


def _check_charge(name, value):
    if value is not None and value < 0:
        raise InvalidArgument(f"{name} cannot be negative", details={name: value})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@procurement.entity(part_of="PurchaseOrder")
class PurchaseOrderItem:
    """A line of a purchase order: a product, how many, and at what price."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    received_quantity = Integer(default=0, min_value=0)
    unit_price = Float(default=0.0, min_value=0.0)
    notes = String(max_length=200)

    @property
    def pending_quantity(self):
        return (self.quantity or 0) - (self.received_quantity or 0)

    @property
    def total_price(self):
        return round((self.quantity or 0) * (self.unit_price or 0.0), 2)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@procurement.aggregate
class PurchaseOrder:
    order_number = String(required=True, max_length=20, unique=True)
    supplier_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    status = String(choices=PurchaseOrderStatus, default=PurchaseOrderStatus.DRAFT.value)
    order_date = DateTime()
    expected_delivery_date = Date()
    actual_delivery_date = DateTime()
    notes = Text()
    total_amount = Float(default=0.0)
    tax_amount = Float(default=0.0, min_value=0.0)
    shipping_amount = Float(default=0.0, min_value=0.0)
    items = HasMany(PurchaseOrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def received_cannot_exceed_ordered(self):
        for item in self.items or []:
            if (item.received_quantity or 0) > (item.quantity or 0):
                raise ValidationError({"items": ["Received quantity cannot exceed ordered quantity"]})

    @property
    def grand_total(self):
        return round((self.total_amount or 0.0) + (self.tax_amount or 0.0) + (self.shipping_amount or 0.0), 2)

    @property
    def current_status(self) -> PurchaseOrderStatus:
        return PurchaseOrderStatus(self.status)

    @property
    def is_terminal(self):
        return self.current_status in _TERMINAL_STATES

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        order_number,
        supplier_id,
        warehouse_id,
        items_data=None,
        expected_delivery_date=None,
        notes=None,
        tax_amount=0.0,
        shipping_amount=0.0,
    ):
        """Create a Draft order.

        Args:
            order_number: The allocated ``PO-NNNNNN`` number.
            items_data: List of dicts with product_id, quantity, unit_price
                        and optional notes.
        """
        items_data = items_data or []
        cls.check_draft(items_data, tax_amount, shipping_amount)

        now = datetime.now(UTC)
        order = cls(
            order_number=order_number,
            supplier_id=supplier_id,
            warehouse_id=warehouse_id,
            status=PurchaseOrderStatus.DRAFT.value,
            order_date=now,
            expected_delivery_date=expected_delivery_date,
            notes=notes,
            tax_amount=tax_amount or 0.0,
            shipping_amount=shipping_amount or 0.0,
            items=[
                PurchaseOrderItem(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                    unit_price=item.get("unit_price") or 0.0,
                    notes=item.get("notes"),
                )
                for item in items_data
            ],
            created_at=now,
            updated_at=now,
        )
        order.recalculate_total()
        order.raise_(
            PurchaseOrderCreated(
                purchase_order_id=str(order.id),
                order_number=order_number,
                supplier_id=str(supplier_id),
                warehouse_id=str(warehouse_id),
                item_count=len(order.items),
                total_amount=order.total_amount,
                created_at=now,
            )
        )
        return order

    @staticmethod
    def check_draft(items_data, tax_amount=None, shipping_amount=None):
        """Validate order input before any state (or order number) is committed."""
        for item in items_data or []:
            if not item.get("product_id"):
                raise InvalidArgument("Every item needs a product_id", details={"item": item})
            _check_item_values(item.get("quantity") or 0, item.get("unit_price"))
        _check_charge("tax_amount", tax_amount)
        _check_charge("shipping_amount", shipping_amount)

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def recalculate_total(self):
        self.total_amount = round(sum(item.total_price for item in self.items or []), 2)

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def set_status(self, new_status):
        """Move to ``new_status`` if the state machine allows it."""
        self._transition_to(parse_status(new_status))

    def _transition_to(self, new_status: PurchaseOrderStatus):
        current = self.current_status
        if new_status not in _VALID_TRANSITIONS[current]:
            raise InvalidTransition(
                f"Cannot move purchase order from {current.value} to {new_status.value}",
                details={"from": current.value, "to": new_status.value},
            )

        now = datetime.now(UTC)
        self.status = new_status.value
        if new_status == PurchaseOrderStatus.RECEIVED:
            self.actual_delivery_date = now
        self.updated_at = now
        self.raise_(
            PurchaseOrderStatusChanged(
                purchase_order_id=str(self.id),
                order_number=self.order_number,
                previous_status=current.value,
                new_status=new_status.value,
                changed_at=now,
            )
        )

    def _ensure_editable(self):
        if self.is_terminal:
            raise InvalidTransition(
                f"Purchase order is {self.status} and can no longer be changed",
                details={"purchase_order_id": str(self.id), "status": self.status},
            )

    # -------------------------------------------------------------------
    # Items
    # -------------------------------------------------------------------
    def get_item(self, item_id) -> PurchaseOrderItem:
        item = next((i for i in self.items or [] if str(i.id) == str(item_id)), None)
        if item is None:
            raise NotFound(
                f"Purchase order item {item_id} not found",
                details={"purchase_order_id": str(self.id), "item_id": str(item_id)},
            )
        return item

    def add_item(self, product_id, quantity, unit_price=0.0, notes=None):
        self._ensure_editable()
        _check_item_values(quantity if quantity is not None else 0, unit_price)

        item = PurchaseOrderItem(product_id=product_id, quantity=quantity, unit_price=unit_price or 0.0, notes=notes)
        self.add_items(item)
        self.recalculate_total()
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PurchaseOrderItemAdded(
                purchase_order_id=str(self.id),
                item_id=str(item.id),
                product_id=str(product_id),
                quantity=quantity,
                unit_price=item.unit_price,
                total_amount=self.total_amount,
            )
        )
        return item

    def update_item(self, item_id, quantity=None, unit_price=None, notes=None):
        self._ensure_editable()
        item = self.get_item(item_id)
        _check_item_values(quantity, unit_price)
        if quantity is not None and quantity < (item.received_quantity or 0):
            raise InvalidArgument(
                f"Quantity {quantity} is below the {item.received_quantity} already received",
                details={"quantity": quantity, "received_quantity": item.received_quantity},
            )

        if quantity is not None:
            item.quantity = quantity
        if unit_price is not None:
            item.unit_price = unit_price
        if notes is not None:
            item.notes = notes
        self.recalculate_total()
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PurchaseOrderItemUpdated(
                purchase_order_id=str(self.id),
                item_id=str(item.id),
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_amount=self.total_amount,
            )
        )
        return item

    def remove_item(self, item_id):
        self._ensure_editable()
        item = self.get_item(item_id)
        if item.received_quantity:
            raise InvalidArgument(
                "Items with received goods cannot be removed",
                details={"item_id": str(item_id), "received_quantity": item.received_quantity},
            )

        self.remove_items(item)
        self.recalculate_total()
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PurchaseOrderItemRemoved(
                purchase_order_id=str(self.id),
                item_id=str(item_id),
                total_amount=self.total_amount,
            )
        )

    def receive_item(self, item_id, quantity):
        """Record goods arriving against a line.

        The order moves to PartiallyReceived, or to Received once every line
        is complete.
        """
        if self.current_status not in _RECEIVABLE_STATES:
            raise InvalidTransition(
                f"Goods can only be received on Ordered orders, this order is {self.status}",
                details={"purchase_order_id": str(self.id), "status": self.status},
            )
        item = self.get_item(item_id)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise InvalidArgument("Received quantity must be a positive whole number", details={"quantity": quantity})
        received = (item.received_quantity or 0) + quantity
        if received > item.quantity:
            raise InvalidArgument(
                f"Receiving {quantity} would exceed the {item.pending_quantity} still pending",
                details={"quantity": quantity, "pending_quantity": item.pending_quantity},
            )

        item.received_quantity = received
        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            PurchaseOrderItemReceived(
                purchase_order_id=str(self.id),
                item_id=str(item.id),
                product_id=str(item.product_id),
                quantity=quantity,
                received_quantity=received,
                pending_quantity=item.pending_quantity,
                received_at=now,
            )
        )

        if all(line.pending_quantity == 0 for line in self.items):
            self._transition_to(PurchaseOrderStatus.RECEIVED)
        elif self.current_status != PurchaseOrderStatus.PARTIALLY_RECEIVED:
            self._transition_to(PurchaseOrderStatus.PARTIALLY_RECEIVED)
        return item

    # -------------------------------------------------------------------
    # Header
    # -------------------------------------------------------------------
    def update_header(
        self,
        supplier_id=None,
        warehouse_id=None,
        expected_delivery_date=None,
        notes=None,
        tax_amount=None,
        shipping_amount=None,
    ):
        self._ensure_editable()
        _check_charge("tax_amount", tax_amount)
        _check_charge("shipping_amount", shipping_amount)

        if supplier_id is not None:
            self.supplier_id = supplier_id
        if warehouse_id is not None:
            self.warehouse_id = warehouse_id
        if expected_delivery_date is not None:
            self.expected_delivery_date = expected_delivery_date
        if notes is not None:
            self.notes = notes
        if tax_amount is not None:
            self.tax_amount = tax_amount
        if shipping_amount is not None:
            self.shipping_amount = shipping_amount
        self.recalculate_total()
        self.updated_at = datetime.now(UTC)
        self.raise_(
            PurchaseOrderUpdated(
                purchase_order_id=str(self.id),
                total_amount=self.total_amount,
                tax_amount=self.tax_amount,
                shipping_amount=self.shipping_amount,
                updated_at=self.updated_at,
            )
        )
