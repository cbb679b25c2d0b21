"""InventoryRecord aggregate (CQRS) — the quantity ledger for one product at one warehouse.

Stock Level Model:
    quantity:           Physical on-hand count in the warehouse
    reserved_quantity:  Soft holds against on-hand stock (not yet fulfilled)
    available_quantity: quantity - reserved_quantity (computed, never stored)

Every mutation is validated before any field changes, so a rejected
adjustment leaves the record untouched. ``0 <= reserved_quantity <= quantity``
holds after every operation.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, String

from inventory.domain import inventory
from inventory.ledger.events import (
    InventoryRecordCreated,
    InventoryRecordUpdated,
    StockAdded,
    StockReleased,
    StockRemoved,
    StockReserved,
)
from shared.errors import (
    InsufficientAvailable,
    InsufficientReserved,
    InsufficientStock,
    InvalidArgument,
)


class AdjustmentType(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    RESERVE = "reserve"
    RELEASE = "release"


def _require_positive(amount):
    if amount is None or isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidArgument("Amount must be a positive whole number", details={"amount": amount})


@inventory.aggregate
class InventoryRecord:
    """On-hand and reserved stock of one product at one warehouse."""

    product_id = Identifier(required=True)
    warehouse_id = Identifier(required=True)
    quantity = Integer(default=0, min_value=0)
    reserved_quantity = Integer(default=0, min_value=0)
    location = String(max_length=100)
    notes = String(max_length=500)
    created_at = DateTime()
    last_updated = DateTime()

    @invariant.post
    def reserved_cannot_exceed_on_hand(self):
        if (self.reserved_quantity or 0) > (self.quantity or 0):
            raise ValidationError({"reserved_quantity": ["Reserved quantity cannot exceed on-hand quantity"]})

    @property
    def available_quantity(self):
        return (self.quantity or 0) - (self.reserved_quantity or 0)

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, product_id, warehouse_id, quantity=0, reserved_quantity=0, location=None, notes=None):
        """Open a ledger entry for a product at a warehouse."""
        quantity = quantity or 0
        reserved_quantity = reserved_quantity or 0
        if quantity < 0 or reserved_quantity < 0:
            raise InvalidArgument(
                "Quantities cannot be negative",
                details={"quantity": quantity, "reserved_quantity": reserved_quantity},
            )
        if reserved_quantity > quantity:
            raise InvalidArgument(
                f"Reserved quantity {reserved_quantity} exceeds on-hand quantity {quantity}",
                details={"quantity": quantity, "reserved_quantity": reserved_quantity},
            )

        now = datetime.now(UTC)
        record = cls(
            product_id=product_id,
            warehouse_id=warehouse_id,
            quantity=quantity,
            reserved_quantity=reserved_quantity,
            location=location,
            notes=notes,
            created_at=now,
            last_updated=now,
        )
        record.raise_(
            InventoryRecordCreated(
                inventory_record_id=str(record.id),
                product_id=str(product_id),
                warehouse_id=str(warehouse_id),
                quantity=quantity,
                reserved_quantity=reserved_quantity,
                created_at=now,
            )
        )
        return record

    # -------------------------------------------------------------------
    # Ledger operations
    # -------------------------------------------------------------------
    def add_stock(self, amount):
        """Increase on-hand stock. No ceiling is enforced here."""
        _require_positive(amount)
        previous = self.quantity or 0
        self.quantity = previous + amount
        self._touch()
        self.raise_(
            StockAdded(
                inventory_record_id=str(self.id),
                amount=amount,
                previous_quantity=previous,
                new_quantity=self.quantity,
                new_available=self.available_quantity,
                adjusted_at=self.last_updated,
            )
        )

    def remove_stock(self, amount):
        """Decrease on-hand stock without dipping into reserved units."""
        _require_positive(amount)
        previous = self.quantity or 0
        if amount > previous:
            raise InsufficientStock(
                f"Cannot remove {amount}: only {previous} on hand",
                details={"requested": amount, "quantity": previous},
            )
        if amount > self.available_quantity:
            raise InsufficientAvailable(
                f"Cannot remove {amount}: {self.reserved_quantity} of {previous} on hand are reserved",
                details={"requested": amount, "available": self.available_quantity},
            )

        self.quantity = previous - amount
        self._touch()
        self.raise_(
            StockRemoved(
                inventory_record_id=str(self.id),
                amount=amount,
                previous_quantity=previous,
                new_quantity=self.quantity,
                new_available=self.available_quantity,
                adjusted_at=self.last_updated,
            )
        )

    def reserve(self, amount):
        """Place a soft hold on available stock."""
        _require_positive(amount)
        available = self.available_quantity
        if amount > available:
            raise InsufficientAvailable(
                f"Insufficient available stock: {available} available, {amount} requested",
                details={"requested": amount, "available": available},
            )

        previous = self.reserved_quantity or 0
        self.reserved_quantity = previous + amount
        self._touch()
        self.raise_(
            StockReserved(
                inventory_record_id=str(self.id),
                amount=amount,
                previous_reserved=previous,
                new_reserved=self.reserved_quantity,
                new_available=self.available_quantity,
                adjusted_at=self.last_updated,
            )
        )

    def release(self, amount):
        """Return previously reserved stock to available."""
        _require_positive(amount)
        previous = self.reserved_quantity or 0
        if amount > previous:
            raise InsufficientReserved(
                f"Insufficient reserved stock: {previous} reserved, {amount} requested",
                details={"requested": amount, "reserved": previous},
            )

        self.reserved_quantity = previous - amount
        self._touch()
        self.raise_(
            StockReleased(
                inventory_record_id=str(self.id),
                amount=amount,
                previous_reserved=previous,
                new_reserved=self.reserved_quantity,
                new_available=self.available_quantity,
                adjusted_at=self.last_updated,
            )
        )

    def adjust(self, adjustment_type, amount):
        """Dispatch an ``add`` / ``subtract`` / ``reserve`` / ``release`` adjustment."""
        try:
            kind = AdjustmentType(str(adjustment_type).lower())
        except ValueError:
            raise InvalidArgument(
                f"Invalid adjustment type: {adjustment_type}",
                details={"type": adjustment_type, "allowed": [t.value for t in AdjustmentType]},
            ) from None

        operation = {
            AdjustmentType.ADD: self.add_stock,
            AdjustmentType.SUBTRACT: self.remove_stock,
            AdjustmentType.RESERVE: self.reserve,
            AdjustmentType.RELEASE: self.release,
        }[kind]
        operation(amount)

    def update_details(self, location=None, notes=None):
        """Update the free-text fields. Quantities only move through ledger operations."""
        if location is not None:
            self.location = location
        if notes is not None:
            self.notes = notes
        self._touch()
        self.raise_(
            InventoryRecordUpdated(
                inventory_record_id=str(self.id),
                location=self.location,
                notes=self.notes,
                updated_at=self.last_updated,
            )
        )

    def _touch(self):
        self.last_updated = datetime.now(UTC)
