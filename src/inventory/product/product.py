"""Product aggregate (CQRS) — the stock policy for an item the business holds.

Products are reference data for the ledger. The alert scan reads
``minimum_stock_level`` as the low-stock threshold; reporting reads ``cost``
for valuations and ``maximum_stock_level`` as an advisory ceiling that the
ledger itself never enforces.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String

from inventory.domain import inventory
from inventory.product.events import ProductCreated, ProductDeactivated, ProductUpdated
from shared.errors import InvalidTransition

_UPDATABLE_FIELDS = (
    "name",
    "description",
    "price",
    "cost",
    "category",
    "brand",
    "unit",
    "minimum_stock_level",
    "maximum_stock_level",
)


@inventory.aggregate
class Product:
    name = String(required=True, max_length=100)
    sku = String(required=True, max_length=50, unique=True)
    description = String(max_length=500)
    price = Float(default=0.0, min_value=0.0)
    cost = Float(default=0.0, min_value=0.0)
    category = String(max_length=100)
    brand = String(max_length=100)
    unit = String(max_length=50)
    minimum_stock_level = Integer(default=0, min_value=0)
    maximum_stock_level = Integer(default=0, min_value=0)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def maximum_must_not_undercut_minimum(self):
        if self.maximum_stock_level and self.maximum_stock_level < (self.minimum_stock_level or 0):
            raise ValidationError(
                {"maximum_stock_level": ["Maximum stock level cannot be below the minimum stock level"]}
            )

    @classmethod
    def create(cls, name, sku, **details):
        now = datetime.now(UTC)
        product = cls(name=name, sku=sku, created_at=now, updated_at=now, **details)
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=name,
                sku=sku,
                minimum_stock_level=product.minimum_stock_level or 0,
                created_at=now,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply the supplied descriptive and policy fields; ``None`` means unchanged."""
        for field_name in _UPDATABLE_FIELDS:
            value = changes.get(field_name)
            if value is not None:
                setattr(self, field_name, value)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductUpdated(
                product_id=str(self.id),
                name=self.name,
                minimum_stock_level=self.minimum_stock_level or 0,
                maximum_stock_level=self.maximum_stock_level or 0,
                updated_at=self.updated_at,
            )
        )

    def deactivate(self):
        if not self.is_active:
            raise InvalidTransition("Product is already inactive", details={"product_id": str(self.id)})
        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeactivated(product_id=str(self.id), deactivated_at=self.updated_at))
