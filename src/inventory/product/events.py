"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from inventory.domain import inventory


@inventory.event(part_of="Product")
class ProductCreated:
    """A product was registered with its stock policy."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    sku = String(required=True)
    minimum_stock_level = Integer(default=0)
    created_at = DateTime(required=True)


@inventory.event(part_of="Product")
class ProductUpdated:
    """Product details or stock policy changed."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    minimum_stock_level = Integer(default=0)
    maximum_stock_level = Integer(default=0)
    updated_at = DateTime(required=True)


@inventory.event(part_of="Product")
class ProductDeactivated:
    """A product was withdrawn from use."""

    __version__ = 1

    product_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)
