"""Product management — commands and handler.

SKU uniqueness is a cross-instance rule, so it is checked here against the
repository (the ``unique`` field constraint remains as the storage backstop).
"""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from inventory.domain import inventory
from inventory.product.product import Product
from shared.errors import DuplicateKey
from shared.locking import serialized
from shared.repository import fetch_first, get_active_or_raise


def sku_key(sku) -> str:
    return f"product-sku:{sku}"


@inventory.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=100)
    sku = String(required=True, max_length=50)
    description = String(max_length=500)
    price = Float()
    cost = Float()
    category = String(max_length=100)
    brand = String(max_length=100)
    unit = String(max_length=50)
    minimum_stock_level = Integer()
    maximum_stock_level = Integer()


@inventory.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=100)
    description = String(max_length=500)
    price = Float()
    cost = Float()
    category = String(max_length=100)
    brand = String(max_length=100)
    unit = String(max_length=50)
    minimum_stock_level = Integer()
    maximum_stock_level = Integer()


@inventory.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)


_DETAIL_FIELDS = (
    "description",
    "price",
    "cost",
    "category",
    "brand",
    "unit",
    "minimum_stock_level",
    "maximum_stock_level",
)


@inventory.command_handler(part_of=Product)
class ProductManagementHandler:
    @serialized(lambda command: sku_key(command.sku))
    @handle(CreateProduct)
    def create_product(self, command):
        if fetch_first(Product, sku=command.sku) is not None:
            raise DuplicateKey(f"A product with SKU {command.sku} already exists", details={"sku": command.sku})

        details = {
            name: getattr(command, name) for name in _DETAIL_FIELDS if getattr(command, name) is not None
        }
        product = Product.create(name=command.name, sku=command.sku, **details)
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        product = get_active_or_raise(Product, command.product_id)
        product.update_details(
            name=command.name,
            **{name: getattr(command, name) for name in _DETAIL_FIELDS},
        )
        current_domain.repository_for(Product).add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        product = get_active_or_raise(Product, command.product_id)
        product.deactivate()
        current_domain.repository_for(Product).add(product)
