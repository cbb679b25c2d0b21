"""Product lookups for the catalogue endpoints.

Deactivated products are hidden from every lookup here.
"""

from inventory.product.product import Product
from shared.errors import NotFound
from shared.repository import fetch_all, fetch_first, get_active_or_raise


def active_products() -> list[Product]:
    return sorted(fetch_all(Product, is_active=True), key=lambda p: p.name or "")


def get_product(product_id) -> Product:
    return get_active_or_raise(Product, product_id)


def product_by_sku(sku) -> Product:
    product = fetch_first(Product, sku=sku, is_active=True)
    if product is None:
        raise NotFound(f"Product with SKU {sku} not found", details={"sku": sku})
    return product


def _distinct(attribute) -> list[str]:
    values = {getattr(p, attribute) for p in fetch_all(Product, is_active=True)}
    return sorted(value for value in values if value)


def categories() -> list[str]:
    """Distinct, sorted categories of active products."""
    return _distinct("category")


def brands() -> list[str]:
    """Distinct, sorted brands of active products."""
    return _distinct("brand")
