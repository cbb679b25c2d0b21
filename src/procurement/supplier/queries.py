"""Supplier lookups; deactivated suppliers are hidden."""

from procurement.supplier.supplier import Supplier
from shared.repository import fetch_all, get_active_or_raise


def active_suppliers() -> list[Supplier]:
    return sorted(fetch_all(Supplier, is_active=True), key=lambda s: s.name or "")


def get_supplier(supplier_id) -> Supplier:
    return get_active_or_raise(Supplier, supplier_id)
