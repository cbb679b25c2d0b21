from procurement.api.routes import purchase_order_router, supplier_router

__all__ = ["supplier_router", "purchase_order_router"]
