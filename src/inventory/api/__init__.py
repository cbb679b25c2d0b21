from inventory.api.routes import (
    alert_router,
    inventory_router,
    product_router,
    report_router,
    warehouse_router,
)

__all__ = ["product_router", "warehouse_router", "inventory_router", "alert_router", "report_router"]
