"""Stockroom FastAPI application.

Multi-domain web server that processes commands synchronously via HTTP.
Each request is wrapped in the correct domain context based on URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the config overlay (memory stores by default,
# PostgreSQL under "production").
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from inventory.domain import inventory  # noqa: E402
from procurement.domain import procurement  # noqa: E402

from shared.api import register_exception_handlers

inventory.init()
procurement.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/products": inventory,
    "/warehouses": inventory,
    "/inventory": inventory,
    "/stock-alerts": inventory,
    "/reports": inventory,
    "/suppliers": procurement,
    "/purchase-orders": procurement,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Stockroom API",
    description="Inventory ledger, stock alerts and purchase orders",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    if domain is not None:
        with domain.domain_context():
            response = await call_next(request)
        return response
    # No domain match — pass through (health check, docs, etc.)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from inventory.api import (  # noqa: E402
    alert_router,
    inventory_router,
    product_router,
    report_router,
    warehouse_router,
)
from procurement.api import purchase_order_router, supplier_router  # noqa: E402

app.include_router(product_router)
app.include_router(warehouse_router)
app.include_router(inventory_router)
app.include_router(alert_router)
app.include_router(report_router)
app.include_router(supplier_router)
app.include_router(purchase_order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "inventory": {"name": inventory.name},
                "procurement": {"name": procurement.name},
            },
        }
    )
