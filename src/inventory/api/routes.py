"""FastAPI routes for the Inventory domain.

Thin adapters that translate HTTP requests into domain commands and render
read-side queries. Endpoints whose command handler waits on a key lock are
plain ``def`` so FastAPI runs them in its threadpool.
"""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from inventory.alerts import queries as alert_queries
from inventory.alerts.management import (
    AcknowledgeStockAlert,
    DeleteStockAlert,
    RaiseStockAlert,
    ResolveStockAlert,
)
from inventory.alerts.scan import ScanLowStock
from inventory.api.schemas import (
    AcknowledgeAlertRequest,
    AddressSchema,
    AdjustInventoryRequest,
    CreateInventoryRecordRequest,
    CreateProductRequest,
    CreateStockAlertRequest,
    CreateWarehouseRequest,
    InventoryRecordIdResponse,
    InventoryRecordResponse,
    ProductIdResponse,
    ProductResponse,
    ResolveAlertRequest,
    ScanResultResponse,
    StatusResponse,
    StockAlertIdResponse,
    StockAlertResponse,
    UpdateInventoryRecordRequest,
    UpdateProductRequest,
    UpdateWarehouseRequest,
    WarehouseIdResponse,
    WarehouseResponse,
)
from inventory.ledger import queries as ledger_queries
from inventory.ledger.adjustment import AdjustInventory
from inventory.ledger.stocking import (
    CreateInventoryRecord,
    DeleteInventoryRecord,
    UpdateInventoryRecord,
)
from inventory.product import queries as product_queries
from inventory.product.management import CreateProduct, DeactivateProduct, UpdateProduct
from inventory.reporting import summaries
from inventory.warehouse import queries as warehouse_queries
from inventory.warehouse.management import CreateWarehouse, DeactivateWarehouse, UpdateWarehouse


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _product(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        sku=product.sku,
        description=product.description,
        price=product.price,
        cost=product.cost,
        category=product.category,
        brand=product.brand,
        unit=product.unit,
        minimum_stock_level=product.minimum_stock_level or 0,
        maximum_stock_level=product.maximum_stock_level or 0,
        is_active=product.is_active,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def _warehouse(warehouse) -> WarehouseResponse:
    address = None
    if warehouse.address:
        address = AddressSchema(
            street=warehouse.address.street,
            city=warehouse.address.city,
            state=warehouse.address.state,
            zip_code=warehouse.address.zip_code,
            country=warehouse.address.country,
        )
    return WarehouseResponse(
        warehouse_id=str(warehouse.id),
        name=warehouse.name,
        address=address,
        location=warehouse.location,
        phone=warehouse.phone,
        email=warehouse.email,
        manager=warehouse.manager,
        is_active=warehouse.is_active,
        created_at=warehouse.created_at,
        updated_at=warehouse.updated_at,
    )


def _record(record) -> InventoryRecordResponse:
    return InventoryRecordResponse(
        inventory_record_id=str(record.id),
        product_id=str(record.product_id),
        warehouse_id=str(record.warehouse_id),
        quantity=record.quantity or 0,
        reserved_quantity=record.reserved_quantity or 0,
        available_quantity=record.available_quantity,
        location=record.location,
        notes=record.notes,
        created_at=record.created_at,
        last_updated=record.last_updated,
    )


def _alert(alert) -> StockAlertResponse:
    return StockAlertResponse(
        stock_alert_id=str(alert.id),
        product_id=str(alert.product_id),
        warehouse_id=str(alert.warehouse_id),
        alert_type=alert.alert_type,
        status=alert.status,
        message=alert.message,
        threshold_level=alert.threshold_level,
        current_stock=alert.current_stock,
        acknowledged_by=alert.acknowledged_by,
        acknowledged_at=alert.acknowledged_at,
        resolved_at=alert.resolved_at,
        resolution_notes=alert.resolution_notes,
        created_at=alert.created_at,
    )


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(**body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    return [_product(p) for p in product_queries.active_products()]


@product_router.get("/categories", response_model=list[str])
async def list_categories() -> list[str]:
    return product_queries.categories()


@product_router.get("/brands", response_model=list[str])
async def list_brands() -> list[str]:
    return product_queries.brands()


@product_router.get("/sku/{sku}", response_model=ProductResponse)
async def get_product_by_sku(sku: str) -> ProductResponse:
    return _product(product_queries.product_by_sku(sku))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product(product_queries.get_product(product_id))


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(product_id=product_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def deactivate_product(product_id: str) -> StatusResponse:
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Warehouse Router
# ---------------------------------------------------------------------------
warehouse_router = APIRouter(prefix="/warehouses", tags=["warehouses"])


@warehouse_router.post("", status_code=201, response_model=WarehouseIdResponse)
async def create_warehouse(body: CreateWarehouseRequest) -> WarehouseIdResponse:
    command = CreateWarehouse(
        name=body.name,
        address=json.dumps(body.address.model_dump()) if body.address else None,
        phone=body.phone,
        email=body.email,
        manager=body.manager,
    )
    result = current_domain.process(command, asynchronous=False)
    return WarehouseIdResponse(warehouse_id=result)


@warehouse_router.get("", response_model=list[WarehouseResponse])
async def list_warehouses() -> list[WarehouseResponse]:
    return [_warehouse(w) for w in warehouse_queries.active_warehouses()]


@warehouse_router.get("/{warehouse_id}", response_model=WarehouseResponse)
async def get_warehouse(warehouse_id: str) -> WarehouseResponse:
    return _warehouse(warehouse_queries.get_warehouse(warehouse_id))


@warehouse_router.put("/{warehouse_id}", response_model=StatusResponse)
async def update_warehouse(warehouse_id: str, body: UpdateWarehouseRequest) -> StatusResponse:
    command = UpdateWarehouse(
        warehouse_id=warehouse_id,
        name=body.name,
        address=json.dumps(body.address.model_dump()) if body.address else None,
        phone=body.phone,
        email=body.email,
        manager=body.manager,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@warehouse_router.delete("/{warehouse_id}", response_model=StatusResponse)
async def deactivate_warehouse(warehouse_id: str) -> StatusResponse:
    current_domain.process(DeactivateWarehouse(warehouse_id=warehouse_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Inventory Router
# ---------------------------------------------------------------------------
inventory_router = APIRouter(prefix="/inventory", tags=["inventory"])


@inventory_router.post("", status_code=201, response_model=InventoryRecordIdResponse)
def create_inventory_record(body: CreateInventoryRecordRequest) -> InventoryRecordIdResponse:
    command = CreateInventoryRecord(**body.model_dump())
    result = current_domain.process(command, asynchronous=False)
    return InventoryRecordIdResponse(inventory_record_id=result)


@inventory_router.get("", response_model=list[InventoryRecordResponse])
async def list_inventory() -> list[InventoryRecordResponse]:
    return [_record(r) for r in ledger_queries.list_records()]


@inventory_router.get("/low-stock", response_model=list[InventoryRecordResponse])
async def list_low_stock() -> list[InventoryRecordResponse]:
    return [_record(record) for record, _ in ledger_queries.low_stock_records()]


@inventory_router.get("/summary")
async def get_inventory_summary() -> dict:
    return summaries.inventory_summary()


@inventory_router.get("/product/{product_id}", response_model=list[InventoryRecordResponse])
async def list_inventory_for_product(product_id: str) -> list[InventoryRecordResponse]:
    return [_record(r) for r in ledger_queries.records_for_product(product_id)]


@inventory_router.get("/warehouse/{warehouse_id}", response_model=list[InventoryRecordResponse])
async def list_inventory_for_warehouse(warehouse_id: str) -> list[InventoryRecordResponse]:
    return [_record(r) for r in ledger_queries.records_for_warehouse(warehouse_id)]


@inventory_router.get("/{inventory_record_id}", response_model=InventoryRecordResponse)
async def get_inventory_record(inventory_record_id: str) -> InventoryRecordResponse:
    return _record(ledger_queries.get_record(inventory_record_id))


@inventory_router.put("/{inventory_record_id}", response_model=StatusResponse)
def update_inventory_record(inventory_record_id: str, body: UpdateInventoryRecordRequest) -> StatusResponse:
    command = UpdateInventoryRecord(inventory_record_id=inventory_record_id, **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@inventory_router.post("/{inventory_record_id}/adjust", response_model=InventoryRecordResponse)
def adjust_inventory(inventory_record_id: str, body: AdjustInventoryRequest) -> InventoryRecordResponse:
    command = AdjustInventory(
        inventory_record_id=inventory_record_id,
        adjustment_type=body.type,
        amount=body.amount,
    )
    record = current_domain.process(command, asynchronous=False)
    return _record(record)


@inventory_router.delete("/{inventory_record_id}", response_model=StatusResponse)
def delete_inventory_record(inventory_record_id: str) -> StatusResponse:
    command = DeleteInventoryRecord(inventory_record_id=inventory_record_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Stock Alert Router
# ---------------------------------------------------------------------------
alert_router = APIRouter(prefix="/stock-alerts", tags=["stock-alerts"])


@alert_router.post("", status_code=201, response_model=StockAlertIdResponse)
def create_stock_alert(body: CreateStockAlertRequest) -> StockAlertIdResponse:
    result = current_domain.process(RaiseStockAlert(**body.model_dump()), asynchronous=False)
    return StockAlertIdResponse(stock_alert_id=result)


@alert_router.get("", response_model=list[StockAlertResponse])
async def list_stock_alerts() -> list[StockAlertResponse]:
    return [_alert(a) for a in alert_queries.list_alerts()]


@alert_router.get("/active", response_model=list[StockAlertResponse])
async def list_active_alerts() -> list[StockAlertResponse]:
    return [_alert(a) for a in alert_queries.active_alerts()]


@alert_router.get("/summary")
async def get_alert_summary() -> dict:
    return alert_queries.alert_summary()


@alert_router.get("/status/{status}", response_model=list[StockAlertResponse])
async def list_alerts_by_status(status: str) -> list[StockAlertResponse]:
    return [_alert(a) for a in alert_queries.alerts_by_status(status)]


@alert_router.get("/type/{alert_type}", response_model=list[StockAlertResponse])
async def list_alerts_by_type(alert_type: str) -> list[StockAlertResponse]:
    return [_alert(a) for a in alert_queries.alerts_by_type(alert_type)]


@alert_router.post("/check-low-stock", response_model=ScanResultResponse)
def check_low_stock() -> ScanResultResponse:
    created = current_domain.process(ScanLowStock(), asynchronous=False)
    return ScanResultResponse(alerts_created=created)


@alert_router.get("/{stock_alert_id}", response_model=StockAlertResponse)
async def get_stock_alert(stock_alert_id: str) -> StockAlertResponse:
    return _alert(alert_queries.get_alert(stock_alert_id))


@alert_router.put("/{stock_alert_id}/acknowledge", response_model=StockAlertResponse)
def acknowledge_alert(stock_alert_id: str, body: AcknowledgeAlertRequest) -> StockAlertResponse:
    command = AcknowledgeStockAlert(stock_alert_id=stock_alert_id, acknowledged_by=body.acknowledged_by)
    return _alert(current_domain.process(command, asynchronous=False))


@alert_router.put("/{stock_alert_id}/resolve", response_model=StockAlertResponse)
def resolve_alert(stock_alert_id: str, body: ResolveAlertRequest) -> StockAlertResponse:
    command = ResolveStockAlert(stock_alert_id=stock_alert_id, resolution_notes=body.resolution_notes)
    return _alert(current_domain.process(command, asynchronous=False))


@alert_router.delete("/{stock_alert_id}", response_model=StatusResponse)
def delete_stock_alert(stock_alert_id: str) -> StatusResponse:
    current_domain.process(DeleteStockAlert(stock_alert_id=stock_alert_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Report Router
# ---------------------------------------------------------------------------
report_router = APIRouter(prefix="/reports", tags=["reports"])


@report_router.get("/low-stock")
async def low_stock_report() -> list[dict]:
    return summaries.low_stock_report()


@report_router.get("/inventory-value")
async def inventory_value_report() -> list[dict]:
    return summaries.inventory_value_report()


@report_router.get("/top-products")
async def top_products_report() -> list[dict]:
    return summaries.top_products_by_value()


@report_router.get("/warehouse-summary")
async def warehouse_summary_report() -> list[dict]:
    return summaries.warehouse_summary()


@report_router.get("/overview")
async def overview_report() -> dict:
    return summaries.inventory_summary()
