"""Pydantic request/response schemas for the Inventory API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class AddressSchema(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = "USA"


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    sku: str = Field(min_length=1, max_length=50)
    description: str | None = Field(default=None, max_length=500)
    price: float | None = Field(default=None, ge=0)
    cost: float | None = Field(default=None, ge=0)
    category: str | None = None
    brand: str | None = None
    unit: str | None = None
    minimum_stock_level: int | None = Field(default=None, ge=0)
    maximum_stock_level: int | None = Field(default=None, ge=0)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    price: float | None = Field(default=None, ge=0)
    cost: float | None = Field(default=None, ge=0)
    category: str | None = None
    brand: str | None = None
    unit: str | None = None
    minimum_stock_level: int | None = Field(default=None, ge=0)
    maximum_stock_level: int | None = Field(default=None, ge=0)


class ProductResponse(BaseModel):
    product_id: str
    name: str
    sku: str
    description: str | None = None
    price: float | None = None
    cost: float | None = None
    category: str | None = None
    brand: str | None = None
    unit: str | None = None
    minimum_stock_level: int = 0
    maximum_stock_level: int = 0
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductIdResponse(BaseModel):
    product_id: str


# ---------------------------------------------------------------------------
# Warehouses
# ---------------------------------------------------------------------------
class CreateWarehouseRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    address: AddressSchema | None = None
    phone: str | None = None
    email: str | None = None
    manager: str | None = None


class UpdateWarehouseRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    address: AddressSchema | None = None
    phone: str | None = None
    email: str | None = None
    manager: str | None = None


class WarehouseResponse(BaseModel):
    warehouse_id: str
    name: str
    address: AddressSchema | None = None
    location: str = ""
    phone: str | None = None
    email: str | None = None
    manager: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class WarehouseIdResponse(BaseModel):
    warehouse_id: str


# ---------------------------------------------------------------------------
# Inventory records
# ---------------------------------------------------------------------------
class CreateInventoryRecordRequest(BaseModel):
    product_id: str
    warehouse_id: str
    quantity: int = 0
    reserved_quantity: int = 0
    location: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=500)


class UpdateInventoryRecordRequest(BaseModel):
    location: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=500)


class AdjustInventoryRequest(BaseModel):
    type: str
    amount: int


class InventoryRecordResponse(BaseModel):
    inventory_record_id: str
    product_id: str
    warehouse_id: str
    quantity: int
    reserved_quantity: int
    available_quantity: int
    location: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    last_updated: datetime | None = None


class InventoryRecordIdResponse(BaseModel):
    inventory_record_id: str


# ---------------------------------------------------------------------------
# Stock alerts
# ---------------------------------------------------------------------------
class CreateStockAlertRequest(BaseModel):
    product_id: str
    warehouse_id: str
    alert_type: str
    message: str = Field(min_length=1, max_length=200)
    threshold_level: int | None = None
    current_stock: int | None = None


class AcknowledgeAlertRequest(BaseModel):
    acknowledged_by: str = Field(min_length=1, max_length=100)


class ResolveAlertRequest(BaseModel):
    resolution_notes: str | None = Field(default=None, max_length=500)


class StockAlertResponse(BaseModel):
    stock_alert_id: str
    product_id: str
    warehouse_id: str
    alert_type: str
    status: str
    message: str
    threshold_level: int | None = None
    current_stock: int | None = None
    acknowledged_by: str | None = None
    acknowledged_at: datetime | None = None
    resolved_at: datetime | None = None
    resolution_notes: str | None = None
    created_at: datetime | None = None


class StockAlertIdResponse(BaseModel):
    stock_alert_id: str


class ScanResultResponse(BaseModel):
    alerts_created: int
