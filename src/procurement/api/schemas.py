"""Pydantic request/response schemas for the Procurement API."""

from datetime import date, datetime

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    status: str = "ok"


# ---------------------------------------------------------------------------
# Suppliers
# ---------------------------------------------------------------------------
class SupplierDetails(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None
    phone: str | None = None
    email: str | None = None
    contact_person: str | None = None
    tax_id: str | None = None


class RegisterSupplierRequest(SupplierDetails):
    name: str = Field(min_length=1, max_length=100)


class UpdateSupplierRequest(SupplierDetails):
    name: str | None = Field(default=None, max_length=100)


class SupplierResponse(SupplierDetails):
    supplier_id: str
    name: str
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SupplierIdResponse(BaseModel):
    supplier_id: str


# ---------------------------------------------------------------------------
# Purchase orders
# ---------------------------------------------------------------------------
class PurchaseOrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)
    unit_price: float = Field(default=0.0, ge=0)
    notes: str | None = Field(default=None, max_length=200)


class UpdatePurchaseOrderItemRequest(BaseModel):
    quantity: int | None = Field(default=None, ge=1)
    unit_price: float | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=200)


class CreatePurchaseOrderRequest(BaseModel):
    supplier_id: str
    warehouse_id: str
    items: list[PurchaseOrderItemRequest] = Field(default_factory=list)
    expected_delivery_date: date | None = None
    notes: str | None = None
    tax_amount: float = Field(default=0.0, ge=0)
    shipping_amount: float = Field(default=0.0, ge=0)


class UpdatePurchaseOrderRequest(BaseModel):
    supplier_id: str | None = None
    warehouse_id: str | None = None
    expected_delivery_date: date | None = None
    notes: str | None = None
    tax_amount: float | None = Field(default=None, ge=0)
    shipping_amount: float | None = Field(default=None, ge=0)


class ChangeStatusRequest(BaseModel):
    status: str


class ReceiveItemRequest(BaseModel):
    quantity: int = Field(ge=1)


class PurchaseOrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    quantity: int
    received_quantity: int
    pending_quantity: int
    unit_price: float
    total_price: float
    notes: str | None = None


class PurchaseOrderResponse(BaseModel):
    purchase_order_id: str
    order_number: str
    supplier_id: str
    warehouse_id: str
    status: str
    order_date: datetime | None = None
    expected_delivery_date: date | None = None
    actual_delivery_date: datetime | None = None
    notes: str | None = None
    total_amount: float
    tax_amount: float
    shipping_amount: float
    grand_total: float
    items: list[PurchaseOrderItemResponse] = Field(default_factory=list)


class PurchaseOrderCreatedResponse(BaseModel):
    purchase_order_id: str
    order_number: str


class ItemIdResponse(BaseModel):
    item_id: str


class PurchaseOrderSummaryResponse(BaseModel):
    total_orders: int
    draft_orders: int
    pending_orders: int
    received_orders: int
    total_value: float
