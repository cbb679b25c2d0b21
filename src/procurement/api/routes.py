"""FastAPI routes for the Procurement domain — suppliers and purchase orders.

Purchase-order handlers serialize on the order (or, for creation, on the
order-number sequence), so those endpoints are plain ``def`` and run in the
threadpool.
"""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from procurement.api.schemas import (
    ChangeStatusRequest,
    CreatePurchaseOrderRequest,
    ItemIdResponse,
    PurchaseOrderCreatedResponse,
    PurchaseOrderItemRequest,
    PurchaseOrderItemResponse,
    PurchaseOrderResponse,
    PurchaseOrderSummaryResponse,
    ReceiveItemRequest,
    RegisterSupplierRequest,
    StatusResponse,
    SupplierIdResponse,
    SupplierResponse,
    UpdatePurchaseOrderItemRequest,
    UpdatePurchaseOrderRequest,
    UpdateSupplierRequest,
)
from procurement.purchase_order import queries
from procurement.purchase_order.creation import CreatePurchaseOrder
from procurement.purchase_order.modification import (
    AddPurchaseOrderItem,
    RemovePurchaseOrderItem,
    UpdatePurchaseOrder,
    UpdatePurchaseOrderItem,
)
from procurement.purchase_order.status import ChangePurchaseOrderStatus, ReceivePurchaseOrderItem
from procurement.supplier import queries as supplier_queries
from procurement.supplier.management import DeactivateSupplier, RegisterSupplier, UpdateSupplier


# ---------------------------------------------------------------------------
# Serializers
# ---------------------------------------------------------------------------
def _supplier(supplier) -> SupplierResponse:
    return SupplierResponse(
        supplier_id=str(supplier.id),
        name=supplier.name,
        street=supplier.street,
        city=supplier.city,
        state=supplier.state,
        zip_code=supplier.zip_code,
        country=supplier.country,
        phone=supplier.phone,
        email=supplier.email,
        contact_person=supplier.contact_person,
        tax_id=supplier.tax_id,
        is_active=supplier.is_active,
        created_at=supplier.created_at,
        updated_at=supplier.updated_at,
    )


def _item(item) -> PurchaseOrderItemResponse:
    return PurchaseOrderItemResponse(
        item_id=str(item.id),
        product_id=str(item.product_id),
        quantity=item.quantity,
        received_quantity=item.received_quantity or 0,
        pending_quantity=item.pending_quantity,
        unit_price=item.unit_price or 0.0,
        total_price=item.total_price,
        notes=item.notes,
    )


def _order(order) -> PurchaseOrderResponse:
    return PurchaseOrderResponse(
        purchase_order_id=str(order.id),
        order_number=order.order_number,
        supplier_id=str(order.supplier_id),
        warehouse_id=str(order.warehouse_id),
        status=order.status,
        order_date=order.order_date,
        expected_delivery_date=order.expected_delivery_date,
        actual_delivery_date=order.actual_delivery_date,
        notes=order.notes,
        total_amount=order.total_amount or 0.0,
        tax_amount=order.tax_amount or 0.0,
        shipping_amount=order.shipping_amount or 0.0,
        grand_total=order.grand_total,
        items=[_item(item) for item in order.items or []],
    )


# ---------------------------------------------------------------------------
# Supplier Router
# ---------------------------------------------------------------------------
supplier_router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@supplier_router.post("", status_code=201, response_model=SupplierIdResponse)
async def register_supplier(body: RegisterSupplierRequest) -> SupplierIdResponse:
    result = current_domain.process(RegisterSupplier(**body.model_dump()), asynchronous=False)
    return SupplierIdResponse(supplier_id=result)


@supplier_router.get("", response_model=list[SupplierResponse])
async def list_suppliers() -> list[SupplierResponse]:
    return [_supplier(s) for s in supplier_queries.active_suppliers()]


@supplier_router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(supplier_id: str) -> SupplierResponse:
    return _supplier(supplier_queries.get_supplier(supplier_id))


@supplier_router.put("/{supplier_id}", response_model=StatusResponse)
async def update_supplier(supplier_id: str, body: UpdateSupplierRequest) -> StatusResponse:
    current_domain.process(UpdateSupplier(supplier_id=supplier_id, **body.model_dump()), asynchronous=False)
    return StatusResponse()


@supplier_router.delete("/{supplier_id}", response_model=StatusResponse)
async def deactivate_supplier(supplier_id: str) -> StatusResponse:
    current_domain.process(DeactivateSupplier(supplier_id=supplier_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Purchase Order Router
# ---------------------------------------------------------------------------
purchase_order_router = APIRouter(prefix="/purchase-orders", tags=["purchase-orders"])


@purchase_order_router.post("", status_code=201, response_model=PurchaseOrderCreatedResponse)
def create_purchase_order(body: CreatePurchaseOrderRequest) -> PurchaseOrderCreatedResponse:
    command = CreatePurchaseOrder(
        supplier_id=body.supplier_id,
        warehouse_id=body.warehouse_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        expected_delivery_date=body.expected_delivery_date,
        notes=body.notes,
        tax_amount=body.tax_amount,
        shipping_amount=body.shipping_amount,
    )
    order = current_domain.process(command, asynchronous=False)
    return PurchaseOrderCreatedResponse(purchase_order_id=str(order.id), order_number=order.order_number)


@purchase_order_router.get("", response_model=list[PurchaseOrderResponse])
async def list_purchase_orders() -> list[PurchaseOrderResponse]:
    return [_order(o) for o in queries.list_purchase_orders()]


@purchase_order_router.get("/summary", response_model=PurchaseOrderSummaryResponse)
async def get_purchase_order_summary() -> PurchaseOrderSummaryResponse:
    return PurchaseOrderSummaryResponse(**queries.purchase_order_summary())


@purchase_order_router.get("/status/{status}", response_model=list[PurchaseOrderResponse])
async def list_purchase_orders_by_status(status: str) -> list[PurchaseOrderResponse]:
    return [_order(o) for o in queries.purchase_orders_by_status(status)]


@purchase_order_router.get("/items/{item_id}", response_model=PurchaseOrderItemResponse)
async def get_purchase_order_item(item_id: str) -> PurchaseOrderItemResponse:
    _, item = queries.find_item(item_id)
    return _item(item)


@purchase_order_router.put("/items/{item_id}", response_model=PurchaseOrderItemResponse)
def update_purchase_order_item(item_id: str, body: UpdatePurchaseOrderItemRequest) -> PurchaseOrderItemResponse:
    order, _ = queries.find_item(item_id)
    command = UpdatePurchaseOrderItem(purchase_order_id=str(order.id), item_id=item_id, **body.model_dump())
    updated = current_domain.process(command, asynchronous=False)
    return _item(updated.get_item(item_id))


@purchase_order_router.delete("/items/{item_id}", response_model=StatusResponse)
def remove_purchase_order_item(item_id: str) -> StatusResponse:
    order, _ = queries.find_item(item_id)
    command = RemovePurchaseOrderItem(purchase_order_id=str(order.id), item_id=item_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@purchase_order_router.get("/{purchase_order_id}", response_model=PurchaseOrderResponse)
async def get_purchase_order(purchase_order_id: str) -> PurchaseOrderResponse:
    return _order(queries.get_purchase_order(purchase_order_id))


@purchase_order_router.put("/{purchase_order_id}", response_model=PurchaseOrderResponse)
def update_purchase_order(purchase_order_id: str, body: UpdatePurchaseOrderRequest) -> PurchaseOrderResponse:
    command = UpdatePurchaseOrder(purchase_order_id=purchase_order_id, **body.model_dump())
    return _order(current_domain.process(command, asynchronous=False))


@purchase_order_router.put("/{purchase_order_id}/status", response_model=PurchaseOrderResponse)
def change_purchase_order_status(purchase_order_id: str, body: ChangeStatusRequest) -> PurchaseOrderResponse:
    command = ChangePurchaseOrderStatus(purchase_order_id=purchase_order_id, status=body.status)
    return _order(current_domain.process(command, asynchronous=False))


@purchase_order_router.post("/{purchase_order_id}/items", status_code=201, response_model=ItemIdResponse)
def add_purchase_order_item(purchase_order_id: str, body: PurchaseOrderItemRequest) -> ItemIdResponse:
    command = AddPurchaseOrderItem(purchase_order_id=purchase_order_id, **body.model_dump())
    item_id = current_domain.process(command, asynchronous=False)
    return ItemIdResponse(item_id=item_id)


@purchase_order_router.post(
    "/{purchase_order_id}/items/{item_id}/receive",
    response_model=PurchaseOrderResponse,
)
def receive_purchase_order_item(
    purchase_order_id: str, item_id: str, body: ReceiveItemRequest
) -> PurchaseOrderResponse:
    command = ReceivePurchaseOrderItem(purchase_order_id=purchase_order_id, item_id=item_id, quantity=body.quantity)
    return _order(current_domain.process(command, asynchronous=False))
