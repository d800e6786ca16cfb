# cafe_pos/modules/sales/schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from enum import Enum
from cafe_pos.shared.schemas.common import BaseResponse, MAX_DB_ID


class OrderPhase(str, Enum):
    STARTED = "started"
    VALIDATING = "validating"
    PRICING = "pricing"
    PERSISTING = "persisting"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


# ===== REQUEST =====

class SaleItemRequest(BaseModel):
    # Presencia y cantidad positiva se validan en OrderAssembler, en orden de envío;
    # los límites evitan que un ID fuera de rango llegue al driver
    product_id: Optional[int] = Field(None, ge=1, le=MAX_DB_ID, description="ID del producto")
    quantity: Optional[int] = Field(None, le=MAX_DB_ID, description="Cantidad solicitada")

class SaleCreateRequest(BaseModel):
    customer_id: Optional[int] = Field(None, ge=1, le=MAX_DB_ID, description="ID del cliente")
    worker_id: Optional[int] = Field(None, ge=1, le=MAX_DB_ID, description="ID del trabajador (por defecto el del sistema)")
    items: Optional[List[SaleItemRequest]] = Field(None, description="Productos de la venta")


# ===== AGREGADO (no persistido) =====

class AssembledLine(BaseModel):
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

class AssembledOrder(BaseModel):
    customer_id: int
    customer_name: str
    customer_tier: str
    worker_id: int
    lines: List[AssembledLine]
    subtotal: Decimal
    discount: Decimal
    service_charge: Decimal
    total: Decimal


# ===== RESPONSES =====

class SaleResponse(BaseResponse):
    sale_id: int
    sale_number: str
    customer_name: str
    subtotal: Decimal
    discount: Decimal
    service_charge: Decimal
    total: Decimal
    items_count: int

class SaleItemDetail(BaseModel):
    id: int
    product_id: int
    product_code: Optional[str] = None
    product_name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    subtotal: Decimal

class SaleSummary(BaseModel):
    id: int
    sale_number: str
    customer_id: int
    customer_name: Optional[str] = None
    customer_tier: Optional[str] = None
    worker_id: int
    worker_name: Optional[str] = None
    subtotal: Decimal
    discount: Decimal
    service_charge: Decimal
    total: Decimal
    sale_date: datetime

class SaleDetail(SaleSummary):
    items: List[SaleItemDetail]

class SalesListResponse(BaseResponse):
    sales: List[SaleSummary]
    count: int

class SaleDetailResponse(BaseResponse):
    sale: SaleDetail
