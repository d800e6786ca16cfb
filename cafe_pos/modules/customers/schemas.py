# cafe_pos/modules/customers/schemas.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum
from cafe_pos.shared.schemas.common import BaseResponse
from cafe_pos.modules.sales.schemas import SaleDetail


class CustomerTier(str, Enum):
    NORMAL = "normal"
    PREMIUM = "premium"


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Nombre del cliente")
    tier: CustomerTier = Field(CustomerTier.NORMAL, description="normal o premium")
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('El nombre no puede estar vacío')
        return v.strip()

class CustomerStatusUpdate(BaseModel):
    is_active: bool = Field(..., description="Nuevo estado del cliente")

class CustomerInfo(BaseModel):
    id: int
    name: str
    tier: CustomerTier
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}

class CustomerResponse(BaseResponse):
    customer: CustomerInfo

class CustomerListResponse(BaseResponse):
    customers: List[CustomerInfo]
    count: int

class CustomerOrdersResponse(BaseResponse):
    customer: CustomerInfo
    date: str
    orders: List[SaleDetail]
    count: int
