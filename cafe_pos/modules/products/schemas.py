# cafe_pos/modules/products/schemas.py
from pydantic import BaseModel, Field, field_validator
from typing import List
from decimal import Decimal
from datetime import datetime
from cafe_pos.shared.schemas.common import BaseResponse, MAX_DB_ID

class ProductCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50, description="Código único del producto")
    name: str = Field(..., min_length=1, max_length=255, description="Nombre del producto")
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Precio unitario")
    stock: int = Field(0, ge=0, le=MAX_DB_ID, description="Stock inicial")

    @field_validator('code', 'name')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('El campo no puede estar vacío')
        return v.strip()

class PriceUpdate(BaseModel):
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Nuevo precio")

class StockIncrement(BaseModel):
    quantity: int = Field(..., gt=0, le=MAX_DB_ID, description="Cantidad a sumar al stock")

class ProductInfo(BaseModel):
    id: int
    code: str
    name: str
    price: Decimal
    stock: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

class ProductResponse(BaseResponse):
    product: ProductInfo

class ProductListResponse(BaseResponse):
    products: List[ProductInfo]
    count: int
