# cafe_pos/modules/products/router.py
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from cafe_pos.config.database import get_db
from cafe_pos.shared.schemas.common import MAX_DB_ID
from .service import ProductsService
from .schemas import (
    ProductCreate, PriceUpdate, StockIncrement,
    ProductResponse, ProductListResponse
)

router = APIRouter()


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(product_data: ProductCreate, db: Session = Depends(get_db)):
    """Registrar un nuevo producto (código único)"""
    service = ProductsService(db)
    return service.create_product(product_data)


@router.get("", response_model=ProductListResponse)
def list_products(db: Session = Depends(get_db)):
    """Listar productos disponibles (activos), ordenados por nombre"""
    service = ProductsService(db)
    return service.list_products()


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: int = Path(..., gt=0, le=MAX_DB_ID), db: Session = Depends(get_db)):
    service = ProductsService(db)
    return service.get_product(product_id)


@router.delete("/{product_id}", response_model=ProductResponse)
def deactivate_product(product_id: int = Path(..., gt=0, le=MAX_DB_ID), db: Session = Depends(get_db)):
    """Deshabilitar un producto (no se borra, deja de estar disponible para la venta)"""
    service = ProductsService(db)
    return service.deactivate_product(product_id)


@router.put("/{product_id}/price", response_model=ProductResponse)
def update_price(
    price_data: PriceUpdate,
    product_id: int = Path(..., gt=0, le=MAX_DB_ID),
    db: Session = Depends(get_db)
):
    """Actualizar el precio de un producto activo. Las ventas ya registradas conservan su precio."""
    service = ProductsService(db)
    return service.update_price(product_id, price_data)


@router.put("/{product_id}/stock", response_model=ProductResponse)
def increment_stock(
    stock_data: StockIncrement,
    product_id: int = Path(..., gt=0, le=MAX_DB_ID),
    db: Session = Depends(get_db)
):
    """Incrementar el stock de un producto activo"""
    service = ProductsService(db)
    return service.increment_stock(product_id, stock_data)
