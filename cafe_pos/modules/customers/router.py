# cafe_pos/modules/customers/router.py
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional

from cafe_pos.config.database import get_db
from cafe_pos.shared.schemas.common import MAX_DB_ID
from .service import CustomersService
from .schemas import (
    CustomerCreate, CustomerStatusUpdate, CustomerTier,
    CustomerResponse, CustomerListResponse, CustomerOrdersResponse
)

router = APIRouter()


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(customer_data: CustomerCreate, db: Session = Depends(get_db)):
    """Registrar un nuevo cliente (normal o premium)"""
    service = CustomersService(db)
    return service.create_customer(customer_data)


@router.get("", response_model=CustomerListResponse)
def list_customers(db: Session = Depends(get_db)):
    """Listar todos los clientes"""
    service = CustomersService(db)
    return service.list_customers()


@router.get("/normal", response_model=CustomerListResponse)
def list_normal_customers(db: Session = Depends(get_db)):
    service = CustomersService(db)
    return service.list_customers(CustomerTier.NORMAL)


@router.get("/premium", response_model=CustomerListResponse)
def list_premium_customers(db: Session = Depends(get_db)):
    service = CustomersService(db)
    return service.list_customers(CustomerTier.PREMIUM)


@router.delete("/{customer_id}", response_model=CustomerResponse)
def deactivate_customer(customer_id: int = Path(..., gt=0, le=MAX_DB_ID), db: Session = Depends(get_db)):
    """Desactivar un cliente: deja de poder realizar pedidos"""
    service = CustomersService(db)
    return service.deactivate_customer(customer_id)


@router.put("/{customer_id}/status", response_model=CustomerResponse)
def update_customer_status(
    status_data: CustomerStatusUpdate,
    customer_id: int = Path(..., gt=0, le=MAX_DB_ID),
    db: Session = Depends(get_db)
):
    service = CustomersService(db)
    return service.update_status(customer_id, status_data)


@router.get("/{customer_id}/orders", response_model=CustomerOrdersResponse)
def get_customer_orders(
    customer_id: int = Path(..., gt=0, le=MAX_DB_ID),
    target_date: Optional[date] = Query(None, alias="date", description="Fecha YYYY-MM-DD (por defecto hoy)"),
    db: Session = Depends(get_db)
):
    """Detalle de los pedidos de un cliente para una fecha determinada"""
    service = CustomersService(db)
    return service.get_orders_for_date(customer_id, target_date or date.today())
