# cafe_pos/modules/sales/router.py
from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.orm import Session

from cafe_pos.config.database import get_db
from cafe_pos.shared.schemas.common import MAX_DB_ID
from .service import SalesService
from .schemas import SaleCreateRequest, SaleResponse, SalesListResponse, SaleDetailResponse

router = APIRouter()


def get_sales_service(request: Request, db: Session = Depends(get_db)) -> SalesService:
    return SalesService(db, default_worker_id=request.app.state.settings.default_worker_id)


@router.post("", response_model=SaleResponse, status_code=status.HTTP_201_CREATED)
def create_sale(
    sale_data: SaleCreateRequest,
    service: SalesService = Depends(get_sales_service)
):
    """
    Registrar un nuevo pedido/venta

    **Incluye:**
    - Validación de cliente activo y stock disponible por producto
    - 20% de descuento para clientes premium
    - 10% de cargo por servicio sobre el subtotal con descuento
    - Descuento de inventario en la misma transacción

    **Errores:** InvalidRequest, CustomerNotFound, ProductNotFound,
    InsufficientStock, InternalError
    """
    return service.place_order(sale_data)


@router.get("", response_model=SalesListResponse)
def list_sales(service: SalesService = Depends(get_sales_service)):
    """Listar todas las ventas (más recientes primero)"""
    return service.list_sales()


@router.get("/{sale_id}", response_model=SaleDetailResponse)
def get_sale_detail(
    sale_id: int = Path(..., gt=0, le=MAX_DB_ID),
    service: SalesService = Depends(get_sales_service)
):
    """Detalle de una venta con sus productos"""
    return service.get_sale_detail(sale_id)
