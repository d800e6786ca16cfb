# cafe_pos/modules/sales/service.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from cafe_pos.config.database import transaction_scope
from cafe_pos.core.exceptions import DomainError, InternalError, NotFound
from cafe_pos.shared.database.models import Sale
from .assembler import OrderAssembler
from .repository import SalesRepository
from .schemas import (
    OrderPhase, SaleCreateRequest, SaleResponse, SalesListResponse,
    SaleDetailResponse, SaleSummary, SaleDetail, SaleItemDetail
)

logger = logging.getLogger(__name__)


class SalesService:
    def __init__(self, db: Session, default_worker_id: int = 1):
        self.db = db
        self.repository = SalesRepository(db)
        self.assembler = OrderAssembler(db, default_worker_id)

    def place_order(self, sale_data: SaleCreateRequest) -> SaleResponse:
        """
        Registrar una venta completa.

        started → validating → pricing → persisting → committed | rolled_back

        Las lecturas de validación y todas las escrituras comparten una única
        transacción; ante cualquier falla se hace rollback antes de propagar
        el error. No hay reintentos automáticos.
        """
        phase = OrderPhase.STARTED
        logger.info(f"Iniciando venta - Cliente: {sale_data.customer_id}")

        try:
            with transaction_scope(self.db):
                phase = OrderPhase.VALIDATING
                validated = self.assembler.validate(sale_data)

                phase = OrderPhase.PRICING
                order = self.assembler.price(validated)

                phase = OrderPhase.PERSISTING
                sale = self.repository.create_sale_atomic(order)
                sale_id, sale_number = sale.id, sale.sale_number

        except DomainError as e:
            logger.warning(f"Venta {OrderPhase.ROLLED_BACK.value} en fase '{phase.value}': {e.kind.value} - {e.message}")
            e.details.setdefault("phase", phase.value)
            raise
        except SQLAlchemyError as e:
            logger.exception(f"Error de base de datos en fase '{phase.value}'")
            raise InternalError(
                "Error interno registrando la venta",
                details={"phase": phase.value, "error": str(e)}
            ) from e
        except Exception as e:
            logger.exception(f"Error inesperado en fase '{phase.value}'")
            raise InternalError(
                f"Error creando venta: {str(e)}",
                details={"phase": phase.value}
            ) from e

        logger.info(f"✅ Transacción completada - Venta #{sale_id} ({sale_number}) [{OrderPhase.COMMITTED.value}]")

        return SaleResponse(
            success=True,
            message="Venta registrada exitosamente",
            sale_id=sale_id,
            sale_number=sale_number,
            customer_name=order.customer_name,
            subtotal=order.subtotal,
            discount=order.discount,
            service_charge=order.service_charge,
            total=order.total,
            items_count=len(order.lines)
        )

    def list_sales(self) -> SalesListResponse:
        sales = self.repository.get_all_sales()
        return SalesListResponse(
            success=True,
            message="Ventas obtenidas",
            sales=[self._to_summary(sale) for sale in sales],
            count=len(sales)
        )

    def get_sale_detail(self, sale_id: int) -> SaleDetailResponse:
        sale = self.repository.get_sale_with_items(sale_id)
        if not sale:
            raise NotFound(f"Venta {sale_id} no encontrada", details={"sale_id": sale_id})

        return SaleDetailResponse(
            success=True,
            message="Detalle de venta",
            sale=self.to_detail(sale)
        )

    # MÉTODOS PRIVADOS HELPERS

    @staticmethod
    def _to_summary(sale: Sale) -> SaleSummary:
        return SaleSummary(
            id=sale.id,
            sale_number=sale.sale_number,
            customer_id=sale.customer_id,
            customer_name=sale.customer.name if sale.customer else None,
            customer_tier=sale.customer.tier if sale.customer else None,
            worker_id=sale.worker_id,
            worker_name=sale.worker.name if sale.worker else None,
            subtotal=sale.subtotal,
            discount=sale.discount,
            service_charge=sale.service_charge,
            total=sale.total,
            sale_date=sale.sale_date
        )

    @classmethod
    def to_detail(cls, sale: Sale) -> SaleDetail:
        summary = cls._to_summary(sale)
        return SaleDetail(
            **summary.model_dump(),
            items=[
                SaleItemDetail(
                    id=item.id,
                    product_id=item.product_id,
                    product_code=item.product.code if item.product else None,
                    product_name=item.product.name if item.product else None,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal
                )
                for item in sale.items
            ]
        )
