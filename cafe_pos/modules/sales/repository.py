# cafe_pos/modules/sales/repository.py
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import and_
from typing import List, Optional
from datetime import datetime, date, timedelta
import itertools
import logging
import secrets
import threading
import time

from cafe_pos.shared.database.models import Sale, SaleItem
from cafe_pos.shared.services.inventory_service import InventoryService
from .schemas import AssembledOrder

logger = logging.getLogger(__name__)

_sequence = itertools.count(1)
_sequence_lock = threading.Lock()


def generate_sale_number() -> str:
    """
    Número de venta legible: V + milisegundos + secuencia del proceso +
    sufijo aleatorio. La unicidad definitiva la garantiza el UNIQUE de
    sales.sale_number.
    """
    with _sequence_lock:
        seq = next(_sequence) % 10000
    return f"V{int(time.time() * 1000)}{seq:04d}{secrets.token_hex(2).upper()}"


class SalesRepository:
    def __init__(self, db: Session):
        self.db = db
        self.inventory_service = InventoryService()

    def create_sale_atomic(self, order: AssembledOrder) -> Sale:
        """
        Escribir la venta completa dentro de la transacción abierta.

        Proceso:
        1. Insertar cabecera (flush para obtener sale.id)
        2. Insertar cada SaleItem con el precio capturado
        3. Descontar stock con UPDATE condicional por línea

        No hace commit ni rollback: el llamador delimita la transacción
        (transaction_scope) para que incluya también las lecturas de validación.

        Raises:
            InsufficientStock: si otra transacción consumió el stock
            SQLAlchemyError: número de venta duplicado, conexión perdida, etc.
        """
        sale = Sale(
            sale_number=generate_sale_number(),
            customer_id=order.customer_id,
            worker_id=order.worker_id,
            subtotal=order.subtotal,
            discount=order.discount,
            service_charge=order.service_charge,
            total=order.total,
            sale_date=datetime.now()
        )

        self.db.add(sale)
        self.db.flush()

        logger.info(f"Venta creada con ID: {sale.id} ({sale.sale_number})")

        for line in order.lines:
            self.db.add(SaleItem(
                sale_id=sale.id,
                product_id=line.product_id,
                quantity=line.quantity,
                unit_price=line.unit_price,
                subtotal=line.subtotal
            ))
            self.inventory_service.decrement_stock(self.db, line.product_id, line.quantity)

        self.db.flush()
        logger.info(f"{len(order.lines)} items agregados y stock actualizado")

        return sale

    def get_all_sales(self) -> List[Sale]:
        return self.db.query(Sale).options(
            joinedload(Sale.customer),
            joinedload(Sale.worker)
        ).order_by(Sale.sale_date.desc(), Sale.id.desc()).all()

    def get_sale_with_items(self, sale_id: int) -> Optional[Sale]:
        return self.db.query(Sale).options(
            joinedload(Sale.customer),
            joinedload(Sale.worker),
            joinedload(Sale.items).joinedload(SaleItem.product)
        ).filter(Sale.id == sale_id).first()

    def get_sales_by_customer_and_date(self, customer_id: int, target_date: date) -> List[Sale]:
        """Ventas de un cliente en un día (rango [00:00, 00:00 del día siguiente))"""
        start = datetime.combine(target_date, datetime.min.time())
        end = start + timedelta(days=1)

        return self.db.query(Sale).options(
            joinedload(Sale.worker),
            joinedload(Sale.items).joinedload(SaleItem.product)
        ).filter(
            and_(
                Sale.customer_id == customer_id,
                Sale.sale_date >= start,
                Sale.sale_date < end
            )
        ).order_by(Sale.sale_date.desc(), Sale.id.desc()).all()
