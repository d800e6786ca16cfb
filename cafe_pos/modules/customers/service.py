# cafe_pos/modules/customers/service.py
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
import logging

from cafe_pos.config.database import transaction_scope
from cafe_pos.core.exceptions import CustomerNotFound
from cafe_pos.modules.sales.repository import SalesRepository
from cafe_pos.modules.sales.service import SalesService
from .repository import CustomersRepository
from .schemas import (
    CustomerCreate, CustomerStatusUpdate, CustomerTier,
    CustomerInfo, CustomerResponse, CustomerListResponse, CustomerOrdersResponse
)

logger = logging.getLogger(__name__)


class CustomersService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = CustomersRepository(db)
        self.sales_repository = SalesRepository(db)

    def create_customer(self, customer_data: CustomerCreate) -> CustomerResponse:
        with transaction_scope(self.db):
            customer = self.repository.create_customer(
                name=customer_data.name,
                tier=customer_data.tier.value,
                email=customer_data.email,
                phone=customer_data.phone
            )

        logger.info(f"Cliente registrado: {customer.name} (ID: {customer.id}, {customer.tier})")
        return CustomerResponse(
            success=True,
            message="Cliente registrado exitosamente",
            customer=CustomerInfo.model_validate(customer)
        )

    def list_customers(self, tier: Optional[CustomerTier] = None) -> CustomerListResponse:
        customers = self.repository.get_customers(tier.value if tier else None)
        label = f"Clientes {tier.value}" if tier else "Todos los clientes"
        return CustomerListResponse(
            success=True,
            message=label,
            customers=[CustomerInfo.model_validate(c) for c in customers],
            count=len(customers)
        )

    def deactivate_customer(self, customer_id: int) -> CustomerResponse:
        return self._set_active(customer_id, False, "Cliente desactivado exitosamente")

    def update_status(self, customer_id: int, status_data: CustomerStatusUpdate) -> CustomerResponse:
        message = "Cliente activado" if status_data.is_active else "Cliente desactivado"
        return self._set_active(customer_id, status_data.is_active, message)

    def get_orders_for_date(self, customer_id: int, target_date: date) -> CustomerOrdersResponse:
        """Pedidos de un cliente en una fecha, con el detalle de productos"""
        customer = self.repository.get_customer(customer_id)
        if not customer:
            raise CustomerNotFound("Cliente no encontrado", details={"customer_id": customer_id})

        sales = self.sales_repository.get_sales_by_customer_and_date(customer_id, target_date)

        return CustomerOrdersResponse(
            success=True,
            message=f"Pedidos del {target_date.isoformat()}",
            customer=CustomerInfo.model_validate(customer),
            date=target_date.isoformat(),
            orders=[SalesService.to_detail(sale) for sale in sales],
            count=len(sales)
        )

    def _set_active(self, customer_id: int, is_active: bool, message: str) -> CustomerResponse:
        with transaction_scope(self.db):
            customer = self.repository.set_active(customer_id, is_active)
            if not customer:
                raise CustomerNotFound("Cliente no encontrado", details={"customer_id": customer_id})

        return CustomerResponse(
            success=True,
            message=message,
            customer=CustomerInfo.model_validate(customer)
        )
