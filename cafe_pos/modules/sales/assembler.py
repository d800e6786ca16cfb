# cafe_pos/modules/sales/assembler.py
from typing import Dict, List
from sqlalchemy.orm import Session
import logging

from cafe_pos.core.exceptions import InsufficientStock, InvalidRequest
from cafe_pos.shared.services.inventory_service import InventoryService
from cafe_pos.shared.services.pricing_service import calculate_totals, line_subtotal
from cafe_pos.shared.database.models import Product, Worker
from .schemas import AssembledLine, AssembledOrder, SaleCreateRequest, SaleItemRequest

logger = logging.getLogger(__name__)


class OrderAssembler:
    """
    Valida una solicitud de venta contra el estado actual de la base y
    arma el agregado listo para persistir.

    La validación se corta en la primera falla. Las lecturas se hacen en la
    sesión del llamador, así quedan dentro de la misma transacción que las
    escrituras de SalesRepository.
    """

    def __init__(self, db: Session, default_worker_id: int):
        self.db = db
        self.default_worker_id = default_worker_id
        self.inventory = InventoryService()

    def validate(self, request: SaleCreateRequest) -> "ValidatedOrder":
        if not request.customer_id or not request.items:
            raise InvalidRequest("Cliente ID y productos son obligatorios")

        customer = self.inventory.find_active_customer(self.db, request.customer_id)
        logger.info(f"Validando {len(request.items)} items para cliente {customer.id} ({customer.tier})")

        products: List[Product] = []
        reserved: Dict[int, int] = {}
        for position, item in enumerate(request.items, start=1):
            product = self._validate_line(item, position, reserved)
            products.append(product)

        worker_id = self._validate_worker(request.worker_id)

        return ValidatedOrder(
            customer_id=customer.id,
            customer_name=customer.name,
            customer_tier=customer.tier,
            worker_id=worker_id,
            items=request.items,
            products=products
        )

    def price(self, validated: "ValidatedOrder") -> AssembledOrder:
        # Precio capturado de la fila leída, no se vuelve a consultar
        lines = [
            AssembledLine(
                product_id=product.id,
                product_name=product.name,
                quantity=item.quantity,
                unit_price=product.price,
                subtotal=line_subtotal(product.price, item.quantity)
            )
            for item, product in zip(validated.items, validated.products)
        ]

        totals = calculate_totals(
            [(line.unit_price, line.quantity) for line in lines],
            validated.customer_tier
        )

        return AssembledOrder(
            customer_id=validated.customer_id,
            customer_name=validated.customer_name,
            customer_tier=validated.customer_tier,
            worker_id=validated.worker_id,
            lines=lines,
            subtotal=totals.subtotal,
            discount=totals.discount,
            service_charge=totals.service_charge,
            total=totals.total
        )

    def _validate_worker(self, worker_id) -> int:
        if worker_id is None:
            return self.default_worker_id

        worker = self.db.get(Worker, worker_id)
        if not worker or not worker.is_active:
            raise InvalidRequest(
                f"Trabajador con ID {worker_id} no encontrado o inactivo",
                details={"worker_id": worker_id}
            )
        return worker.id

    def _validate_line(self, item: SaleItemRequest, position: int, reserved: Dict[int, int]) -> Product:
        if not item.product_id or not item.quantity or item.quantity <= 0:
            raise InvalidRequest(
                "Producto ID y cantidad válida son obligatorios",
                details={"line": position}
            )

        product = self.inventory.find_active_product(self.db, item.product_id)

        # Un mismo producto en varias líneas se valida contra la cantidad acumulada
        needed = reserved.get(product.id, 0) + item.quantity
        if product.stock < needed:
            available = product.stock - reserved.get(product.id, 0)
            raise InsufficientStock(
                f"Stock insuficiente para {product.name}. Stock disponible: {available}",
                details={
                    "line": position,
                    "product_id": product.id,
                    "available": available,
                    "requested": item.quantity
                }
            )

        reserved[product.id] = needed
        return product


class ValidatedOrder:
    """Resultado de la etapa de validación, antes de calcular precios"""

    def __init__(
        self,
        customer_id: int,
        customer_name: str,
        customer_tier: str,
        worker_id: int,
        items: List[SaleItemRequest],
        products: List[Product]
    ):
        self.customer_id = customer_id
        self.customer_name = customer_name
        self.customer_tier = customer_tier
        self.worker_id = worker_id
        self.items = items
        self.products = products
