# cafe_pos/shared/services/inventory_service.py
from sqlalchemy import and_, update
from sqlalchemy.orm import Session
import logging

from cafe_pos.core.exceptions import CustomerNotFound, InsufficientStock, ProductNotFound
from cafe_pos.shared.database.models import Customer, Product

logger = logging.getLogger(__name__)


class InventoryService:
    """Acceso autoritativo a stock, productos activos y clientes activos"""

    @staticmethod
    def find_active_customer(db: Session, customer_id: int) -> Customer:
        customer = db.query(Customer).filter(
            and_(
                Customer.id == customer_id,
                Customer.is_active == True
            )
        ).first()

        if not customer:
            raise CustomerNotFound(
                "Cliente no encontrado o inactivo",
                details={"customer_id": customer_id}
            )

        return customer

    @staticmethod
    def find_active_product(db: Session, product_id: int, for_update: bool = True) -> Product:
        """
        Obtener un producto activo.

        Con for_update=True la fila queda bloqueada (SELECT FOR UPDATE) hasta
        el fin de la transacción en los motores que lo soportan.
        """
        query = db.query(Product).filter(
            and_(
                Product.id == product_id,
                Product.is_active == True
            )
        )
        if for_update:
            query = query.with_for_update()

        product = query.first()

        if not product:
            raise ProductNotFound(
                f"Producto con ID {product_id} no encontrado o inactivo",
                details={"product_id": product_id}
            )

        return product

    @staticmethod
    def decrement_stock(db: Session, product_id: int, quantity: int) -> None:
        """
        Descontar stock dentro de la transacción del llamador.

        El UPDATE solo afecta la fila si stock >= quantity, evaluado en la misma
        sentencia que la escritura; si no afecta filas otra transacción ganó el
        stock y se lanza InsufficientStock. No hace commit.
        """
        if quantity <= 0:
            raise ValueError("La cantidad a descontar debe ser mayor a 0")

        result = db.execute(
            update(Product)
            .where(
                and_(
                    Product.id == product_id,
                    Product.is_active == True,
                    Product.stock >= quantity
                )
            )
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 1:
            return

        product = db.query(Product).filter(Product.id == product_id).populate_existing().first()
        if not product or not product.is_active:
            raise ProductNotFound(
                f"Producto con ID {product_id} no encontrado o inactivo",
                details={"product_id": product_id}
            )

        logger.warning(
            f"❌ Stock modificado por otra operación: producto {product.id} "
            f"disponible={product.stock}, solicitado={quantity}"
        )
        raise InsufficientStock(
            f"Stock insuficiente para {product.name}. Stock disponible: {product.stock}",
            details={
                "product_id": product.id,
                "available": product.stock,
                "requested": quantity
            }
        )

    @staticmethod
    def increment_stock(db: Session, product_id: int, quantity: int) -> int:
        """Sumar stock a un producto activo. Retorna el stock resultante."""
        if quantity <= 0:
            raise ValueError("La cantidad a incrementar debe ser mayor a 0")

        product = InventoryService.find_active_product(db, product_id)
        product.stock = product.stock + quantity
        db.flush()
        return product.stock
