# cafe_pos/modules/products/service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from cafe_pos.config.database import transaction_scope
from cafe_pos.core.exceptions import InvalidRequest, ProductNotFound
from cafe_pos.shared.services.inventory_service import InventoryService
from .repository import ProductsRepository
from .schemas import (
    ProductCreate, PriceUpdate, StockIncrement,
    ProductInfo, ProductResponse, ProductListResponse
)

logger = logging.getLogger(__name__)


class ProductsService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductsRepository(db)
        self.inventory_service = InventoryService()

    def create_product(self, product_data: ProductCreate) -> ProductResponse:
        try:
            with transaction_scope(self.db):
                product = self.repository.create_product(
                    code=product_data.code,
                    name=product_data.name,
                    price=product_data.price,
                    stock=product_data.stock
                )
        except IntegrityError as e:
            raise InvalidRequest(
                "El código del producto ya existe",
                details={"code": product_data.code}
            ) from e

        logger.info(f"Producto registrado: {product.code} (ID: {product.id})")
        return ProductResponse(
            success=True,
            message="Producto registrado exitosamente",
            product=ProductInfo.model_validate(product)
        )

    def list_products(self) -> ProductListResponse:
        products = self.repository.get_active_products()
        return ProductListResponse(
            success=True,
            message="Productos disponibles",
            products=[ProductInfo.model_validate(p) for p in products],
            count=len(products)
        )

    def get_product(self, product_id: int) -> ProductResponse:
        product = self.repository.get_product(product_id)
        if not product:
            raise ProductNotFound("Producto no encontrado", details={"product_id": product_id})

        return ProductResponse(
            success=True,
            message="Producto encontrado",
            product=ProductInfo.model_validate(product)
        )

    def deactivate_product(self, product_id: int) -> ProductResponse:
        with transaction_scope(self.db):
            product = self.repository.deactivate_product(product_id)
            if not product:
                raise ProductNotFound("Producto no encontrado", details={"product_id": product_id})

        return ProductResponse(
            success=True,
            message="Producto deshabilitado exitosamente",
            product=ProductInfo.model_validate(product)
        )

    def update_price(self, product_id: int, price_data: PriceUpdate) -> ProductResponse:
        with transaction_scope(self.db):
            product = self.repository.update_price(product_id, price_data.price)
            if not product:
                raise ProductNotFound("Producto no encontrado o inactivo", details={"product_id": product_id})

        logger.info(f"Precio actualizado: producto {product_id} → {price_data.price}")
        return ProductResponse(
            success=True,
            message="Precio actualizado exitosamente",
            product=ProductInfo.model_validate(product)
        )

    def increment_stock(self, product_id: int, stock_data: StockIncrement) -> ProductResponse:
        with transaction_scope(self.db):
            new_stock = self.inventory_service.increment_stock(self.db, product_id, stock_data.quantity)
            product = self.repository.get_product(product_id)

        logger.info(f"Stock incrementado: producto {product_id} +{stock_data.quantity} = {new_stock}")
        return ProductResponse(
            success=True,
            message="Stock incrementado exitosamente",
            product=ProductInfo.model_validate(product)
        )
