# cafe_pos/modules/products/repository.py
from sqlalchemy.orm import Session
from sqlalchemy import and_
from typing import List, Optional
from decimal import Decimal

from cafe_pos.shared.database.models import Product

class ProductsRepository:
    def __init__(self, db: Session):
        self.db = db

    def create_product(self, code: str, name: str, price: Decimal, stock: int) -> Product:
        product = Product(code=code, name=name, price=price, stock=stock, is_active=True)
        self.db.add(product)
        self.db.flush()
        return product

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_active_products(self) -> List[Product]:
        return self.db.query(Product).filter(
            Product.is_active == True
        ).order_by(Product.name).all()

    def deactivate_product(self, product_id: int) -> Optional[Product]:
        """Deshabilitar (soft delete). Retorna None si no existe."""
        product = self.get_product(product_id)
        if not product:
            return None

        product.is_active = False
        self.db.flush()
        return product

    def update_price(self, product_id: int, price: Decimal) -> Optional[Product]:
        """Actualizar precio solo de productos activos"""
        product = self.db.query(Product).filter(
            and_(
                Product.id == product_id,
                Product.is_active == True
            )
        ).first()
        if not product:
            return None

        product.price = price
        self.db.flush()
        return product
