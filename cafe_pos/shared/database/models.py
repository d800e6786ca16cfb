# cafe_pos/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Numeric, ForeignKey,
    CheckConstraint, func
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# =====================================================
# MIXIN PARA TIMESTAMPS
# =====================================================
class TimestampMixin:
    """Mixin que agrega campos created_at y updated_at"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# CATÁLOGO Y CLIENTES
# =====================================================

class Customer(Base, TimestampMixin):
    """Modelo de Cliente"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    tier = Column(String(20), nullable=False, default='normal')
    email = Column(String(255))
    phone = Column(String(50))
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint("tier IN ('normal', 'premium')", name='customers_tier_check'),
    )

    # Relationships
    sales = relationship("Sale", back_populates="customer")

    @property
    def is_premium(self) -> bool:
        return self.tier == 'premium'


class Worker(Base):
    """Modelo de Trabajador (cajero / personal)"""
    __tablename__ = "workers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    sales = relationship("Sale", back_populates="worker")


class Product(Base, TimestampMixin):
    """Modelo de Producto"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(50), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        CheckConstraint('stock >= 0', name='products_stock_non_negative'),
        CheckConstraint('price >= 0', name='products_price_non_negative'),
    )

    sale_items = relationship("SaleItem", back_populates="product")


# =====================================================
# VENTAS
# =====================================================

class Sale(Base):
    """Modelo de Venta (pedido)"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    sale_number = Column(String(50), nullable=False, unique=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    worker_id = Column(Integer, ForeignKey("workers.id"), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    service_charge = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False)
    sale_date = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    # Relationships
    customer = relationship("Customer", back_populates="sales")
    worker = relationship("Worker", back_populates="sales")
    items = relationship(
        "SaleItem",
        back_populates="sale",
        cascade="all, delete-orphan",
        order_by="SaleItem.id"
    )


class SaleItem(Base):
    """Modelo de Item de Venta"""
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True, index=True)
    sale_id = Column(Integer, ForeignKey("sales.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        CheckConstraint('quantity > 0', name='sale_items_quantity_positive'),
    )

    # Relationships
    sale = relationship("Sale", back_populates="items")
    product = relationship("Product", back_populates="sale_items")
