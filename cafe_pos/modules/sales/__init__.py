# cafe_pos/modules/sales/__init__.py
"""
Módulo de Ventas - Registro de pedidos

Este módulo maneja el flujo completo de una venta:
- Validación de cliente, productos y stock
- Cálculo de descuento premium y cargo por servicio
- Registro atómico de venta, items y descuento de inventario
- Consulta de ventas y su detalle

Arquitectura:
- router.py: Endpoints de ventas
- service.py: Orquestación y transacción
- assembler.py: Validación y armado del pedido
- repository.py: Escritura y lectura de ventas
- schemas.py: Modelos de request/response
"""

from .router import router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "router",
    "SalesService",
    "SalesRepository"
]
