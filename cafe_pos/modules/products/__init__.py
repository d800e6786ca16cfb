# cafe_pos/modules/products/__init__.py
"""
Módulo de Productos - Catálogo

- Registro de productos con código único
- Deshabilitar productos (soft delete)
- Actualización de precio
- Incremento de stock
- Listado de productos disponibles
"""

from .router import router
from .service import ProductsService
from .repository import ProductsRepository

__all__ = [
    "router",
    "ProductsService",
    "ProductsRepository"
]
