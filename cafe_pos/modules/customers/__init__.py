# cafe_pos/modules/customers/__init__.py
"""
Módulo de Clientes

- Registro de clientes normales y premium
- Activar / desactivar clientes
- Listados por tipo
- Pedidos de un cliente por fecha
"""

from .router import router
from .service import CustomersService
from .repository import CustomersRepository

__all__ = [
    "router",
    "CustomersService",
    "CustomersRepository"
]
