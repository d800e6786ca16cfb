# cafe_pos/api/v1/router.py
from datetime import datetime
from fastapi import APIRouter

from cafe_pos.modules.products.router import router as products_router
from cafe_pos.modules.customers.router import router as customers_router
from cafe_pos.modules.sales.router import router as sales_router


# Crear router principal de la API v1
api_router = APIRouter()

api_router.include_router(
    products_router,
    prefix="/products",
    tags=["Products"]
)

api_router.include_router(
    customers_router,
    prefix="/customers",
    tags=["Customers"]
)

api_router.include_router(
    sales_router,
    prefix="/sales",
    tags=["Sales"]
)


@api_router.get("/test", tags=["Health"])
async def api_test():
    """Prueba de conectividad de la API"""
    return {
        "success": True,
        "message": "API de Vitoko's Coffee funcionando correctamente",
        "timestamp": datetime.now().isoformat()
    }
