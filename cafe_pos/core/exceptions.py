# cafe_pos/core/exceptions.py
from enum import Enum
from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from cafe_pos.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    INVALID_REQUEST = "InvalidRequest"
    CUSTOMER_NOT_FOUND = "CustomerNotFound"
    PRODUCT_NOT_FOUND = "ProductNotFound"
    INSUFFICIENT_STOCK = "InsufficientStock"
    INTERNAL_ERROR = "InternalError"
    NOT_FOUND = "NotFound"


class DomainError(Exception):
    """
    Falla con tipo estable y mensaje legible.

    El tipo (kind) es lo que el cliente debe usar para decidir qué hacer;
    details es solo diagnóstico.
    """
    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            message=self.message,
            error_code=self.kind.value,
            details=self.details or None
        )


class InvalidRequest(DomainError):
    kind = ErrorKind.INVALID_REQUEST
    status_code = status.HTTP_400_BAD_REQUEST


class CustomerNotFound(DomainError):
    kind = ErrorKind.CUSTOMER_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class ProductNotFound(DomainError):
    kind = ErrorKind.PRODUCT_NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


class InsufficientStock(DomainError):
    kind = ErrorKind.INSUFFICIENT_STOCK
    status_code = status.HTTP_409_CONFLICT


class InternalError(DomainError):
    kind = ErrorKind.INTERNAL_ERROR
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND


def setup_exception_handlers(app: FastAPI):
    """Traducir las fallas de dominio a respuestas HTTP"""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.kind.value}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response().model_dump(mode="json")
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"{request.method} {request.url.path} - error de base de datos", exc_info=exc)
        error = InternalError("Error interno del servidor", details={"error": str(exc)})
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_response().model_dump(mode="json")
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Datos inválidos en '{field}': {first.get('msg', 'formato incorrecto')}"
        error = InvalidRequest(message, details={"errors": [
            {"loc": [str(part) for part in e.get("loc", ())], "msg": e.get("msg")}
            for e in errors
        ]})
        return JSONResponse(
            status_code=error.status_code,
            content=error.to_response().model_dump(mode="json")
        )
