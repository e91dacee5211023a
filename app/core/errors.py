# app/core/errors.py
"""
Taxonomía de errores HTTP del API.

Todas las respuestas de error salen como ``{"error": "<mensaje>"}`` para que el
front pueda mostrar el mensaje tal cual (ver ``install_error_handlers``).
"""
import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.json import error_json

log = logging.getLogger("uvicorn")


class ValidationFailed(HTTPException):
    """Entrada ausente, demasiado larga o mal formada (nunca se reintenta)."""

    def __init__(self, detail: str = "invalid request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class AuthenticationRequired(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class PermissionDenied(HTTPException):
    """El recurso pertenece a otro usuario; no se aplica ningún efecto."""

    def __init__(self, detail: str = "forbidden"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class Conflict(HTTPException):
    """Duplicado idempotente (like o follow ya existente)."""

    def __init__(self, detail: str = "conflict"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ServiceUnavailable(HTTPException):
    """Fallo transitorio de la base: el cliente ofrece reintentar."""

    def __init__(self, detail: str = "service unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


async def _http_error(request: Request, exc: StarletteHTTPException):
    return error_json(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def _validation_error(request: Request, exc: RequestValidationError):
    # FastAPI devolvería 422; el contrato del front es 400 para entrada inválida
    fields = [".".join(str(p) for p in e.get("loc", ())) for e in exc.errors()]
    return error_json(
        status.HTTP_400_BAD_REQUEST,
        "invalid request",
        details=fields,
    )


async def _database_error(request: Request, exc: SQLAlchemyError):
    log.error(f"❌ DB error en {request.method} {request.url.path}: {exc!r}")
    return error_json(status.HTTP_503_SERVICE_UNAVAILABLE, "database unavailable")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(SQLAlchemyError, _database_error)
