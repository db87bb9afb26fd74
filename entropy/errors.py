"""Errores de dominio y su traducción al sobre ``{success, error}`` de la API."""
import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class EntropyError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(EntropyError):
    """Entrada faltante, mal formada o fuera de rango."""
    status_code = 400


class ConflictError(EntropyError):
    """El estado ya satisface lo pedido (email repetido, ya inscripto, ya completado)."""
    status_code = 400


class PreconditionError(EntropyError):
    """Falta una transición previa (completar sin inscribirse)."""
    status_code = 400


class AuthError(EntropyError):
    status_code = 401


class NotFoundError(EntropyError):
    status_code = 404


def error_body(message: str) -> dict:
    return {"success": False, "error": message}


def entropy_error_handler(_: Request, exc: EntropyError):
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


def request_validation_handler(_: Request, exc: RequestValidationError):
    # body que no es JSON o tipos imposibles de convertir -> 400 como el resto
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:]) or "body"
    return JSONResponse(status_code=400, content=error_body(f"Invalid request: {field}"))


def http_exception_handler(_: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content=error_body("Route not found"))
    return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))


def internal_error_handler(request: Request, exc: Exception):
    logging.exception(f"[500] {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=error_body("Something went wrong!"))


def register_error_handlers(app):
    app.add_exception_handler(EntropyError, entropy_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, internal_error_handler)
