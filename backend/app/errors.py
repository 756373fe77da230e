"""
Taxonomie des erreurs métier et leur traduction en réponses JSON.

Chaque exception porte son code HTTP. Les services lèvent ces exceptions,
les handlers enregistrés par register_error_handlers() les convertissent
en {"message": ...}. Pas de stack en production.
"""

import logging
import traceback
from typing import Any, Iterable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Erreur métier de base."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def payload(self) -> dict[str, Any]:
        return {"message": self.message}


class ValidationFailed(AppError):
    """Une ou plusieurs valeurs de champ sont invalides."""
    status_code = 400
    default_message = "Validation error"

    def __init__(self, errors: Iterable[dict[str, str]], message: Optional[str] = None):
        super().__init__(message)
        self.errors = list(errors)

    @classmethod
    def field(cls, path: str, message: str) -> "ValidationFailed":
        return cls([{"path": path, "message": message}])

    def payload(self) -> dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


class Unauthenticated(AppError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid credentials"


class Forbidden(AppError):
    status_code = 403
    default_message = "Insufficient permissions"

    def __init__(
        self,
        message: Optional[str] = None,
        required: Optional[Iterable[str]] = None,
        actual: Optional[str] = None,
    ):
        super().__init__(message)
        self.required = sorted(required) if required is not None else None
        self.actual = actual

    def payload(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.required is not None:
            body["required"] = self.required
            body["actual"] = self.actual
        return body


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class Conflict(AppError):
    """Clé naturelle dupliquée ou suppression bloquée par des dépendances."""
    status_code = 400
    default_message = "Conflict"


def _error_path(loc: Iterable[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in {"body", "query", "path", "header", "cookie"}:
        parts = parts[1:]
    return ".".join(parts)


def register_error_handlers(app: FastAPI, expose_stack: bool) -> None:
    """Enregistre les traducteurs d'exceptions → JSON."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {"path": _error_path(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"message": "Validation error", "errors": errors})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning("Contrainte BDD violée sur %s : %s", request.url.path, exc.orig)
        return JSONResponse(
            status_code=Conflict.status_code,
            content={"message": "Operation violates a data constraint"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Dernier recours : toute exception non gérée devient une 500 JSON,
        qui repasse ainsi par CORSMiddleware.
        """
        logger.error("Exception non gérée sur %s : %s", request.url.path, exc, exc_info=True)
        content: dict[str, Any] = {"message": "Internal server error"}
        if expose_stack:
            content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=500, content=content)
