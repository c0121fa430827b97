"""
➡️ But : Centraliser la taxonomie d'erreurs métier et leur traduction HTTP.

Les services lèvent des erreurs métier (ValidationError, Conflict, NotFound, Unauthorized) ;
une seule frontière (register_exception_handlers) les convertit en réponses JSON {"message": ...}.

🔹 Avantages :

Les services ne dépendent pas de FastAPI pour signaler une erreur.

Format de réponse identique partout (y compris 404 de route inconnue et 500).
"""

import logging
from typing import Any, Iterable, Mapping

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something Went Wrong, Please Try Again Later"
ROUTE_NOT_FOUND_MESSAGE = "Route does not exist"


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Un ou plusieurs champs invalides, messages joints en une seule chaîne."""
    status_code = status.HTTP_400_BAD_REQUEST

    @classmethod
    def from_errors(cls, errors: Iterable[Mapping[str, Any]]) -> "ValidationError":
        return cls(describe_errors(errors))


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT


# -----------------------------
# Formatage des erreurs pydantic
# -----------------------------
def _field_name(loc: Iterable[Any]) -> str:
    # "body" / "query" / "path" ne disent rien au client
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "cookie", "header")]
    return ".".join(parts) or "body"


def describe_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """Joint les erreurs pydantic en `champ: raison, champ: raison`."""
    messages = []
    for err in errors:
        reason = "Required" if err.get("type") == "missing" else err.get("msg", "Invalid value")
        messages.append(f"{_field_name(err.get('loc', ()))}: {reason}")
    return ", ".join(messages)


# -----------------------------
# Handlers
# -----------------------------
def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return _message(exc.status_code, f"Validation failed => {exc.message}")
    return _message(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _message(
        status.HTTP_400_BAD_REQUEST,
        f"Validation failed => {describe_errors(exc.errors())}",
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _message(exc.status_code, ROUTE_NOT_FOUND_MESSAGE)
    return _message(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
