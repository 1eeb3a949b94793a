"""
Доменные ошибки PT CRM и их отображение в HTTP-ответы.

Сервисы и политика доступа бросают только эти исключения; роутеры их не
перехватывают. register_exception_handlers() превращает их в JSON
вида {"detail": ...} с нужным статусом.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PTCRMError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(PTCRMError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class Forbidden(PTCRMError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not allowed"


class NotFound(PTCRMError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ValidationError(PTCRMError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class InvalidTransitionError(ValidationError):
    default_detail = "Operation not allowed in the current state"


class ConflictError(PTCRMError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class ActivationConflictError(PTCRMError):
    """Не удалось атомарно применить деактивацию/активацию тренировки."""
    default_detail = "Could not activate workout"


async def ptcrm_error_handler(request: Request, exc: PTCRMError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    headers = None
    if isinstance(exc, Unauthenticated):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Некорректное тело запроса даёт 400, как и доменная ValidationError
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request body", "errors": errors},
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PTCRMError, ptcrm_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
