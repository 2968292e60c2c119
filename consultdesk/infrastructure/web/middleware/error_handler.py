"""
Global error handling for the FastAPI application.
Domain exceptions are mapped to status codes by exception handlers; anything
else is caught by the middleware. Every error body carries error, code and
message.
"""

import json
import logging
import traceback
from http import HTTPStatus
from typing import Any, Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from consultdesk.application.dto.base_dto import ErrorResponseDTO
from consultdesk.config import settings
from consultdesk.domain.models.base import (
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    ConflictError,
    StoreError
)

logger = logging.getLogger(__name__)


# Most specific first
DOMAIN_STATUS_CODES: Dict[Type[DomainException], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    BusinessRuleViolation: status.HTTP_400_BAD_REQUEST,
    EntityNotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# OpenAPI documentation of the error body, shared by every router
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    status_code: {"model": ErrorResponseDTO}
    for status_code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_409_CONFLICT,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}


def error_body(status_code: int, code: str, message: str) -> Dict[str, Any]:
    return {
        "error": HTTPStatus(status_code).phrase,
        "code": code,
        "message": message,
    }


def status_for(exc: DomainException) -> int:
    for exc_type, status_code in DOMAIN_STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return self.handle_exception(request, exc)

    def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            exc_info=exc,
            extra={
                "request_path": request.url.path,
                "request_method": request.method,
                "client_host": request.client.host if request.client else None
            }
        )

        status_code, content = self.format_error_response(exc)

        if settings.debug:
            content["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__)
            }

        return JSONResponse(status_code=status_code, content=content)

    def format_error_response(self, exc: Exception):
        if isinstance(exc, json.JSONDecodeError):
            return status.HTTP_400_BAD_REQUEST, error_body(
                status.HTTP_400_BAD_REQUEST, "INVALID_JSON", "The request body contains invalid JSON"
            )
        if isinstance(exc, TimeoutError):
            return status.HTTP_500_INTERNAL_SERVER_ERROR, error_body(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "STORE_ERROR", "The request took too long to process"
            )
        return status.HTTP_500_INTERNAL_SERVER_ERROR, error_body(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "An unexpected error occurred"
        )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    content = error_body(status_code, exc.code, exc.message)
    if isinstance(exc, ConflictError):
        content["retryable"] = exc.retryable
    return JSONResponse(status_code=status_code, content=content)


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    store_error = StoreError()
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, store_error.code, store_error.message)
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    messages = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))

    content = error_body(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "; ".join(messages) or "Invalid request")
    content["details"] = errors
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == HTTPStatus.NOT_FOUND.phrase:
        message = f"The path {request.url.path} was not found"
    else:
        message = str(exc.detail)
    code = HTTPStatus(exc.status_code).name
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, code, message),
        headers=getattr(exc, "headers", None)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the domain, store, validation and HTTP error handlers."""
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
