"""Exception handlers rendering every failure in the API error envelope."""

from typing import Any

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kotoba.domain.common.exceptions import (
    BusinessRuleViolationError,
    DomainError,
    EntityConflictError,
    EntityNotFoundError,
    InvariantViolationError,
    ValidationError,
)
from kotoba.exceptions import KotobaError
from kotoba.infrastructure.common.schemas import ErrorResponse

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def status_for_domain_error(error: DomainError) -> int:
    """HTTP status for a domain error, decided by its kind."""
    match error:
        case EntityNotFoundError():
            return status.HTTP_404_NOT_FOUND
        case EntityConflictError():
            return status.HTTP_409_CONFLICT
        case ValidationError():
            return status.HTTP_422_UNPROCESSABLE_CONTENT
        case BusinessRuleViolationError():
            return status.HTTP_400_BAD_REQUEST
        case InvariantViolationError():
            return status.HTTP_500_INTERNAL_SERVER_ERROR
        case _:
            return status.HTTP_400_BAD_REQUEST


def error_response(
    status_code: int,
    message: str,
    code: str,
    data: Any = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, code=code, data=data)
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(by_alias=True)),
        headers=headers,
    )


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    # Drop the "body" / "query" / "path" prefix
    parts = list(loc[1:]) if len(loc) > 1 else list(loc)
    return ".".join(str(part) for part in parts)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to the application."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = status_for_domain_error(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("domain_invariant_violated", error=str(exc), path=request.url.path)
            return error_response(status_code, GENERIC_ERROR_MESSAGE, "internal_error")

        logger.info(
            "domain_error",
            code=exc.code,
            status_code=status_code,
            path=request.url.path,
            method=request.method,
        )
        return error_response(status_code, exc.message, exc.code)

    @app.exception_handler(KotobaError)
    async def application_error_handler(request: Request, exc: KotobaError) -> JSONResponse:
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            # Details were logged where the error was raised
            return error_response(exc.status_code, GENERIC_ERROR_MESSAGE, exc.code)
        return error_response(exc.status_code, exc.message, exc.code, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=request.url.path,
            method=request.method,
        )
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            return error_response(exc.status_code, GENERIC_ERROR_MESSAGE, "internal_error")
        return error_response(
            exc.status_code,
            str(exc.detail),
            HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.info(
            "validation_error",
            errors=jsonable_encoder(errors),
            path=request.url.path,
            method=request.method,
        )
        details = [
            {
                "field": _field_name(err.get("loc", ())),
                "message": err.get("msg", "Invalid value"),
            }
            for err in errors
        ]
        return error_response(
            status.HTTP_422_UNPROCESSABLE_CONTENT, "Validation error", "invalid_input", details
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "unhandled_exception",
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method,
        )
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE, "internal_error"
        )
