# app/api/v1/responses.py
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import AppError, ErrorKind
from app.core.logging import get_logger

logger = get_logger(__name__)

# Status code and client-facing message for each error kind
ERROR_RESPONSES: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.VALIDATION: (status.HTTP_400_BAD_REQUEST, "Validation Failed"),
    ErrorKind.REQUEST_VALIDATION: (status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation Failed"),
    ErrorKind.UNAUTHORIZED: (status.HTTP_401_UNAUTHORIZED, "Unauthorized"),
    ErrorKind.CONFLICT: (status.HTTP_409_CONFLICT, "Conflict"),
    ErrorKind.STORAGE: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
    ErrorKind.CONNECTION: (status.HTTP_503_SERVICE_UNAVAILABLE, "Service Unavailable"),
    ErrorKind.INTERNAL: (status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
}


def success_response(data: Any, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": True, "message": "", "data": jsonable_encoder(data)},
    )


def error_response(kind: ErrorKind, detail: Any = None) -> JSONResponse:
    status_code, message = ERROR_RESPONSES[kind]
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "data": {"kind": kind.value, "detail": jsonable_encoder(detail)},
        },
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.kind in (ErrorKind.STORAGE, ErrorKind.CONNECTION):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")

    detail: Any = exc.detail
    if exc.kind == ErrorKind.VALIDATION:
        detail = {"message": exc.detail, "fields": getattr(exc, "fields", [])}
    return error_response(exc.kind, detail)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} rejected: malformed request")
    return error_response(ErrorKind.REQUEST_VALIDATION, exc.errors())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed unexpectedly", exc_info=exc)
    return error_response(ErrorKind.INTERNAL, "An unexpected error occurred.")


def register_error_handlers(app: FastAPI):
    """Every failure leaves the API as an error envelope."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
