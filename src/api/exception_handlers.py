"""Exception handlers for the FastAPI application."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import (
    AppException,
    ConstraintViolationError,
    ErrorCode,
    ForeignKeyViolationError,
    PersistenceError,
    RecordNotFoundError,
    UniqueViolationError,
)

logger = structlog.get_logger()


def error_body(error_code: ErrorCode, message: str) -> dict[str, str]:
    """Build the JSON body shared by every non-2xx response."""
    return {"error": error_code.value, "message": message}


def _kind_for_status(status_code: int) -> ErrorCode:
    if status_code == 404:
        return ErrorCode.NOT_FOUND
    if status_code == 409:
        return ErrorCode.CONFLICT
    if status_code < 500:
        return ErrorCode.INVALID_ARGUMENT
    return ErrorCode.INTERNAL


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the "body"/"path" prefix so the field reads as the client sent it.
        loc = [str(x) for x in error["loc"][1:]] or [str(x) for x in error["loc"]]
        parts.append(f"{'.'.join(loc)}: {error['msg']}")
    return "; ".join(parts) or "Request validation failed"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle domain errors raised by the services."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.error_code, exc.message),
        )

    @app.exception_handler(PersistenceError)
    async def persistence_exception_handler(
        request: Request, exc: PersistenceError
    ) -> JSONResponse:
        """Handle persistence errors that no service translated."""
        if isinstance(exc, (UniqueViolationError, ForeignKeyViolationError)):
            status_code, kind = 409, ErrorCode.CONFLICT
            message = "The request conflicts with a concurrent change"
        elif isinstance(exc, RecordNotFoundError):
            status_code, kind, message = 404, ErrorCode.NOT_FOUND, "Record not found"
        elif isinstance(exc, ConstraintViolationError):
            status_code, kind = 400, ErrorCode.INVALID_ARGUMENT
            message = "The request violates a column constraint"
        else:
            status_code, kind = 500, ErrorCode.INTERNAL
            message = "An unexpected error occurred"

        logger.warning(
            "persistence_exception",
            error_type=type(exc).__name__,
            error=str(exc),
            status_code=status_code,
        )
        return JSONResponse(status_code=status_code, content=error_body(kind, message))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(_kind_for_status(exc.status_code), str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic shape-validation errors as invalid arguments."""
        logger.info("validation_error", errors=exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_body(ErrorCode.INVALID_ARGUMENT, _describe_validation_error(exc)),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=error_body(ErrorCode.INTERNAL, "An unexpected error occurred"),
        )
