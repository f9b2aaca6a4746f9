"""Exception handlers that keep every failure in the ``{success, message}`` shape."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from catalog.api.schemas import ErrorResponse
from catalog.exceptions import CatalogNotInitialized
from catalog.utils.logging import get_logger

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "Invalid request: " + " | ".join(parts)


async def not_initialized_handler(request: Request, exc: CatalogNotInitialized) -> JSONResponse:
    return _error(500, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_errors(exc)
    logger.info("request_rejected", path=request.url.path, reason=message)
    return _error(400, message)


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected failure and answer with a generic 500."""
    logger.error("unhandled_exception", path=request.url.path, method=request.method, exc_info=exc)
    return _error(500, "Internal server error")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return internal_error_response(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogNotInitialized, not_initialized_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
