import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base for every failure surfaced to a caller as an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RegistryError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(RegistryError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(RegistryError):
    status_code = status.HTTP_409_CONFLICT


class StoreUnavailableError(RegistryError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class OriginRejected(RegistryError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Origin not allowed by CORS"):
        super().__init__(message)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    # loc looks like ("body", "number") or ("body",) for a missing/garbled body
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    if not field:
        return "Request body must be a JSON object."
    if first.get("type") == "missing":
        return f"Field '{field}' is required."
    return f"Invalid value for '{field}': {first.get('msg', 'invalid')}."


async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RegistryError, registry_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
