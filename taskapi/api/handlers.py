# api/handlers.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskapi.api.responses import error
from taskapi.errors import TaskApiError

logger = logging.getLogger(__name__)

_HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def _describe_validation_errors(errors):
    parts = []
    for err in errors:
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts) or "Request is invalid"


async def task_api_error_handler(request: Request, exc: TaskApiError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail} ({exc.cause})")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.detail} ({exc.cause})")

    message = exc.detail
    if exc.cause and request.app.state.settings.EXPOSE_ERROR_DETAILS:
        message = f"{exc.detail}: {exc.cause}"
    return error(message, exc.status_code, exc.error_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = _describe_validation_errors(exc.errors())
    logger.warning(f"{request.method} {request.url.path} invalid request: {message}")
    return error(message, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error(
        str(exc.detail),
        exc.status_code,
        _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error in {request.method} {request.url.path}: {exc}")
    return error("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(TaskApiError, task_api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
