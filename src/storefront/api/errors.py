"""Map storefront and framework errors onto ``{"error": {code, message}}``."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.errors import Internal, StorefrontError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _error_response(status_code, code, message):
    return JSONResponse(status_code=status_code, content={"error": {"code": code, "message": message}})


def _flatten(messages):
    if isinstance(messages, dict):
        parts = []
        for field, errors in messages.items():
            errors = errors if isinstance(errors, list) else [errors]
            parts.append(f"{field}: {', '.join(str(e) for e in errors)}")
        return "; ".join(parts)
    return str(messages)


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    log = logger.warning if exc.status_code >= 500 else logger.info
    log("Request rejected", path=request.url.path, code=exc.code, message=exc.message)
    return _error_response(exc.status_code, exc.code, exc.message)


async def domain_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    message = _flatten(exc.messages)
    logger.info("Domain validation failed", path=request.url.path, message=message)
    return _error_response(400, "validation_failed", message)


async def object_not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return _error_response(404, "not_found", "Not found")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'] if loc != 'body')}: {error['msg']}" for error in exc.errors()
    )
    logger.info("Malformed request", path=request.url.path, message=message)
    return _error_response(400, "validation_failed", message or "Invalid request")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unexpected error", path=request.url.path, exc_info=exc)
    error = Internal("Internal server error")
    return _error_response(error.status_code, error.code, error.message)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(ValidationError, domain_validation_handler)
    app.add_exception_handler(ObjectNotFoundError, object_not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
