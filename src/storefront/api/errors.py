"""Exception handlers mapping domain failures onto HTTP responses.

Every error body uses one envelope: ``{"error": "msg"}`` or
``{"error": {"field": ["msg", ...]}}``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.assets.port import AssetStoreError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _first_message(messages) -> str:
    """Reduce Protean's ``{key: [msg]}`` / ``{key: msg}`` payloads to one readable message."""
    if isinstance(messages, dict):
        for value in messages.values():
            return _first_message(value)
        return ""
    if isinstance(messages, list | tuple):
        return _first_message(messages[0]) if messages else ""
    return str(messages)


def _envelope(status_code: int, error) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _envelope(400, exc.messages)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = {}
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        fields.setdefault(location or "request", []).append(err.get("msg", "Invalid value"))
    return _envelope(400, fields)


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    # ObjectNotFoundError carries its payload positionally, not as `messages`
    return _envelope(404, _first_message(exc.args[0] if exc.args else "Not found"))


async def asset_store_error_handler(request: Request, exc: AssetStoreError) -> JSONResponse:
    logger.error("Asset store failure", path=request.url.path, key=exc.key, error=str(exc))
    return _envelope(500, str(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path)
    return _envelope(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(AssetStoreError, asset_store_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
