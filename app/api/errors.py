# app/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.domain.errors import StoreError
from app.utils.settings import is_production
from app.utils.logging import get_logger

logger = get_logger(__name__)


def error_body(message: str, error: str | None = None) -> dict:
    body = {"success": False, "message": message}
    # internals are only shown outside production
    if error and not is_production():
        body["error"] = error
    return body


def _describe(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if first.get("type") == "missing":
        return f"Missing required field: {location}" if location else "Missing request body"
    return f"Invalid value for {location}: {first.get('msg')}" if location else first.get("msg", "Invalid request")


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.detail})")
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.detail))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content=error_body(_describe(exc), str(exc.errors())))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail
        if exc.status_code == 404 and message == "Not Found":
            message = "Route not found"
        return JSONResponse(status_code=exc.status_code, content=error_body(str(message)), headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=error_body("Something went wrong!", repr(exc)))
