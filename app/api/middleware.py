# app/api/middleware.py
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.utils.logging import get_logger, request_id_ctx

logger = get_logger("app.requests")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Gives every request an id (log records and the X-Request-ID header)
    and logs method, path, status and duration.
    """

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_ctx.set(req_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms} ms)")
            response.headers["X-Request-ID"] = req_id
            return response
        except Exception:
            duration_ms = int((time.perf_counter() - start) * 1000)
            logger.exception(f"{request.method} {request.url.path} crashed after {duration_ms} ms")
            raise
        finally:
            request_id_ctx.reset(token)
