import logging
import time
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("request")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its status and processing time."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Skip OpenAPI/Swagger endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        start_time = time.time()
        if request.query_params:
            logger.debug("%s %s query=%s", request.method,
                         request.url.path, dict(request.query_params))

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info("%s %s - Status: %s - Time: %.4fs", request.method,
                    request.url.path, response.status_code, process_time)
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response
