# api/middleware.py
"""
Request filters wrapped around every route.

Registration order in main.create_app (outermost first):
CORSHeadersMiddleware -> ErrorHandlerMiddleware -> RateLimitMiddleware -> routes.
"""
import logging
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept",
}

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Add permissive CORS headers to every response, whatever its status."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject clients that exceed the limiter's window with HTTP 429."""

    def __init__(self, app, limiter: RateLimiter):
        super().__init__(app)
        self.limiter = limiter

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client = get_remote_address(request)
        limit = str(self.limiter.max_requests)

        if not self.limiter.allow(client):
            retry_after = self.limiter.retry_after(client)
            logger.warning(f"Rate limit exceeded for {client} on {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={"error": RATE_LIMIT_MESSAGE},
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": limit,
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = limit
        response.headers["X-RateLimit-Remaining"] = str(self.limiter.remaining(client))
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Last-resort handler for exceptions no route converted into a response.

    `expose_details` is fixed when the app is built (development mode only).
    """

    def __init__(self, app, expose_details: bool = False):
        super().__init__(app)
        self.expose_details = expose_details

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}: {e}")
            content = {"error": "Something went wrong!"}
            if self.expose_details:
                content["details"] = str(e)
            return JSONResponse(status_code=500, content=content)
