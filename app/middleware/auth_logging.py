from fastapi import Request
import logging
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app")

MUTATING_METHODS = ("POST", "PUT", "DELETE")

class AuthLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        # Writes to posts and profiles all need a bearer token
        if request.method in MUTATING_METHODS and not request.headers.get("Authorization"):
            logger.debug(f"{request.method} {path} received without auth header")

        response = await call_next(request)

        # Log auth-related status codes
        if response.status_code in (401, 403):
            logger.warning(f"Auth error: {response.status_code} on {request.method} {path}")

        return response
