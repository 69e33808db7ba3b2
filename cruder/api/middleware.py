"""HTTP Middleware — API key gate and per-request access logging.

Invariants:
    - Missing X-Api-Key -> 401; wrong key -> 403; ignored paths bypass the check
    - An ignored entry matches the exact path or any path below it ("/docs" covers "/docs/x")
    - Exactly one "http_request" record per request on logger "cruder.http":
      ERROR for status >= 500, WARNING for >= 400, INFO otherwise
    - A request that raises is logged as 500 and the exception re-raised
      (the catch-all handler renders the response)

Design Decisions:
    - Request logging registered outermost so 401/403 rejections are logged too
    - secrets.compare_digest for the key comparison: constant-time
"""

import logging
import secrets
import time

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from cruder.core.errors import ErrorSeverity

API_KEY_HEADER = "X-Api-Key"

request_logger = logging.getLogger("cruder.http")


def _auth_error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "category": "authentication",
                "severity": ErrorSeverity.WARNING.value,
            },
        },
    )


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Reject requests without the configured X-Api-Key header."""

    def __init__(
        self, app: ASGIApp, api_key: str, ignored_paths: list[str] | None = None,
    ):
        super().__init__(app)
        self.api_key = api_key
        self.ignored_paths = [p.rstrip("/") or "/" for p in ignored_paths or []]

    def is_ignored(self, path: str) -> bool:
        for ignored in self.ignored_paths:
            if path == ignored or path.startswith(ignored.rstrip("/") + "/"):
                return True
        return False

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ):
        if self.is_ignored(request.url.path):
            return await call_next(request)
        provided = request.headers.get(API_KEY_HEADER)
        if not provided:
            return _auth_error(
                status.HTTP_401_UNAUTHORIZED, "API_KEY_MISSING",
                "X-Api-Key header is missing",
            )
        if not self.api_key or not secrets.compare_digest(
            provided.encode(), self.api_key.encode(),
        ):
            return _auth_error(
                status.HTTP_403_FORBIDDEN, "API_KEY_INVALID",
                "provided X-Api-Key is invalid",
            )
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency for every request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, status.HTTP_500_INTERNAL_SERVER_ERROR, start)
            raise
        self._log(request, response.status_code, start)
        return response

    @staticmethod
    def _log(request: Request, status_code: int, start: float) -> None:
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        request_logger.log(
            level,
            "http_request",
            extra={
                "method": request.method,
                "path": request.url.path,
                "query": request.url.query,
                "status": status_code,
                "latency_ms": round((time.perf_counter() - start) * 1000, 3),
                "client_ip": request.client.host if request.client else None,
                "user_agent": request.headers.get("user-agent"),
            },
        )
