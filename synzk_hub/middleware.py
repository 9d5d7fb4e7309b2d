"""
HTTP middleware: security headers, request logging and body size limit.
"""

import time

import structlog
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = structlog.get_logger()

HSTS_VALUE = "max-age=15552000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers. No CSP: this service only serves JSON."""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "SAMEORIGIN",
        "Referrer-Policy": "no-referrer",
        "Cross-Origin-Opener-Policy": "same-origin",
        "Cross-Origin-Resource-Policy": "same-origin",
        "Origin-Agent-Cluster": "?1",
        "X-DNS-Prefetch-Control": "off",
        "X-Download-Options": "noopen",
        "X-Permitted-Cross-Domain-Policies": "none",
    }

    def __init__(self, app, *, enforce_hsts: bool = True) -> None:
        super().__init__(app)
        self.headers = dict(self.HEADERS)
        if enforce_hsts:
            self.headers["Strict-Transport-Security"] = HSTS_VALUE

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and duration."""

    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                method=request.method,
                path=request.url.path,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise

        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return response


class BodyTooLargeError(Exception):
    """Raised from the wrapped receive channel once the limit is crossed."""


class BodySizeLimitMiddleware:
    """
    Refuse request bodies larger than max_body_bytes with a JSON 413.

    A declared Content-Length over the limit is refused before the app runs.
    Bodies without one (chunked uploads) are counted as they stream in; the
    app's own response is discarded once the count crosses the limit.
    """

    def __init__(self, app: ASGIApp, *, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None and self._declared_too_large(declared):
            await self._reject(scope, receive, send, content_length=declared)
            return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    exceeded = True
                    raise BodyTooLargeError()
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            if exceeded:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except BodyTooLargeError:
            pass

        if exceeded and not response_started:
            await self._reject(scope, receive, send, received=received)

    def _declared_too_large(self, declared: str) -> bool:
        try:
            return int(declared) > self.max_body_bytes
        except ValueError:
            return False

    async def _reject(self, scope: Scope, receive: Receive, send: Send, **context) -> None:
        logger.warning(
            "request_body_too_large",
            path=scope.get("path"),
            limit=self.max_body_bytes,
            **context,
        )
        response = JSONResponse(
            status_code=413,
            content={
                "error": "payload_too_large",
                "details": f"request body exceeds {self.max_body_bytes} bytes",
            },
        )
        await response(scope, receive, send)
