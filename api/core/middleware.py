"""ASGI middleware for request IDs, access logging, and crash recovery.

Registration order in main.py (outermost first):
    RequestIdMiddleware -> AccessLogMiddleware -> RecoveryMiddleware -> app
"""

from __future__ import annotations

import json
import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logger import bind_contextvars, clear_contextvars, get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = b"x-request-id"
_MAX_REQUEST_ID_LENGTH = 128


def _inbound_request_id(scope: Scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name.lower() == REQUEST_ID_HEADER:
            request_id = value.decode("latin-1").strip()
            if request_id and len(request_id) <= _MAX_REQUEST_ID_LENGTH:
                return request_id
    return None


class RequestIdMiddleware:
    """Tags every request with an ID.

    Reuses the caller's ``X-Request-Id`` header when present, otherwise
    generates one. The ID is bound to the logging context for the duration
    of the request and echoed back in the response headers.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _inbound_request_id(scope) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_wrapper(message: Message) -> None:
            if message.get("type") == "http.response.start":
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        clear_contextvars()
        bind_contextvars(request_id=request_id)
        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            clear_contextvars()


class AccessLogMiddleware:
    """Emits one ``request.completed`` log line per request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        client = scope.get("client")
        client_ip = client[0] if client else "unknown"

        response_status: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status

            if message.get("type") == "http.response.start":
                response_status = int(message.get("status", 0))
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                duration_ms = (time.perf_counter() - start_time) * 1000
                headers.append(
                    (b"x-request-duration-ms", f"{duration_ms:.2f}".encode())
                )
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            route = scope.get("route")
            logger.info(
                "request.completed",
                http_method=method,
                http_path=path,
                http_route=getattr(route, "path", None) or path,
                http_status_code=response_status,
                http_client_ip=client_ip,
                duration_ms=round(duration_ms, 2),
            )


class RecoveryMiddleware:
    """Converts unhandled exceptions into a generic 500 response.

    A handler that blows up (including the unimplemented endpoints, which
    raise ``NotImplementedError``) must never take the process down or leak
    internals to the client. If the response has already started there is
    nothing sensible to send, so the exception is re-raised for the server
    to close the connection.
    """

    ERROR_BODY = json.dumps({"message": "internal server error"}).encode()

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started
            if message.get("type") == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            logger.exception(
                "unhandled.exception",
                exc_type=type(exc).__name__,
                path=scope.get("path", ""),
                method=scope.get("method", "UNKNOWN"),
            )
            if response_started:
                raise

            await send(
                {
                    "type": "http.response.start",
                    "status": 500,
                    "headers": [
                        (b"content-type", b"application/json"),
                        (b"content-length", str(len(self.ERROR_BODY)).encode()),
                    ],
                }
            )
            await send({"type": "http.response.body", "body": self.ERROR_BODY})
