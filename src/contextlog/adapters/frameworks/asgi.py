"""ASGI middleware that logs requests with a correlation id.

The middleware works with any ASGI server (uvicorn, hypercorn, daphne)
without a framework dependency. Each request gets a context carrying the
request fields and trace id; handlers reach it through
``contextlog.adapters.logging_context.get_log_context()``.
"""

import fnmatch
import time
import uuid
from collections.abc import Callable, Coroutine
from typing import Any

from contextlog.adapters.logging_context import log_context
from contextlog.core.context import (
    DEFAULT_CONTEXT,
    DEFAULT_TRACE,
    Context,
    FieldContext,
    TraceContext,
    background,
)
from contextlog.core.logs import get_default_logger
from contextlog.core.models import AttributeList, Level
from contextlog.core.ports import LoggerPort

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]


def _extract_trace(scope: Scope, header_name: str = "x-trace") -> str:
    """Extract or generate a trace id from ASGI scope headers.

    Searches for the specified header (case-insensitive). If not found or
    empty, generates a new UUID.

    Args:
        scope: ASGI scope dictionary containing request metadata.
        header_name: Name of the header to search for (default: "x-trace").

    Returns:
        Trace id string (either from header or newly generated UUID).
    """
    header_bytes = header_name.lower().encode()
    headers: list[tuple[bytes, bytes]] = scope.get("headers", [])
    for name, value in headers:
        if name.lower() == header_bytes and value:
            return str(value.decode("utf-8", errors="replace"))
    return str(uuid.uuid4())


def _get_log_level_for_status(status_code: int) -> Level:
    """Determine log level based on HTTP status code.

    Maps status codes to log levels:
    - 400-499 (4xx) → WARN
    - 500-599 (5xx) → ERROR
    - Other → INFO

    Args:
        status_code: HTTP status code from response.

    Returns:
        Level for the response entry.
    """
    if 400 <= status_code < 500:
        return Level.WARN
    if 500 <= status_code < 600:
        return Level.ERROR
    return Level.INFO


class RequestLoggingMiddleware:
    """ASGI middleware that logs a ``Request`` and a ``Response`` entry per call.

    The trace id is read from ``trace_header`` (or generated), echoed on the
    response and attached to the request context together with the method,
    path and protocol.
    """

    def __init__(
        self,
        app: ASGIApp,
        logger: LoggerPort | None = None,
        *,
        field_context: FieldContext = DEFAULT_CONTEXT,
        trace_context: TraceContext = DEFAULT_TRACE,
        trace_header: str = "x-trace",
        exclude_paths: list[str] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            logger: Logger to write to. Defaults to the default logger,
                resolved per request.
            field_context: Store the request fields are attached with.
            trace_context: Store the trace id is attached with.
            trace_header: Header carrying the trace id (default: "x-trace").
            exclude_paths: Paths that are passed through without logging.
                Supports exact matches and wildcard patterns
                (e.g., "/internal/*").
        """
        self.app = app
        self.logger = logger
        self.field_context = field_context
        self.trace_context = trace_context
        self.trace_header = trace_header
        self.exclude_paths = exclude_paths or []

    def _path_excluded(self, path: str) -> bool:
        """Check if path matches any pattern in exclude_paths."""
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_paths)

    def _logger(self) -> LoggerPort:
        return self.logger if self.logger is not None else get_default_logger()

    def _request_context(self, scope: Scope, trace: str) -> Context:
        ctx = self.trace_context.with_trace(background(), trace)
        fields = AttributeList(
            [
                ("method", scope.get("method", "")),
                ("path", scope.get("path", "")),
                ("protocol", f"HTTP/{scope.get('http_version', '1.1')}"),
            ]
        )
        return self.field_context.with_attrs(ctx, fields)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI callable interface that processes requests through the wrapped app."""
        if scope["type"] != "http" or self._path_excluded(scope.get("path", "")):
            await self.app(scope, receive, send)
            return

        logger = self._logger()
        trace = _extract_trace(scope, self.trace_header)
        ctx = self._request_context(scope, trace)
        captured: dict[str, Any] = {"status": None, "exception": None}

        async def wrapped_send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                captured["status"] = message["status"]
                headers = list(message.get("headers", []))
                headers.append((self.trace_header.lower().encode(), trace.encode()))
                message = {**message, "headers": headers}
            await send(message)

        logger.info(ctx, "Request")
        start_time = time.perf_counter()
        with log_context(ctx):
            try:
                await self.app(scope, receive, wrapped_send)
            except Exception as e:
                captured["exception"] = e
                captured["status"] = 500

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        status = captured["status"] or 0
        response_fields: list[tuple[str, Any]] = [
            ("status", status),
            ("durationMS", duration_ms),
        ]
        if captured["exception"] is not None:
            exc = captured["exception"]
            response_fields.append(("exception", f"{type(exc).__name__}: {exc!s}"))
        ctx = self.field_context.with_attrs(ctx, AttributeList(response_fields))
        logger.log(ctx, _get_log_level_for_status(status), "Response")
        if captured["exception"] is not None:
            raise captured["exception"]
