"""Plain ASGI service logging every request with a trace id.

Run with any ASGI server and pipe the JSON output through logcat:

    LOG_LEVEL=debug uvicorn examples.asgi_service:app 2>&1 | logcat
"""

import logging

from contextlog import get_default_logger, with_fields
from contextlog.adapters.frameworks.asgi import (
    Receive,
    RequestLoggingMiddleware,
    Scope,
    Send,
)
from contextlog.adapters.logging import ContextLogHandler
from contextlog.adapters.logging_context import get_log_context

# Records from libraries using the stdlib logging module share the output
logging.getLogger().addHandler(ContextLogHandler(get_default_logger()))
logging.getLogger().setLevel(logging.DEBUG)
stdlib_logger = logging.getLogger(__name__)


async def hello(scope: Scope, receive: Receive, send: Send) -> None:
    ctx = with_fields(get_log_context(), "handler", "hello")
    ctx.debug("building response")
    stdlib_logger.info("stdlib records carry the request fields too")

    await send(
        {
            "type": "http.response.start",
            "status": 200,
            "headers": [(b"content-type", b"text/plain")],
        }
    )
    await send({"type": "http.response.body", "body": b"hello\n"})


app = RequestLoggingMiddleware(hello, exclude_paths=["/health"])
