"""contextlog - context-carried structured logging.

Fields are attached to an immutable :class:`Context` and collected by a
:class:`Logger` at log time, then rendered as JSON lines or for humans.

Example:
    ```python
    from contextlog import background, info, with_fields

    ctx = with_fields(background(), "user", "alice")
    info(ctx, "signed in")
    ```
"""

from contextlog.core.compactor import LineBuffer, Printer
from contextlog.core.context import (
    DEFAULT_CONTEXT,
    DEFAULT_TRACE,
    Context,
    FieldContext,
    TraceContext,
    background,
    collect_args,
)
from contextlog.core.encoding import JSONRenderer, PrettyRenderer
from contextlog.core.logger import Logger
from contextlog.core.logs import (
    WrappedContext,
    debug,
    debugf,
    error,
    errorf,
    fatal,
    fatalf,
    get_default_logger,
    info,
    infof,
    set_default_logger,
    warn,
    warnf,
    with_error,
    with_field,
    with_fields,
    with_trace,
)
from contextlog.core.models import (
    Attribute,
    AttributeKind,
    AttributeList,
    Level,
    LogEntry,
)
from contextlog.core.ports import Collector, LogCallback, LoggerPort, Renderer
from contextlog.core.sink import Sink

__all__ = [
    # Models
    "Attribute",
    "AttributeKind",
    "AttributeList",
    "Level",
    "LogEntry",
    # Contexts
    "Context",
    "DEFAULT_CONTEXT",
    "DEFAULT_TRACE",
    "FieldContext",
    "TraceContext",
    "WrappedContext",
    "background",
    "collect_args",
    # Ports
    "Collector",
    "LogCallback",
    "LoggerPort",
    "Renderer",
    # Pipeline
    "JSONRenderer",
    "LineBuffer",
    "Logger",
    "PrettyRenderer",
    "Printer",
    "Sink",
    # Default logger
    "debug",
    "debugf",
    "error",
    "errorf",
    "fatal",
    "fatalf",
    "get_default_logger",
    "info",
    "infof",
    "set_default_logger",
    "warn",
    "warnf",
    "with_error",
    "with_field",
    "with_fields",
    "with_trace",
]
