"""Port interfaces for the logging pipeline.

These protocols define the contracts collectors, renderers and loggers must
implement. Code that only needs to log depends on :class:`LoggerPort`, not on
a concrete logger.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from contextlog.core.context import Context
from contextlog.core.models import AttributeList, Level, LogEntry

LogCallback = Callable[[LogEntry], None]


@runtime_checkable
class Collector(Protocol):
    """Port for deriving log fields from a context at log time.

    Examples: FieldContext, TraceContext, SpanCollector.
    """

    def fields_from_context(self, ctx: Context) -> AttributeList:
        """Return the fields this collector contributes for ``ctx``."""
        ...


@runtime_checkable
class Renderer(Protocol):
    """Port for turning a log entry into output text.

    Examples: JSONRenderer, PrettyRenderer.
    """

    def render(self, entry: LogEntry) -> str:
        """Render ``entry``, including its trailing newline."""
        ...


@runtime_checkable
class LoggerPort(Protocol):
    """Port for emitting log messages against a context."""

    def set_level(self, level: Level) -> None: ...

    def add_collector(self, collector: Collector) -> None: ...

    def debug(self, ctx: Context, message: str) -> None: ...

    def info(self, ctx: Context, message: str) -> None: ...

    def warn(self, ctx: Context, message: str) -> None: ...

    def error(self, ctx: Context, message: str) -> None: ...

    def log(
        self, ctx: Context, level: Level, message: str, *args: Any, **kwargs: Any
    ) -> None: ...
