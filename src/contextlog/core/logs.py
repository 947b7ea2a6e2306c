"""Process-wide default logger and the module-level logging API.

The default logger is a convenience for top-level entry points. It is built
from the environment on first use and is meant to be configured once, before
concurrent logging starts. Components should receive a Logger explicitly.
"""

from typing import Any

from contextlog.core.context import (
    DEFAULT_CONTEXT,
    DEFAULT_TRACE,
    Context,
    collect_args,
)
from contextlog.core.logger import Logger
from contextlog.core.ports import LoggerPort

_default_logger: Logger | None = None


def get_default_logger() -> Logger:
    """Return the default logger, creating it from the environment if needed."""
    global _default_logger
    if _default_logger is None:
        from contextlog.config import new_logger

        _default_logger = new_logger()
    return _default_logger


def set_default_logger(logger: Logger | None) -> None:
    """Replace the default logger. ``None`` rebuilds it on next use."""
    global _default_logger
    _default_logger = logger


class WrappedContext(Context):
    """A context that can also log.

    Returned by :func:`with_fields` so both styles work::

        with_fields(ctx, "user", "alice").info("signed in")

        ctx = with_fields(ctx, "user", "alice")
        info(ctx, "signed in")
    """

    __slots__ = ("context", "logger")

    def __init__(self, context: Context, logger: LoggerPort | None = None) -> None:
        super().__init__()
        self.context = context
        self.logger = logger

    def value(self, key: object, default: Any = None) -> Any:
        return self.context.value(key, default)

    def with_value(self, key: object, value: Any) -> Context:
        return self.context.with_value(key, value)

    def _logger(self) -> LoggerPort:
        return self.logger if self.logger is not None else get_default_logger()

    def debug(self, message: str) -> None:
        self._logger().debug(self, message)

    def info(self, message: str) -> None:
        self._logger().info(self, message)

    def warn(self, message: str) -> None:
        self._logger().warn(self, message)

    def error(self, message: str) -> None:
        self._logger().error(self, message)


def with_fields(
    ctx: Context, *args: Any, logger: LoggerPort | None = None, **kwargs: Any
) -> WrappedContext:
    """Attach fields to a context through the default field store.

    Args:
        ctx: Parent context. It is not modified.
        *args: ``"key", value`` pairs, Attributes or mappings.
        logger: Logger used by the returned context's logging methods.
        **kwargs: Additional fields.

    Returns:
        Derived context carrying the merged fields.
    """
    attrs = collect_args(*args, **kwargs)
    return WrappedContext(DEFAULT_CONTEXT.with_attrs(ctx, attrs), logger)


with_field = with_fields


def with_error(ctx: Context, err: BaseException) -> WrappedContext:
    return with_fields(ctx, "error", str(err))


def with_trace(ctx: Context, trace: str) -> Context:
    return DEFAULT_TRACE.with_trace(ctx, trace)


def debug(ctx: Context, message: str) -> None:
    get_default_logger().debug(ctx, message)


def debugf(ctx: Context, message: str, *params: Any) -> None:
    get_default_logger().debugf(ctx, message, *params)


def info(ctx: Context, message: str) -> None:
    get_default_logger().info(ctx, message)


def infof(ctx: Context, message: str, *params: Any) -> None:
    get_default_logger().infof(ctx, message, *params)


def warn(ctx: Context, message: str) -> None:
    get_default_logger().warn(ctx, message)


def warnf(ctx: Context, message: str, *params: Any) -> None:
    get_default_logger().warnf(ctx, message, *params)


def error(ctx: Context, message: str) -> None:
    get_default_logger().error(ctx, message)


def errorf(ctx: Context, message: str, *params: Any) -> None:
    get_default_logger().errorf(ctx, message, *params)


def fatal(ctx: Context, message: str) -> None:
    """Log at ERROR through the default logger, then exit with status 1."""
    get_default_logger().fatal(ctx, message)


def fatalf(ctx: Context, message: str, *params: Any) -> None:
    get_default_logger().fatalf(ctx, message, *params)
