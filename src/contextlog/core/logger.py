"""The logger: collects context fields, filters by level and emits entries."""

import os
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from contextlog.core.context import (
    DEFAULT_CONTEXT,
    DEFAULT_TRACE,
    Context,
    collect_args,
)
from contextlog.core.models import Attribute, Level, LogEntry
from contextlog.core.ports import Collector, LogCallback


def _format(message: str, params: tuple[Any, ...]) -> str:
    return message % params if params else message


class Logger:
    """Synchronous structured logger.

    On every call that passes the threshold the logger asks each collector,
    in registration order, for the fields of the given context and hands the
    resulting :class:`LogEntry` to its callback. Collector outputs are
    concatenated as-is: when two collectors report the same key, both fields
    are kept.

    Threshold and collectors are meant to be configured once at startup;
    changing them while other threads log is not synchronized.

    Example:
        ```python
        import sys

        from contextlog import JSONRenderer, Logger, Sink, background

        logger = Logger(Sink(sys.stderr, JSONRenderer()))
        logger.info(background(), "service started")
        ```
    """

    def __init__(
        self,
        callback: LogCallback,
        collectors: Iterable[Collector] | None = None,
        level: Level = Level.INFO,
    ) -> None:
        """Initialize the logger.

        Args:
            callback: Receives every accepted entry, usually a Sink.
            collectors: Field collectors. Defaults to the default field store
                followed by the default trace store.
            level: Minimum level that is emitted.
        """
        self.callback = callback
        self.level = level
        self.collectors: list[Collector] = []
        if collectors is None:
            collectors = [DEFAULT_CONTEXT, DEFAULT_TRACE]
        for collector in collectors:
            self.add_collector(collector)

    def set_level(self, level: Level) -> None:
        self.level = level

    def add_collector(self, collector: Collector) -> None:
        if not callable(getattr(collector, "fields_from_context", None)):
            raise TypeError("collector must implement fields_from_context()")
        self.collectors.append(collector)

    def enabled(self, level: Level) -> bool:
        return level >= self.level

    def debug(self, ctx: Context, message: str) -> None:
        self._log(ctx, Level.DEBUG, message)

    def info(self, ctx: Context, message: str) -> None:
        self._log(ctx, Level.INFO, message)

    def warn(self, ctx: Context, message: str) -> None:
        self._log(ctx, Level.WARN, message)

    def error(self, ctx: Context, message: str) -> None:
        self._log(ctx, Level.ERROR, message)

    # The *f variants format before the level check, so the formatting cost
    # is paid even for suppressed entries.
    def debugf(self, ctx: Context, message: str, *params: Any) -> None:
        self._log(ctx, Level.DEBUG, _format(message, params))

    def infof(self, ctx: Context, message: str, *params: Any) -> None:
        self._log(ctx, Level.INFO, _format(message, params))

    def warnf(self, ctx: Context, message: str, *params: Any) -> None:
        self._log(ctx, Level.WARN, _format(message, params))

    def errorf(self, ctx: Context, message: str, *params: Any) -> None:
        self._log(ctx, Level.ERROR, _format(message, params))

    def log(
        self, ctx: Context, level: Level, message: str, *args: Any, **kwargs: Any
    ) -> None:
        """Log with extra call-site fields appended after the collected ones.

        Args:
            ctx: Context to collect fields from.
            level: Severity of the entry.
            message: The log message.
            *args: ``"key", value`` pairs, Attributes or mappings.
            **kwargs: Additional fields.
        """
        if not self.enabled(level):
            return
        extra = collect_args(*args, **kwargs)
        self._emit(ctx, level, message, extra)

    def fatal(self, ctx: Context, message: str) -> None:
        """Log at ERROR regardless of the threshold, then exit with status 1.

        The process terminates immediately; finally blocks, atexit handlers
        and buffered streams other than the logger's own are not flushed.
        """
        self._emit(ctx, Level.ERROR, message)
        os._exit(1)

    def fatalf(self, ctx: Context, message: str, *params: Any) -> None:
        self.fatal(ctx, _format(message, params))

    def fields(self, ctx: Context) -> list[Attribute]:
        """Concatenate the fields every collector reports for ``ctx``."""
        fields: list[Attribute] = []
        for collector in self.collectors:
            fields.extend(collector.fields_from_context(ctx))
        return fields

    def _log(self, ctx: Context, level: Level, message: str) -> None:
        if not self.enabled(level):
            return
        self._emit(ctx, level, message)

    def _emit(
        self,
        ctx: Context,
        level: Level,
        message: str,
        extra: Iterable[Attribute] = (),
    ) -> None:
        fields = self.fields(ctx)
        fields.extend(extra)
        entry = LogEntry(
            level=level,
            timestamp=datetime.now(UTC),
            message=message,
            attributes=tuple(fields),
        )
        self.callback(entry)
