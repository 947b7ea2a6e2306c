"""Python logging handler adapter for contextlog.

This adapter bridges Python's standard library logging module to a
contextlog Logger, so records from libraries that use ``logging`` carry the
fields of the current context and reach the same output.
"""

import logging
import traceback

from contextlog.adapters.logging_context import get_log_context
from contextlog.core.models import Attribute, Level
from contextlog.core.ports import LoggerPort

# Standard LogRecord attributes that should not be treated as extra fields
_STANDARD_LOGRECORD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    }
)


# Default attributes to extract from LogRecord
_DEFAULT_INCLUDE_ATTRS = ["logger", "funcName", "lineno"]


def level_for_record(levelno: int) -> Level:
    """Map a stdlib level number onto the four contextlog levels."""
    if levelno < logging.INFO:
        return Level.DEBUG
    if levelno < logging.WARNING:
        return Level.INFO
    if levelno < logging.ERROR:
        return Level.WARN
    return Level.ERROR


class ContextLogHandler(logging.Handler):
    """Logging handler that forwards log records to a contextlog Logger.

    Fields of the current scoped context (see ``logging_context``) are
    collected by the logger as usual; record attributes, ``extra=`` scalars
    and exception details are appended after them.

    Example:
        ```python
        from contextlog.adapters.logging import ContextLogHandler
        from contextlog.config import new_logger

        handler = ContextLogHandler(new_logger())
        logging.getLogger().addHandler(handler)
        ```
    """

    def __init__(
        self,
        logger: LoggerPort,
        include_attrs: list[str] | None = None,
    ) -> None:
        """Initialize the handler with a target logger.

        Args:
            logger: Logger that receives the converted records.
            include_attrs: List of LogRecord attributes to include. Defaults to
                ["logger", "funcName", "lineno"]; "pathname" is also available.
        """
        super().__init__()
        self._logger = logger
        self._include_attrs = (
            include_attrs if include_attrs is not None else _DEFAULT_INCLUDE_ATTRS
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record through the target logger.

        Args:
            record: The log record to emit.
        """
        try:
            message = record.getMessage()
        except Exception:
            self.handleError(record)
            return

        # Map of attribute names to their values from LogRecord
        attr_mapping: dict[str, str | int] = {
            "logger": record.name,
            "funcName": record.funcName or "",
            "lineno": record.lineno,
            "pathname": record.pathname,
        }

        attributes = [
            Attribute(key, attr_mapping[key])
            for key in self._include_attrs
            if key in attr_mapping
        ]

        # Add any extra attributes passed via logging call
        for key, value in record.__dict__.items():
            if key not in _STANDARD_LOGRECORD_ATTRS and isinstance(
                value, (str, int, float, bool)
            ):
                attributes.append(Attribute(key, value))

        # Extract exception info if present
        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            if exc_type is not None:
                attributes.append(Attribute("exc_type", exc_type.__name__))
            if exc_value is not None:
                attributes.append(Attribute("exc_message", str(exc_value)))
            if exc_tb is not None:
                attributes.append(
                    Attribute(
                        "exc_traceback",
                        "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
                    )
                )

        self._logger.log(
            get_log_context(), level_for_record(record.levelno), message, *attributes
        )
