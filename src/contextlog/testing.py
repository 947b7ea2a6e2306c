"""Helpers for asserting on log output in tests."""

from collections.abc import Iterable

from contextlog.core.logger import Logger
from contextlog.core.models import Level, LogEntry
from contextlog.core.ports import Collector


def capture_logger(
    level: Level = Level.DEBUG,
    collectors: Iterable[Collector] | None = None,
) -> tuple[Logger, list[LogEntry]]:
    """Create a logger that appends every accepted entry to a list.

    Args:
        level: Threshold of the returned logger.
        collectors: Collectors to use. Defaults to the logger's defaults.

    Returns:
        Tuple of (logger, entries list).
    """
    entries: list[LogEntry] = []
    logger = Logger(entries.append, collectors=collectors, level=level)
    return logger, entries
