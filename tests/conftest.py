"""Shared test fixtures for all test modules."""

import io
from collections.abc import Iterator

import pytest

from contextlog.adapters.logging_context import clear_log_context
from contextlog.core.compactor import Printer
from contextlog.core.encoding.pretty import PrettyRenderer
from contextlog.core.logger import Logger
from contextlog.core.logs import set_default_logger
from contextlog.core.models import LogEntry
from contextlog.testing import capture_logger


@pytest.fixture(autouse=True)
def _reset_globals() -> Iterator[None]:
    """Isolate the default logger and the scoped log context between tests."""
    set_default_logger(None)
    clear_log_context()
    yield
    set_default_logger(None)
    clear_log_context()


@pytest.fixture
def captured() -> tuple[Logger, list[LogEntry]]:
    """Logger at DEBUG that records entries in a list."""
    return capture_logger()


@pytest.fixture
def output() -> io.StringIO:
    """Text stream for renderer and printer output."""
    return io.StringIO()


@pytest.fixture
def printer(output: io.StringIO) -> Printer:
    """Printer with colors disabled so output can be compared literally."""
    return Printer(output, renderer=PrettyRenderer(indent="", color=False))
