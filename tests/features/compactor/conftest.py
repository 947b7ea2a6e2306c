"""BDD step definitions for log stream compaction features."""

import io
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from contextlog.core.compactor import Printer
from contextlog.core.encoding.ansi import ANSI
from contextlog.core.encoding.pretty import PrettyRenderer


@dataclass
class CompactionContext:
    """State shared by the steps of one scenario."""

    output: io.StringIO = field(default_factory=io.StringIO)
    printer: Printer | None = None

    def lines(self) -> list[str]:
        return self.output.getvalue().splitlines()


@pytest.fixture
def compaction() -> CompactionContext:
    """Fresh scenario context for each test."""
    return CompactionContext()


@given("a printer without colors")
def step_plain_printer(compaction: CompactionContext) -> None:
    compaction.printer = Printer(
        compaction.output, renderer=PrettyRenderer(indent="", color=False)
    )


@given("a printer with colors")
def step_color_printer(compaction: CompactionContext) -> None:
    compaction.printer = Printer(
        compaction.output, renderer=PrettyRenderer(indent="", color=True)
    )


@when(parsers.parse("the line '{line}' is read"))
def step_read_line(compaction: CompactionContext, line: str) -> None:
    assert compaction.printer is not None
    compaction.printer.print_raw_line(line)


@when("the input ends")
def step_input_ends(compaction: CompactionContext) -> None:
    assert compaction.printer is not None
    compaction.printer.end_dot_run()


@then(parsers.parse("the output has {count:d} lines"))
def step_line_count(compaction: CompactionContext, count: int) -> None:
    assert len(compaction.lines()) == count


@then(parsers.parse('output line {n:d} is "{text}"'))
def step_output_line(compaction: CompactionContext, n: int, text: str) -> None:
    assert compaction.lines()[n - 1] == text


@then(parsers.parse('line {n:d} shows level "{level}" in "{color}" with message "{message}"'))
def step_colored_header(
    compaction: CompactionContext, n: int, level: str, color: str, message: str
) -> None:
    expected = f"{ANSI[color]}{level}{ANSI['RESET']}: {message}"
    assert compaction.lines()[n - 1] == expected


@then(parsers.parse("line {n:d} marks the invalid payload '{payload}'"))
def step_invalid_payload(compaction: CompactionContext, n: int, payload: str) -> None:
    assert compaction.lines()[n - 1] == f"<invalid JSON> {payload}"
