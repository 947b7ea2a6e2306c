"""``logcat`` command: pretty-print and compact a log stream.

Usage:
    some-service 2>&1 | logcat
    docker compose logs -f | logcat --prefix compose
"""

import sys
from typing import Optional

import typer

from contextlog.core.compactor import DEFAULT_DELIMITER, Printer
from contextlog.core.encoding.ansi import supports_color
from contextlog.core.encoding.pretty import PrettyRenderer

app = typer.Typer(
    name="logcat",
    help="Pretty-print newline-delimited logs, collapsing repeated entries.",
    add_completion=False,
)


@app.command()
def logcat(
    prefix: str = typer.Option("", "--prefix", "-p", help="Prefix for every block"),
    delimiter: str = typer.Option(
        DEFAULT_DELIMITER,
        "--delimiter",
        "-d",
        help="Splits '<source> | <payload>' lines; empty disables splitting",
    ),
    separator: str = typer.Option(
        "", "--separator", "-s", help="Line written before every block"
    ),
    color: Optional[bool] = typer.Option(
        None,
        "--color/--no-color",
        help="Force colors on or off (default: on for terminals, off with NO_COLOR)",
        show_default=False,
    ),
) -> None:
    """Read log lines from stdin and print them for humans."""
    printer = Printer(
        sys.stdout,
        prefix=prefix,
        delimiter=delimiter or None,
        separator=separator or None,
        renderer=PrettyRenderer(
            indent="", color=supports_color(sys.stdout) if color is None else color
        ),
    )
    printer.print_lines(sys.stdin)
    sys.stdout.flush()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
