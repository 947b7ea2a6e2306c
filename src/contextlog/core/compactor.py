"""Log stream compaction printer.

Reads newline-delimited log output (this package's JSON lines or arbitrary
text from another process) and prints it for humans. Consecutive entries that
are identical apart from their ``time`` collapse into a run of dots instead
of being rendered again.
"""

import json
from collections.abc import Iterable, Mapping
from typing import IO, Any

from contextlog.core.encoding.ansi import supports_color
from contextlog.core.encoding.pretty import PrettyRenderer
from contextlog.core.models import Attribute, AttributeList, LogEntry
from contextlog.core.ports import LogCallback

DEFAULT_DELIMITER = " | "
DOT = "."
STANDARD_KEYS = frozenset({"level", "message", "fields"})


def _snapshot(payload: str) -> str:
    """Canonical form of a JSON object line without its ``time`` member.

    Key order is ignored and every number compares as a float, so ``1`` and
    ``1.0`` are equal while ``true`` and ``1`` stay distinct.
    """
    fields = json.loads(payload, parse_int=float)
    fields.pop("time", None)
    return json.dumps(fields, sort_keys=True, separators=(",", ":"))


class Printer:
    """Pretty-prints a log stream, collapsing consecutive duplicates.

    Args:
        output: Text stream to write to.
        prefix: Prefix shown before every block this printer writes.
        delimiter: Splits ``"<source> | <payload>"`` lines into a per-line
            prefix and the payload. ``None`` disables splitting.
        separator: Optional line written before every block.
        renderer: Renderer for standard entries. Defaults to a PrettyRenderer
            without indentation, colored when ``output`` is a terminal.
    """

    def __init__(
        self,
        output: IO[str],
        *,
        prefix: str = "",
        delimiter: str | None = DEFAULT_DELIMITER,
        separator: str | None = None,
        renderer: PrettyRenderer | None = None,
    ) -> None:
        self.output = output
        self.prefix = prefix
        self.delimiter = delimiter
        self.separator = separator
        self.renderer = renderer or PrettyRenderer(
            indent="", color=supports_color(output)
        )
        self._last: str | None = None
        self._in_dots = False

    @property
    def in_dot_run(self) -> bool:
        return self._in_dots

    def end_dot_run(self) -> None:
        """Terminate an active dot run with a newline."""
        if self._in_dots:
            self.output.write("\n")
            self._in_dots = False

    def reset(self) -> None:
        """Forget the last entry so the next one is always rendered."""
        self._last = None

    def _write_block(self, name_prefix: str, text: str) -> None:
        self.end_dot_run()
        if self.separator:
            self.output.write(f"{self.separator}\n")
        if self.prefix:
            name_prefix = f"{self.prefix} {name_prefix}" if name_prefix else self.prefix
        if name_prefix:
            self.output.write(f"{name_prefix}: {text}\n")
        else:
            self.output.write(f"{text}\n")

    def print_standard_line(
        self,
        name_prefix: str,
        level: str,
        message: str,
        attributes: Iterable[Attribute],
    ) -> None:
        """Render one entry as a header line followed by its fields."""
        self._write_block(name_prefix, self.renderer.format_header(level, message))
        for line in self.renderer.format_fields(attributes):
            self.output.write(f"{line}\n")

    def print_raw_line(self, line: str, name_prefix: str = "") -> None:
        """Process one line of a log stream."""
        line = line.rstrip("\r\n")
        if not line:
            return

        payload = line
        if self.delimiter:
            source, found, rest = line.partition(self.delimiter)
            if found:
                name_prefix = f"{name_prefix} {source}" if name_prefix else source
                payload = rest

        if not payload.startswith("{"):
            self.reset()
            self._write_block(name_prefix, payload)
            return

        try:
            fields = json.loads(payload)
            snapshot = _snapshot(payload) if isinstance(fields, dict) else None
        except (ValueError, RecursionError):
            # undecodable or nested too deeply to decode
            fields = snapshot = None
        if not isinstance(fields, dict) or snapshot is None:
            self._write_block(name_prefix, f"<invalid JSON> {payload}")
            return

        fields.pop("time", None)
        if snapshot == self._last:
            self.output.write(DOT)
            self._in_dots = True
            return
        self._last = snapshot
        self.end_dot_run()

        if self._is_standard(fields):
            self.print_standard_line(
                name_prefix,
                fields["level"],
                fields["message"],
                AttributeList(fields["fields"]),
            )
        else:
            self._write_block(name_prefix, payload)

    def print_lines(self, lines: Iterable[str], name_prefix: str = "") -> None:
        for line in lines:
            self.print_raw_line(line, name_prefix)
        self.end_dot_run()

    @staticmethod
    def _is_standard(fields: Mapping[str, Any]) -> bool:
        return (
            fields.keys() == STANDARD_KEYS
            and isinstance(fields["level"], str)
            and isinstance(fields["message"], str)
            and isinstance(fields["fields"], dict)
            # an empty key cannot become an attribute
            and all(fields["fields"])
        )

    def callback(self, prefix: str = "") -> LogCallback:
        """Return a logger callback that prints entries through this printer."""

        def _print(entry: LogEntry) -> None:
            self.print_standard_line(
                prefix, entry.level.name, entry.message, entry.attributes
            )

        return _print

    def writer(self, prefix: str = "") -> "LineBuffer":
        """Return a writable stream that feeds complete lines to this printer."""
        return LineBuffer(self, prefix)


class LineBuffer:
    """Buffers arbitrary writes and hands complete lines to a Printer.

    The trailing partial line is kept until a later write completes it, so a
    JSON line split across writes is only parsed once it is whole. Bytes are
    buffered undecoded, so a multi-byte character split across writes is
    decoded intact.
    """

    def __init__(self, printer: Printer, prefix: str = "") -> None:
        self.printer = printer
        self.prefix = prefix
        self._buffer = b""
        self.closed = False

    def write(self, data: bytes | str) -> int:
        if self.closed:
            raise ValueError("write to closed LineBuffer")
        chunk = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self._buffer += chunk
        if b"\n" in self._buffer:
            *lines, self._buffer = self._buffer.split(b"\n")
            for raw in lines:
                self._emit(raw)
        return len(data)

    def _emit(self, raw: bytes) -> None:
        line = raw.decode("utf-8", errors="replace")
        self.printer.print_raw_line(line, self.prefix)

    def flush(self) -> None:
        self.printer.output.flush()

    def close(self) -> None:
        """Print any remaining partial line and end an active dot run."""
        if self.closed:
            return
        if self._buffer:
            remaining, self._buffer = self._buffer, b""
            self._emit(remaining)
        self.printer.end_dot_run()
        self.closed = True

    def __enter__(self) -> "LineBuffer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
