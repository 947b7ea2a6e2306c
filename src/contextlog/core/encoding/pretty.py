"""Human-readable renderer for log entries."""

import json
from collections.abc import Iterable

from contextlog.core.encoding.ansi import colorize, level_color
from contextlog.core.models import Attribute, LogEntry


def format_scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_structured(value: object, prefix: str) -> str:
    """Pretty-print a structured value as indented JSON.

    Continuation lines start with ``prefix`` so the block stays inside the
    field gutter.
    """
    try:
        text = json.dumps(value, indent=2, default=repr)
    except ValueError:
        # circular references, which repr() marks as [...]
        text = repr(value)
    except RecursionError:
        text = f"<{type(value).__name__} nested too deeply>"
    return ("\n" + prefix).join(text.splitlines())


class PrettyRenderer:
    """Renders a colored ``LEVEL: message`` line followed by one line per field.

    Args:
        skip_fields: Field keys that are never printed.
        indent: Text placed before the ``|`` gutter of every field line.
        color: Wrap the level in ANSI color codes.
    """

    def __init__(
        self,
        skip_fields: Iterable[str] = (),
        *,
        indent: str = "  ",
        color: bool = True,
    ) -> None:
        self.skip_fields = frozenset(skip_fields)
        self.indent = indent
        self.color = color

    def format_header(self, level: str, message: str) -> str:
        label = level.upper()
        if self.color:
            label = colorize(label, level_color(level))
        return f"{label}: {message}"

    def format_fields(self, attributes: Iterable[Attribute]) -> list[str]:
        gutter = f"{self.indent}| "
        lines = []
        for attr in attributes:
            if attr.key in self.skip_fields:
                continue
            if attr.kind.is_scalar:
                text = format_scalar(attr.value)
            else:
                text = format_structured(attr.value, f"{self.indent}|  ")
            lines.append(f"{gutter}{attr.key}: {text}")
        return lines

    def format(self, level: str, message: str, attributes: Iterable[Attribute]) -> str:
        lines = [self.format_header(level, message), *self.format_fields(attributes)]
        return "\n".join(lines) + "\n"

    def render(self, entry: LogEntry) -> str:
        return self.format(entry.level.name, entry.message, entry.attributes)
