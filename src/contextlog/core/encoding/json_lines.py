"""JSON line renderer for log entries."""

import json
from collections.abc import Iterable
from datetime import UTC, datetime

from contextlog.core.models import Attribute, LogEntry

_SEPARATORS = (",", ":")


def format_time(timestamp: datetime) -> str:
    """Format a timestamp as RFC 3339 in UTC with a ``Z`` suffix."""
    return timestamp.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _encode_value(value: object) -> str:
    return json.dumps(value, separators=_SEPARATORS, allow_nan=False)


def encode_fields(attributes: Iterable[Attribute]) -> str:
    """Encode attributes as a JSON object in list order.

    Keys are written in the order given and repeated keys are kept, so the
    object mirrors the attribute sequence exactly.

    Raises:
        TypeError: If a value is not JSON serializable.
        ValueError: If a value is NaN/Infinity or contains a circular reference.
        RecursionError: If a value is nested too deeply.
    """
    members = [
        f"{json.dumps(attr.key)}:{_encode_value(attr.value)}" for attr in attributes
    ]
    return "{" + ",".join(members) + "}"


class JSONRenderer:
    """Renders entries as one JSON object per line.

    Output shape: ``{"level", "time", "message", "fields"}``. When a field
    value cannot be encoded the entry is written without ``fields`` so the
    level, time and message always reach the output.
    """

    def render(self, entry: LogEntry) -> str:
        head = json.dumps(
            {
                "level": entry.level.name,
                "time": format_time(entry.timestamp),
                "message": entry.message,
            },
            separators=_SEPARATORS,
        )
        try:
            fields = encode_fields(entry.attributes)
        except (TypeError, ValueError, RecursionError):
            # fields are dropped, the entry itself is still written
            return head + "\n"
        return f'{head[:-1]},"fields":{fields}}}\n'
