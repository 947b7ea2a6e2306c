"""Renderers that turn log entries into output text."""

from contextlog.core.encoding.json_lines import JSONRenderer, encode_fields, format_time
from contextlog.core.encoding.pretty import PrettyRenderer

__all__ = ["JSONRenderer", "PrettyRenderer", "encode_fields", "format_time"]
