"""OpenTelemetry span collector.

Reports the trace and span ids of an OpenTelemetry span as ``trace`` and
``span`` fields. The span is taken from the contextlog Context when one was
attached with :func:`with_span`, otherwise from the current OpenTelemetry
context.

Example:
    >>> from contextlog import get_default_logger
    >>> get_default_logger().add_collector(SpanCollector())
"""

from opentelemetry import trace
from opentelemetry.trace import Span

from contextlog.core.context import Context
from contextlog.core.models import AttributeList, EMPTY_ATTRIBUTES

_SPAN_KEY = object()


def with_span(ctx: Context, span: Span) -> Context:
    """Derive a context carrying an OpenTelemetry span."""
    return ctx.with_value(_SPAN_KEY, span)


def span_from_context(ctx: Context) -> Span:
    span = ctx.value(_SPAN_KEY)
    if span is None:
        return trace.get_current_span()
    return span


class SpanCollector:
    """Collector emitting ``trace`` (32 hex chars) and ``span`` (16 hex chars)."""

    def fields_from_context(self, ctx: Context) -> AttributeList:
        span_context = span_from_context(ctx).get_span_context()
        if not span_context.is_valid:
            return EMPTY_ATTRIBUTES
        return AttributeList(
            [
                ("trace", f"{span_context.trace_id:032x}"),
                ("span", f"{span_context.span_id:016x}"),
            ]
        )
