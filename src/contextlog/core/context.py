"""Immutable execution contexts and the stores that attach log fields to them.

A :class:`Context` is a chain of key/value nodes. Deriving a child context
allocates a new node pointing at its parent, so a published context is never
mutated and sibling contexts cannot observe each other's values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from contextlog.core.models import Attribute, AttributeList, EMPTY_ATTRIBUTES

BAD_KEY = "!BADKEY"

_MISSING = object()


class Context:
    """Immutable snapshot of request-scoped values."""

    __slots__ = ("_parent", "_key", "_value")

    def __init__(
        self,
        parent: Context | None = None,
        key: object = _MISSING,
        value: Any = None,
    ) -> None:
        self._parent = parent
        self._key = key
        self._value = value

    def value(self, key: object, default: Any = None) -> Any:
        """Return the value stored under ``key`` by this context or an ancestor."""
        node: Context | None = self
        while node is not None:
            if node._key is key:
                return node._value
            node = node._parent
        return default

    def with_value(self, key: object, value: Any) -> Context:
        """Derive a child context carrying ``value`` under ``key``."""
        return Context(self, key, value)

    def __repr__(self) -> str:
        depth = 0
        node = self._parent
        while node is not None:
            depth += 1
            node = node._parent
        return f"<Context depth={depth}>"


_BACKGROUND = Context()


def background() -> Context:
    """Return the empty root context."""
    return _BACKGROUND


class FieldContext:
    """Attaches an AttributeList to contexts and collects it back at log time.

    Each store owns a private key, so two stores never see each other's
    fields.
    """

    def __init__(self) -> None:
        self._key = object()

    def with_attrs(self, ctx: Context, attrs: AttributeList) -> Context:
        """Derive a context whose fields are ``attrs`` merged over the current ones.

        Existing keys keep their position with the new value; new keys are
        appended in the order given.
        """
        existing: AttributeList | None = ctx.value(self._key)
        if existing is None:
            return ctx.with_value(self._key, attrs)
        return ctx.with_value(self._key, existing.merge(attrs))

    def fields_from_context(self, ctx: Context) -> AttributeList:
        return ctx.value(self._key, EMPTY_ATTRIBUTES)

    from_context = fields_from_context


class TraceContext:
    """Stores a correlation id on a context and reports it as ``trace``."""

    field_name = "trace"

    def __init__(self) -> None:
        self._key = object()

    def with_trace(self, ctx: Context, trace: str) -> Context:
        return ctx.with_value(self._key, trace)

    def from_context(self, ctx: Context) -> str:
        value = ctx.value(self._key)
        if not isinstance(value, str):
            return ""
        return value

    def fields_from_context(self, ctx: Context) -> AttributeList:
        value = ctx.value(self._key)
        if not isinstance(value, str):
            return EMPTY_ATTRIBUTES
        return AttributeList([(self.field_name, value)])


DEFAULT_CONTEXT = FieldContext()
DEFAULT_TRACE = TraceContext()


def collect_args(*args: Any, **kwargs: Any) -> AttributeList:
    """Convert loosely typed call-site arguments to an AttributeList.

    Accepts ``"key", value`` pairs, :class:`Attribute` instances and mappings
    (expanded in the sorted order of their keys as strings), followed by keyword
    arguments. A trailing string without a value, or any other positional
    object, is recorded under ``!BADKEY``.
    """
    attrs: list[Attribute] = []
    remaining = list(args)
    while remaining:
        head = remaining.pop(0)
        if isinstance(head, str):
            if not remaining:
                attrs.append(Attribute(BAD_KEY, head))
            else:
                attrs.append(Attribute(head, remaining.pop(0)))
        elif isinstance(head, Attribute):
            attrs.append(head)
        elif isinstance(head, Mapping):
            attrs.extend(Attribute(str(k), head[k]) for k in sorted(head, key=str))
        else:
            attrs.append(Attribute(BAD_KEY, head))
    attrs.extend(Attribute(k, v) for k, v in kwargs.items())
    return AttributeList(attrs)
