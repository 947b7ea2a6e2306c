"""Scoped "current context" for code that cannot thread a Context through.

Framework glue (the ASGI middleware, the stdlib logging bridge) reads and
sets the current Context through a ContextVar, so it follows asyncio tasks
and threads the same way contextvars do. Application code should prefer
passing the Context explicitly.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any

from contextlog.core.context import DEFAULT_CONTEXT, Context, background, collect_args

_current: ContextVar[Context] = ContextVar("contextlog_context", default=background())


def get_log_context() -> Context:
    """Return the current context, the background context if none is set."""
    return _current.get()


def set_log_context(ctx: Context) -> Token[Context]:
    """Make ``ctx`` the current context.

    Returns:
        Token that restores the previous context via ``reset_log_context``.
    """
    return _current.set(ctx)


def reset_log_context(token: Token[Context]) -> None:
    _current.reset(token)


def update_log_context(*args: Any, **kwargs: Any) -> Context:
    """Merge fields into the current context and make the result current.

    Args:
        *args: ``"key", value`` pairs, Attributes or mappings.
        **kwargs: Additional fields.

    Returns:
        The new current context.
    """
    ctx = DEFAULT_CONTEXT.with_attrs(_current.get(), collect_args(*args, **kwargs))
    _current.set(ctx)
    return ctx


def clear_log_context() -> None:
    _current.set(background())


@contextmanager
def log_context(ctx: Context) -> Iterator[Context]:
    """Make ``ctx`` current for the duration of the block."""
    token = _current.set(ctx)
    try:
        yield ctx
    finally:
        _current.reset(token)
