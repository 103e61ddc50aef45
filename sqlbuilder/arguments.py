"""Rendering of Python values as SQL literals."""

import datetime
from decimal import Decimal
from functools import singledispatch
from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from sqlbuilder.quoting import quote

__all__ = (
    "SqlArg",
    "register_sql_arg",
    "sql_arg",
)

T = TypeVar("T")


@runtime_checkable
class SqlArg(Protocol):
    """Protocol for objects that know their own SQL literal form."""

    def sql_arg(self) -> str:
        """Return the literal text to splice into SQL."""
        ...


@singledispatch
def sql_arg(value: Any) -> str:
    """Render a value as SQL literal text.

    Strings are quoted and escaped, booleans become ``TRUE``/``FALSE``,
    ``None`` becomes ``NULL`` and numbers are written as-is. Objects
    implementing :class:`SqlArg` render themselves; anything else is quoted
    from its ``str()`` form.

    Args:
        value: The value to render.

    Returns:
        The SQL literal.
    """
    if isinstance(value, SqlArg):
        return value.sql_arg()
    return quote(str(value))


@sql_arg.register(type(None))
def _(value: None) -> str:
    return "NULL"


@sql_arg.register(bool)
def _(value: bool) -> str:
    return "TRUE" if value else "FALSE"


@sql_arg.register(int)
@sql_arg.register(float)
@sql_arg.register(Decimal)
def _(value: "int | float | Decimal") -> str:
    return str(value)


@sql_arg.register(str)
def _(value: str) -> str:
    return quote(value)


@sql_arg.register(datetime.date)
@sql_arg.register(datetime.time)
def _(value: "datetime.date | datetime.time") -> str:
    return quote(value.isoformat())


def register_sql_arg(cls: type) -> Callable[[Callable[[T], str]], Callable[[T], str]]:
    """Register a renderer for an additional type.

    Example:
        >>> @register_sql_arg(UUID)
        ... def _(value):
        ...     return quote(str(value))

    Args:
        cls: The type to render.

    Returns:
        A decorator taking the rendering function.
    """
    return sql_arg.register(cls)
