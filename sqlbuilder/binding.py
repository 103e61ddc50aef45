"""Placeholder substitution over rendered SQL text.

Three independent marker grammars are supported:

- positional ``?`` markers (:func:`bind`, :func:`binds`),
- numbered ``$N`` markers (:func:`bind_num`, :func:`bind_nums`),
- named ``:name:`` markers (:func:`bind_name`, :func:`bind_names`).

Every value is rendered with :func:`sqlbuilder.arguments.sql_arg` before it
is spliced in. None of these functions raise on malformed input; markers
that cannot be resolved degrade as documented on each function.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Final, Optional

from sqlbuilder.arguments import sql_arg

__all__ = (
    "bind",
    "bind_name",
    "bind_names",
    "bind_num",
    "bind_nums",
    "binds",
)

_DIGITS: Final = frozenset("0123456789")


def bind(text: str, value: Any) -> str:
    """Replace the first ``?`` with a value.

    Later markers are left alone so calls can be chained::

        bind(bind("price BETWEEN ? AND ?", 100), 200)

    Args:
        text: SQL text containing ``?`` markers.
        value: Value for the first marker.

    Returns:
        The text with one marker resolved.
    """
    return text.replace("?", sql_arg(value), 1)


def binds(text: str, values: Sequence[Any]) -> str:
    """Replace every ``?`` by cycling through ``values``.

    The i-th marker (0-indexed) receives ``values[i % len(values)]``.
    ``values`` must not be empty when ``text`` holds a marker.

    Args:
        text: SQL text containing ``?`` markers.
        values: Values to bind, reused from the start once exhausted.

    Returns:
        The text with all markers resolved.
    """
    rendered = [sql_arg(value) for value in values]
    result: list[str] = []
    seen = 0
    for ch in text:
        if ch == "?":
            result.append(rendered[seen % len(rendered)])
            seen += 1
        else:
            result.append(ch)
    return "".join(result)


def bind_num(text: str, num: int, value: Any) -> str:
    """Replace every literal ``$num`` with a value.

    Args:
        text: SQL text containing ``$N`` markers.
        num: Marker number.
        value: Value for the marker.

    Returns:
        The text with the matching markers resolved.
    """
    return text.replace(f"${num}", sql_arg(value))


def bind_nums(text: str, values: Sequence[Any]) -> str:
    """Replace ``$1``, ``$2``... with the matching item of ``values``.

    ``$$`` produces a literal ``$`` and markers may follow each other
    directly (``$1$2``). A marker whose number is past the end of ``values``
    is dropped from the output.

    Example:
        >>> bind_nums("$1f$02o$$o$3$4", [10, "AAA", True])
        "10f'AAA'o$oTRUE"

    Args:
        text: SQL text containing ``$N`` markers.
        values: Values, ``$1`` being the first one.

    Returns:
        The text with all markers resolved.
    """
    rendered = [sql_arg(value) for value in values]
    result: list[str] = []
    # None while copying text, otherwise the number read so far after a "$".
    number: Optional[int] = None

    def emit(num: int) -> None:
        if 0 < num <= len(rendered):
            result.append(rendered[num - 1])

    for ch in text:
        if number is None:
            if ch == "$":
                number = 0
            else:
                result.append(ch)
        elif ch in _DIGITS:
            number = number * 10 + int(ch)
        elif ch == "$":
            if number == 0:
                result.append("$")
                number = None
            else:
                emit(number)
                number = 0
        else:
            emit(number)
            result.append(ch)
            number = None

    if number:
        emit(number)
    return "".join(result)


def bind_name(text: str, name: str, value: Any) -> str:
    """Replace every literal ``:name:`` with a value.

    Args:
        text: SQL text containing ``:name:`` markers.
        name: Marker name.
        value: Value for the marker.

    Returns:
        The text with the matching markers resolved.
    """
    return text.replace(f":{name}:", sql_arg(value))


def bind_names(text: str, names: Mapping[str, Any]) -> str:
    """Replace every ``:name:`` marker with its value from ``names``.

    ``::`` produces a literal ``:``. Names missing from the mapping are
    rendered as ``NULL``. An unterminated marker at the end of the text is
    written out as ``;`` followed by the partial name.

    Args:
        text: SQL text containing ``:name:`` markers.
        names: Values by marker name.

    Returns:
        The text with all markers resolved.
    """
    result: list[str] = []
    key: list[str] = []
    in_key = False
    for ch in text:
        if ch == ":":
            if in_key:
                if key:
                    marker = "".join(key)
                    result.append(sql_arg(names[marker]) if marker in names else "NULL")
                    key.clear()
                else:
                    result.append(ch)
            in_key = not in_key
        elif in_key:
            key.append(ch)
        else:
            result.append(ch)

    if in_key:
        # TODO: drop the ";" once callers stop relying on it for unterminated markers.
        result.append(";")
        result.extend(key)
    return "".join(result)
