"""Literal escaping and identifier quoting."""

import re
from enum import Enum, auto
from typing import Callable, Final, Optional

__all__ = (
    "QuoteStyle",
    "SqlName",
    "baquote",
    "brquote",
    "dquote",
    "esc",
    "name",
    "quote",
    "quote_identifier",
)

_SAFE_NAME_RE: Final = re.compile(r"[a-z0-9_]*")

_Quoter = Callable[[str], str]


def esc(src: str) -> str:
    """Escape single quotes by doubling them.

    Args:
        src: Raw text.

    Returns:
        Text safe to place between single quotes.
    """
    return str(src).replace("'", "''")


def quote(src: str) -> str:
    """Wrap text in single quotes after escaping it.

    Args:
        src: Raw text.

    Returns:
        A SQL string literal.
    """
    return f"'{esc(src)}'"


def baquote(src: str) -> str:
    """Wrap an identifier in backticks."""
    return "`{}`".format(str(src).replace("`", "\\`"))


def brquote(src: str) -> str:
    """Wrap an identifier in square brackets."""
    return "[{}]".format(str(src).replace("]", "]]"))


def dquote(src: str) -> str:
    """Wrap an identifier in double quotes."""
    return '"{}"'.format(str(src).replace('"', '\\"'))


class QuoteStyle(Enum):
    """Identifier quoting styles."""

    SAFE = auto()
    SINGLE = auto()
    BACKTICK = auto()
    BRACKET = auto()
    DOUBLE = auto()

    def __str__(self) -> str:
        """String representation.

        Returns:
            Lowercase name of the style.
        """
        return self.name.lower()


def _is_safe(part: str) -> bool:
    return _SAFE_NAME_RE.fullmatch(part) is not None


def _safe_name(part: str) -> str:
    return part if _is_safe(part) else baquote(part)


_QUOTERS: Final = {
    QuoteStyle.SAFE: _safe_name,
    QuoteStyle.SINGLE: quote,
    QuoteStyle.BACKTICK: baquote,
    QuoteStyle.BRACKET: brquote,
    QuoteStyle.DOUBLE: dquote,
}


def quote_identifier(src: str, style: QuoteStyle = QuoteStyle.SAFE) -> str:
    """Quote a single identifier part.

    ``QuoteStyle.SAFE`` leaves names made of ``[a-z0-9_]`` untouched and
    backtick-quotes anything else.

    Args:
        src: Identifier to quote.
        style: Quoting style to apply.

    Returns:
        The quoted identifier.
    """
    return _QUOTERS[style](str(src))


class SqlName:
    """Dotted identifier with an optional alias.

    Example:
        >>> SqlName("public", "BOOKS").alias("b").safe()
        '`public`.`BOOKS` AS b'
    """

    __slots__ = ("_alias", "parts")

    def __init__(self, *parts: str, alias: Optional[str] = None) -> None:
        self.parts: list[str] = [str(part) for part in parts]
        self._alias = alias

    def add(self, part: str) -> "SqlName":
        """Append another part of the identifier."""
        self.parts.append(str(part))
        return self

    def alias(self, alias: str) -> "SqlName":
        """Set the alias rendered after ``AS``."""
        self._alias = str(alias)
        return self

    def safe(self) -> str:
        """Render as-is when every part is safe, otherwise backtick-quote every part."""
        if all(_is_safe(part) for part in self.parts):
            return self._join_with_alias(".".join(self.parts))
        return self._join_with_alias(".".join(baquote(part) for part in self.parts))

    def quoted(self) -> str:
        return self._quote_each(quote)

    def baquoted(self) -> str:
        return self._quote_each(baquote)

    def brquoted(self) -> str:
        return self._quote_each(brquote)

    def dquoted(self) -> str:
        return self._quote_each(dquote)

    def render(self, style: QuoteStyle = QuoteStyle.SAFE) -> str:
        """Render the name with the given quoting style.

        Args:
            style: Quoting style for every part. The alias is always rendered safe.

        Returns:
            The rendered identifier.
        """
        if style is QuoteStyle.SAFE:
            return self.safe()
        return self._quote_each(_QUOTERS[style])

    def _quote_each(self, quoter: _Quoter) -> str:
        return self._join_with_alias(".".join(quoter(part) for part in self.parts))

    def _join_with_alias(self, rendered: str) -> str:
        if self._alias is None:
            return rendered
        return f"{rendered} AS {_safe_name(self._alias)}"

    def __str__(self) -> str:
        return self.safe()

    def __repr__(self) -> str:
        return f"SqlName(parts={self.parts!r}, alias={self._alias!r})"


def name(*parts: str, alias: Optional[str] = None, style: QuoteStyle = QuoteStyle.SAFE) -> str:
    """Render a dotted identifier in one call.

    Args:
        *parts: Identifier parts, e.g. schema and table.
        alias: Optional alias.
        style: Quoting style for the parts.

    Returns:
        The rendered identifier.
    """
    return SqlName(*parts, alias=alias).render(style)
