"""Boolean condition building for WHERE clauses."""

import logging
from typing import Any, Optional

from sqlbuilder.exceptions import NoWhereFieldError, NoWhereValueError, SQLBuilderError
from sqlbuilder.utils.logging import get_logger, log_with_context

__all__ = (
    "Where",
    "and_",
    "brackets",
    "not_",
    "or_",
)

logger = get_logger("where")


class Where:
    """Chainable builder for a single boolean expression.

    Invalid calls never interrupt the chain: the error is recorded, the
    expression is left as it was and later calls keep working. Only the
    most recent error is kept, and it is raised by :meth:`build`.
    ``str()`` returns the expression and ignores any recorded error.

    Example:
        >>> str(Where("price").eq(100).and_(Where("title").eq("'x'")))
        "(price = 100) AND (title = 'x')"

    Args:
        seed: Field or expression the condition starts with.
        prefix: Text placed between the field and the operator added by
            the next :meth:`eq` or :meth:`ne` call, e.g. a collation.
    """

    __slots__ = ("error", "prefix", "text", "was_and")

    def __init__(self, seed: Any, prefix: Optional[str] = None) -> None:
        self.text = str(seed)
        self.prefix = prefix
        self.error: Optional[SQLBuilderError] = None
        self.was_and = False
        if not self.text:
            self._fail(NoWhereFieldError())

    def _fail(self, error: SQLBuilderError) -> "Where":
        log_with_context(logger, logging.DEBUG, "Recorded WHERE error", condition=self.text, error=error.detail)
        self.error = error
        return self

    def _compare(self, operator: str, value: Any) -> "Where":
        rendered = str(value)
        if not rendered:
            return self._fail(NoWhereValueError(self.text))
        if self.prefix:
            self.text = f"{self.text} {self.prefix}"
            self.prefix = None
        self.text = f"{self.text} {operator} {rendered}"
        return self

    def eq(self, value: Any) -> "Where":
        """Append ``= value``."""
        return self._compare("=", value)

    def ne(self, value: Any) -> "Where":
        """Append ``<> value``."""
        return self._compare("<>", value)

    def and_(self, other: Any) -> "Where":
        """Conjoin another condition.

        The current expression is bracketed the first time, so chained
        calls read ``(a) AND (b) AND (c)``.
        """
        if not self.text:
            return self._fail(NoWhereFieldError())
        rendered = str(other)
        if not rendered:
            return self._fail(NoWhereValueError(self.text))
        if not self.was_and:
            self.text = f"({self.text})"
            self.was_and = True
        self.text = f"{self.text} AND ({rendered})"
        return self

    def or_(self, other: Any) -> "Where":
        """Disjoin another condition without bracketing."""
        if not self.text:
            return self._fail(NoWhereFieldError())
        rendered = str(other)
        if not rendered:
            return self._fail(NoWhereValueError(self.text))
        self.text = f"{self.text} OR {rendered}"
        return self

    def not_(self) -> "Where":
        """Negate the expression in place."""
        self.text = f"NOT {self.text}"
        return self

    def in_brackets(self) -> "Where":
        """Wrap the expression in parentheses."""
        self.text = f"({self.text})"
        return self

    def build(self) -> str:
        """Return the expression.

        Raises:
            SQLBuilderError: The most recent error recorded by the chain.

        Returns:
            The condition text.
        """
        if self.error is not None:
            raise self.error
        return self.text

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Where(text={self.text!r}, error={self.error!r})"


def and_(first: Any, *others: Any) -> str:
    """Join expressions as ``(a) AND (b) AND ...``."""
    return " AND ".join(f"({expr})" for expr in (first, *others))


def or_(first: Any, *others: Any) -> str:
    """Join expressions as ``a OR b OR ...``."""
    return " OR ".join(str(expr) for expr in (first, *others))


def not_(expr: Any) -> str:
    return f"NOT {expr}"


def brackets(expr: Any) -> str:
    return f"({expr})"
