# ruff: noqa: PLR0904
"""Fluent SQL statement builder.

Fragments are collected by chained mutator calls and joined into one
statement, in a fixed order per statement kind, by :meth:`SqlBuilder.sql`.
Mutators never fail; validation happens when the statement is rendered.
"""

import copy
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, NoReturn, Optional, Union

from mypy_extensions import mypyc_attr
from typing_extensions import Self

from sqlbuilder.exceptions import NoSetFieldsError, NoTableNameError, NoValuesError, SQLBuilderError
from sqlbuilder.quoting import quote
from sqlbuilder.utils.logging import get_logger, log_with_context

__all__ = (
    "JoinOperator",
    "SqlBuilder",
    "Statement",
    "ValueList",
    "ValueSelect",
)

logger = get_logger("builder")


class Statement(Enum):
    """Kind of statement a builder renders."""

    SELECT_FROM = auto()
    SELECT_VALUES = auto()
    UPDATE_TABLE = auto()
    INSERT_INTO = auto()
    DELETE_FROM = auto()

    def __str__(self) -> str:
        return self.name.lower()


class JoinOperator(Enum):
    """Keyword placed before ``JOIN``."""

    JOIN = ""
    LEFT = "LEFT "
    LEFT_OUTER = "LEFT OUTER "
    RIGHT = "RIGHT "
    RIGHT_OUTER = "RIGHT OUTER "
    INNER = "INNER "
    CROSS = "CROSS "


@dataclass
class ValueList:
    """Parenthesized value groups of an INSERT."""

    groups: list[str] = field(default_factory=list)


@dataclass
class ValueSelect:
    """Subquery feeding an INSERT."""

    query: str


Values = Optional[Union[ValueList, ValueSelect]]


def _make_wheres(wheres: list[str]) -> str:
    if not wheres:
        return ""
    if len(wheres) == 1:
        return f" WHERE {wheres[0]}"
    return " WHERE " + " AND ".join(f"({cond})" for cond in wheres)


def _items(values: Union[Iterable[Any], str]) -> list[Any]:
    if isinstance(values, str) or not isinstance(values, Iterable):
        return [values]
    return list(values)


def _join_values(values: Iterable[Any]) -> str:
    return ", ".join(str(value) for value in _items(values))


def _join_quoted(values: Iterable[Any]) -> str:
    return ", ".join(quote(str(value)) for value in _items(values))


@mypyc_attr(allow_interpreted_subclasses=True)
@dataclass
class SqlBuilder:
    """Builder for one SQL statement.

    Create it with one of the constructors (:meth:`select_from`,
    :meth:`select_values`, :meth:`insert_into`, :meth:`update_table`,
    :meth:`delete_from`), chain mutators, then call :meth:`sql`.

    Example:
        >>> SqlBuilder.select_from("company").field("id").field("name").and_where("salary > 25000").sql()
        'SELECT id, name FROM company WHERE salary > 25000;'

    The builder is a plain value: :meth:`clone` returns an independent copy,
    which is how a shared set of filters is branched into, say, a COUNT
    query and a paginated result query.
    """

    statement: Statement = Statement.SELECT_FROM
    table: str = ""
    _joins: list[str] = field(default_factory=list, init=False)
    _join_natural: bool = field(default=False, init=False)
    _join_operator: JoinOperator = field(default=JoinOperator.JOIN, init=False)
    _distinct: bool = field(default=False, init=False)
    _fields: list[str] = field(default_factory=list, init=False)
    _sets: list[str] = field(default_factory=list, init=False)
    _values: Values = field(default=None, init=False)
    _returning: Optional[str] = field(default=None, init=False)
    _group_by: list[str] = field(default_factory=list, init=False)
    _having: Optional[str] = field(default=None, init=False)
    _unions: str = field(default="", init=False)
    _wheres: list[str] = field(default_factory=list, init=False)
    _order_by: list[str] = field(default_factory=list, init=False)
    _limit: Optional[str] = field(default=None, init=False)
    _offset: Optional[str] = field(default=None, init=False)

    # Constructors

    @classmethod
    def select_from(cls, table: Any) -> Self:
        """Create a SELECT query. ``table`` may be a comma separated list.

        Args:
            table: Table, list of tables or subquery to select from.

        Returns:
            A new builder.
        """
        return cls(Statement.SELECT_FROM, str(table))

    @classmethod
    def select_values(cls, values: Iterable[Any]) -> Self:
        """Create a SELECT of bare values, without a table.

        Example:
            >>> SqlBuilder.select_values(["10", "'abc'"]).sql()
            "SELECT 10, 'abc';"

        Args:
            values: Expressions to select. A bare string is one expression.

        Returns:
            A new builder.
        """
        return cls(Statement.SELECT_VALUES).fields(values)

    @classmethod
    def insert_into(cls, table: Any) -> Self:
        """Create an INSERT query."""
        return cls(Statement.INSERT_INTO, str(table))

    @classmethod
    def update_table(cls, table: Any) -> Self:
        """Create an UPDATE query."""
        return cls(Statement.UPDATE_TABLE, str(table))

    @classmethod
    def delete_from(cls, table: Any) -> Self:
        """Create a DELETE query."""
        return cls(Statement.DELETE_FROM, str(table))

    def clone(self) -> Self:
        """Return an independent deep copy of the builder."""
        return copy.deepcopy(self)

    # Tables and joins

    def and_table(self, table: Any) -> Self:
        """Add another table to the comma separated FROM list.

        Without a first table nothing is added, and rendering raises
        :class:`~sqlbuilder.exceptions.NoTableNameError`.
        """
        if self.table:
            self.table = f"{self.table}, {table}"
        return self

    def natural(self) -> Self:
        """Make the next join NATURAL."""
        self._join_natural = True
        return self

    def left(self) -> Self:
        self._join_operator = JoinOperator.LEFT
        return self

    def left_outer(self) -> Self:
        self._join_operator = JoinOperator.LEFT_OUTER
        return self

    def right(self) -> Self:
        self._join_operator = JoinOperator.RIGHT
        return self

    def right_outer(self) -> Self:
        self._join_operator = JoinOperator.RIGHT_OUTER
        return self

    def inner(self) -> Self:
        self._join_operator = JoinOperator.INNER
        return self

    def cross(self) -> Self:
        self._join_operator = JoinOperator.CROSS
        return self

    def join(self, table: Any) -> Self:
        """Join a table using the operator chosen by the previous operator call.

        Example:
            >>> (
            ...     SqlBuilder.select_from("books AS b")
            ...     .field("b.title")
            ...     .field("s.total")
            ...     .left()
            ...     .join("shops AS s")
            ...     .on("b.id = s.book")
            ...     .sql()
            ... )
            'SELECT b.title, s.total FROM books AS b LEFT JOIN shops AS s ON b.id = s.book;'

        The NATURAL flag applies to this join only. The operator keyword
        stays in effect for later joins.

        Args:
            table: Table or subquery to join.

        Returns:
            The builder.
        """
        natural = "NATURAL " if self._join_natural else ""
        self._joins.append(f"{natural}{self._join_operator.value}JOIN {table}")
        self._join_natural = False
        return self

    def on(self, constraint: Any) -> Self:
        """Attach an ON constraint to the most recent join."""
        if self._joins:
            self._joins[-1] = f"{self._joins[-1]} ON {constraint}"
        return self

    def on_eq(self, left: Any, right: Any) -> Self:
        """Attach ``ON left = right`` to the most recent join."""
        return self.on(f"{left} = {right}")

    # Fields

    def distinct(self) -> Self:
        self._distinct = True
        return self

    def fields(self, fields: Iterable[Any]) -> Self:
        """Add fields. A bare string is one field."""
        self._fields.extend(str(f) for f in _items(fields))
        return self

    def set_fields(self, fields: Iterable[Any]) -> Self:
        """Replace fields. A bare string is one field."""
        self._fields = [str(f) for f in _items(fields)]
        return self

    def field(self, field: Any) -> Self:
        """Add a field."""
        self._fields.append(str(field))
        return self

    def set_field(self, field: Any) -> Self:
        """Replace all fields with one."""
        self._fields = [str(field)]
        return self

    def count(self, field: Any) -> Self:
        """Add a ``COUNT(field)`` field."""
        return self.field(f"COUNT({field})")

    def count_as(self, field: Any, name: Any) -> Self:
        """Add a ``COUNT(field) AS name`` field."""
        return self.field(f"COUNT({field}) AS {name}")

    # UPDATE and INSERT parts

    def set(self, field: Any, value: Any) -> Self:
        """Add a ``field = value`` assignment to an UPDATE."""
        self._sets.append(f"{field} = {value}")
        return self

    def set_str(self, field: Any, value: Any) -> Self:
        """Add a ``field = 'value'`` assignment with the value quoted."""
        return self.set(field, quote(str(value)))

    def values(self, values: Iterable[Any]) -> Self:
        """Add one group of VALUES to an INSERT.

        A group added after :meth:`select` replaces the subquery.

        Example:
            >>> (
            ...     SqlBuilder.insert_into("books")
            ...     .field("title")
            ...     .field("price")
            ...     .values([quote("In Search of Lost Time"), 150])
            ...     .values(["'Don Quixote', 200"])
            ...     .sql()
            ... )
            "INSERT INTO books (title, price) VALUES ('In Search of Lost Time', 150), ('Don Quixote', 200);"

        Args:
            values: Rendered values of one row. A bare string is one value.

        Returns:
            The builder.
        """
        group = f"({_join_values(values)})"
        if isinstance(self._values, ValueList):
            self._values.groups.append(group)
        else:
            self._values = ValueList([group])
        return self

    def select(self, query: Any) -> Self:
        """Feed an INSERT from a SELECT subquery, replacing any value groups."""
        self._values = ValueSelect(str(query))
        return self

    def returning(self, field: Any) -> Self:
        """Add a RETURNING field to an INSERT or UPDATE."""
        self._returning = str(field)
        return self

    def returning_id(self) -> Self:
        return self.returning("id")

    # Grouping

    def group_by(self, field: Any) -> Self:
        self._group_by.append(str(field))
        return self

    def having(self, cond: Any) -> Self:
        """Set the HAVING condition. Only rendered together with GROUP BY."""
        self._having = str(cond)
        return self

    # WHERE

    def and_where(self, cond: Any) -> Self:
        """Add a WHERE condition.

        Several conditions are each bracketed and joined with AND.

        Example:
            >>> (
            ...     SqlBuilder.select_from("books")
            ...     .field("title")
            ...     .and_where("price > 100")
            ...     .and_where("title LIKE 'Harry Potter%'")
            ...     .sql()
            ... )
            "SELECT title FROM books WHERE (price > 100) AND (title LIKE 'Harry Potter%');"

        Args:
            cond: Condition text or :class:`~sqlbuilder.where.Where`.

        Returns:
            The builder.
        """
        self._wheres.append(str(cond))
        return self

    def or_where(self, cond: Any) -> Self:
        """Extend the last WHERE condition with ``OR cond``.

        Starts a new condition when there is none yet. Because every
        condition is bracketed once there are several, the OR stays scoped
        to the condition it extends.

        Args:
            cond: Condition text or :class:`~sqlbuilder.where.Where`.

        Returns:
            The builder.
        """
        if self._wheres:
            self._wheres[-1] = f"{self._wheres[-1]} OR {cond}"
        else:
            self._wheres.append(str(cond))
        return self

    def and_where_eq(self, field: Any, value: Any) -> Self:
        return self.and_where(f"{field} = {value}")

    def or_where_eq(self, field: Any, value: Any) -> Self:
        return self.or_where(f"{field} = {value}")

    def and_where_ne(self, field: Any, value: Any) -> Self:
        return self.and_where(f"{field} <> {value}")

    def or_where_ne(self, field: Any, value: Any) -> Self:
        return self.or_where(f"{field} <> {value}")

    def and_where_gt(self, field: Any, value: Any) -> Self:
        return self.and_where(f"{field} > {value}")

    def or_where_gt(self, field: Any, value: Any) -> Self:
        return self.or_where(f"{field} > {value}")

    def and_where_ge(self, field: Any, value: Any) -> Self:
        return self.and_where(f"{field} >= {value}")

    def or_where_ge(self, field: Any, value: Any) -> Self:
        return self.or_where(f"{field} >= {value}")

    def and_where_lt(self, field: Any, value: Any) -> Self:
        return self.and_where(f"{field} < {value}")

    def or_where_lt(self, field: Any, value: Any) -> Self:
        return self.or_where(f"{field} < {value}")

    def and_where_le(self, field: Any, value: Any) -> Self:
        return self.and_where(f"{field} <= {value}")

    def or_where_le(self, field: Any, value: Any) -> Self:
        return self.or_where(f"{field} <= {value}")

    def and_where_like(self, field: Any, mask: Any) -> Self:
        """Add ``field LIKE 'mask'``. The mask is quoted as given."""
        return self.and_where(f"{field} LIKE {quote(str(mask))}")

    def or_where_like(self, field: Any, mask: Any) -> Self:
        return self.or_where(f"{field} LIKE {quote(str(mask))}")

    def and_where_like_right(self, field: Any, mask: Any) -> Self:
        """Add ``field LIKE 'mask%'``."""
        return self.and_where(f"{field} LIKE {quote(f'{mask}%')}")

    def or_where_like_right(self, field: Any, mask: Any) -> Self:
        return self.or_where(f"{field} LIKE {quote(f'{mask}%')}")

    def and_where_like_left(self, field: Any, mask: Any) -> Self:
        """Add ``field LIKE '%mask'``."""
        return self.and_where(f"{field} LIKE {quote(f'%{mask}')}")

    def or_where_like_left(self, field: Any, mask: Any) -> Self:
        return self.or_where(f"{field} LIKE {quote(f'%{mask}')}")

    def and_where_like_any(self, field: Any, mask: Any) -> Self:
        """Add ``field LIKE '%mask%'``."""
        return self.and_where(f"{field} LIKE {quote(f'%{mask}%')}")

    def or_where_like_any(self, field: Any, mask: Any) -> Self:
        return self.or_where(f"{field} LIKE {quote(f'%{mask}%')}")

    def and_where_not_like(self, field: Any, mask: Any) -> Self:
        return self.and_where(f"{field} NOT LIKE {quote(str(mask))}")

    def or_where_not_like(self, field: Any, mask: Any) -> Self:
        return self.or_where(f"{field} NOT LIKE {quote(str(mask))}")

    def and_where_not_like_right(self, field: Any, mask: Any) -> Self:
        return self.and_where(f"{field} NOT LIKE {quote(f'{mask}%')}")

    def or_where_not_like_right(self, field: Any, mask: Any) -> Self:
        return self.or_where(f"{field} NOT LIKE {quote(f'{mask}%')}")

    def and_where_not_like_left(self, field: Any, mask: Any) -> Self:
        return self.and_where(f"{field} NOT LIKE {quote(f'%{mask}')}")

    def or_where_not_like_left(self, field: Any, mask: Any) -> Self:
        return self.or_where(f"{field} NOT LIKE {quote(f'%{mask}')}")

    def and_where_not_like_any(self, field: Any, mask: Any) -> Self:
        return self.and_where(f"{field} NOT LIKE {quote(f'%{mask}%')}")

    def or_where_not_like_any(self, field: Any, mask: Any) -> Self:
        return self.or_where(f"{field} NOT LIKE {quote(f'%{mask}%')}")

    def and_where_is_null(self, field: Any) -> Self:
        return self.and_where(f"{field} IS NULL")

    def or_where_is_null(self, field: Any) -> Self:
        return self.or_where(f"{field} IS NULL")

    def and_where_is_not_null(self, field: Any) -> Self:
        return self.and_where(f"{field} IS NOT NULL")

    def or_where_is_not_null(self, field: Any) -> Self:
        return self.or_where(f"{field} IS NOT NULL")

    def and_where_in(self, field: Any, values: Iterable[Any]) -> Self:
        """Add ``field IN (v1, v2, ...)`` with the values written as given."""
        return self.and_where(f"{field} IN ({_join_values(values)})")

    def or_where_in(self, field: Any, values: Iterable[Any]) -> Self:
        return self.or_where(f"{field} IN ({_join_values(values)})")

    def and_where_in_quoted(self, field: Any, values: Iterable[Any]) -> Self:
        """Add ``field IN ('v1', 'v2', ...)`` with every value quoted."""
        return self.and_where(f"{field} IN ({_join_quoted(values)})")

    def or_where_in_quoted(self, field: Any, values: Iterable[Any]) -> Self:
        return self.or_where(f"{field} IN ({_join_quoted(values)})")

    def and_where_in_query(self, field: Any, query: Any) -> Self:
        """Add ``field IN (query)``."""
        return self.and_where(f"{field} IN ({query})")

    def or_where_in_query(self, field: Any, query: Any) -> Self:
        return self.or_where(f"{field} IN ({query})")

    def and_where_not_in(self, field: Any, values: Iterable[Any]) -> Self:
        return self.and_where(f"{field} NOT IN ({_join_values(values)})")

    def or_where_not_in(self, field: Any, values: Iterable[Any]) -> Self:
        return self.or_where(f"{field} NOT IN ({_join_values(values)})")

    def and_where_not_in_quoted(self, field: Any, values: Iterable[Any]) -> Self:
        return self.and_where(f"{field} NOT IN ({_join_quoted(values)})")

    def or_where_not_in_quoted(self, field: Any, values: Iterable[Any]) -> Self:
        return self.or_where(f"{field} NOT IN ({_join_quoted(values)})")

    def and_where_not_in_query(self, field: Any, query: Any) -> Self:
        return self.and_where(f"{field} NOT IN ({query})")

    def or_where_not_in_query(self, field: Any, query: Any) -> Self:
        return self.or_where(f"{field} NOT IN ({query})")

    def and_where_between(self, field: Any, min_value: Any, max_value: Any) -> Self:
        """Add ``field BETWEEN min AND max``."""
        return self.and_where(f"{field} BETWEEN {min_value} AND {max_value}")

    def or_where_between(self, field: Any, min_value: Any, max_value: Any) -> Self:
        return self.or_where(f"{field} BETWEEN {min_value} AND {max_value}")

    def and_where_not_between(self, field: Any, min_value: Any, max_value: Any) -> Self:
        return self.and_where(f"{field} NOT BETWEEN {min_value} AND {max_value}")

    def or_where_not_between(self, field: Any, min_value: Any, max_value: Any) -> Self:
        return self.or_where(f"{field} NOT BETWEEN {min_value} AND {max_value}")

    # UNION, ORDER BY, LIMIT

    def union(self, query: Any) -> Self:
        """Append ``UNION query``.

        ORDER BY is not rendered once a union is present; order inside the
        last unioned query instead.
        """
        self._unions = f"{self._unions} UNION {query}"
        return self

    def union_all(self, query: Any) -> Self:
        """Append ``UNION ALL query``."""
        self._unions = f"{self._unions} UNION ALL {query}"
        return self

    def order_by(self, field: Any, desc: bool = False) -> Self:
        self._order_by.append(f"{field} DESC" if desc else str(field))
        return self

    def order_asc(self, field: Any) -> Self:
        return self.order_by(field, False)

    def order_desc(self, field: Any) -> Self:
        return self.order_by(field, True)

    def limit(self, limit: Any) -> Self:
        self._limit = str(limit)
        return self

    def offset(self, offset: Any) -> Self:
        self._offset = str(offset)
        return self

    # Rendering

    def sql(self) -> str:
        """Build the complete SQL command, terminated by ``;``.

        Raises:
            NoTableNameError: The statement needs a table and has none.
            NoValuesError: An INSERT has no values, or a bare SELECT has no fields.
            NoSetFieldsError: An UPDATE has no assignments.

        Returns:
            The SQL command.
        """
        if self.statement is Statement.SELECT_FROM:
            text = f"{self.query()};"
        elif self.statement is Statement.SELECT_VALUES:
            text = f"{self.query_values()};"
        elif self.statement is Statement.INSERT_INTO:
            text = self._sql_insert()
        elif self.statement is Statement.UPDATE_TABLE:
            text = self._sql_update()
        else:
            text = self._sql_delete()
        log_with_context(logger, logging.DEBUG, "Rendered SQL statement", statement=str(self.statement), sql=text)
        return text

    def query(self) -> str:
        """Build the SELECT body without the trailing ``;``.

        Useful as input to :meth:`select`, :meth:`union` or an IN subquery.

        Raises:
            NoTableNameError: No table was given.
            NoValuesError: A :meth:`select_values` builder has no fields.

        Returns:
            The SELECT text.
        """
        if self.statement is Statement.SELECT_VALUES:
            return self.query_values()
        self._require_table()
        distinct = " DISTINCT" if self._distinct else ""
        fields = ", ".join(self._fields) if self._fields else "*"
        joins = f" {' '.join(self._joins)}" if self._joins else ""
        wheres = _make_wheres(self._wheres)
        group_by = ""
        if self._group_by:
            having = f" HAVING {self._having}" if self._having is not None else ""
            group_by = f" GROUP BY {', '.join(self._group_by)}{having}"
        order_by = ""
        if self._order_by and not self._unions:
            order_by = f" ORDER BY {', '.join(self._order_by)}"
        limit = f" LIMIT {self._limit}" if self._limit is not None else ""
        offset = f" OFFSET {self._offset}" if self._offset is not None else ""
        return (
            f"SELECT{distinct} {fields} FROM {self.table}"
            f"{joins}{wheres}{group_by}{self._unions}{order_by}{limit}{offset}"
        )

    def query_values(self) -> str:
        """Build ``SELECT fields`` without a table and without ``;``.

        Raises:
            NoValuesError: No fields were given.

        Returns:
            The SELECT text.
        """
        if not self._fields:
            self._reject(NoValuesError())
        return f"SELECT {', '.join(self._fields)}"

    def subquery(self) -> str:
        """Build the SELECT body in parentheses."""
        return f"({self.query()})"

    def subquery_as(self, name: Any) -> str:
        """Build the SELECT body in parentheses with an alias."""
        return f"({self.query()}) AS {name}"

    def _reject(self, error: SQLBuilderError) -> NoReturn:
        log_with_context(
            logger,
            logging.DEBUG,
            "Rejected SQL statement",
            statement=str(self.statement),
            table=self.table,
            error=error.detail,
        )
        raise error

    def _require_table(self) -> None:
        if not self.table:
            self._reject(NoTableNameError())

    def _returning_clause(self) -> str:
        return f" RETURNING {self._returning}" if self._returning is not None else ""

    def _sql_insert(self) -> str:
        self._require_table()
        fields = ", ".join(self._fields)
        if isinstance(self._values, ValueSelect):
            source = self._values.query
        elif isinstance(self._values, ValueList) and self._values.groups:
            source = f"VALUES {', '.join(self._values.groups)}"
        else:
            self._reject(NoValuesError())
        return f"INSERT INTO {self.table} ({fields}) {source}{self._returning_clause()};"

    def _sql_update(self) -> str:
        self._require_table()
        if not self._sets:
            self._reject(NoSetFieldsError())
        return (
            f"UPDATE {self.table} SET {', '.join(self._sets)}"
            f"{_make_wheres(self._wheres)}{self._returning_clause()};"
        )

    def _sql_delete(self) -> str:
        self._require_table()
        return f"DELETE FROM {self.table}{_make_wheres(self._wheres)};"
