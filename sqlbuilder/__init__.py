"""sqlbuilder: SQL command text from composable, chained calls."""

from sqlbuilder import exceptions, utils
from sqlbuilder.__metadata__ import __version__
from sqlbuilder.arguments import SqlArg, register_sql_arg, sql_arg
from sqlbuilder.binding import bind, bind_name, bind_names, bind_num, bind_nums, binds
from sqlbuilder.builder import JoinOperator, SqlBuilder, Statement
from sqlbuilder.exceptions import (
    NoSetFieldsError,
    NoTableNameError,
    NoValuesError,
    NoWhereCondError,
    NoWhereFieldError,
    NoWhereListError,
    NoWhereQueryError,
    NoWhereValueError,
    SQLBuilderError,
)
from sqlbuilder.quoting import QuoteStyle, SqlName, baquote, brquote, dquote, esc, name, quote, quote_identifier
from sqlbuilder.where import Where, and_, brackets, not_, or_

__all__ = (
    "JoinOperator",
    "NoSetFieldsError",
    "NoTableNameError",
    "NoValuesError",
    "NoWhereCondError",
    "NoWhereFieldError",
    "NoWhereListError",
    "NoWhereQueryError",
    "NoWhereValueError",
    "QuoteStyle",
    "SQLBuilderError",
    "SqlArg",
    "SqlBuilder",
    "SqlName",
    "Statement",
    "Where",
    "__version__",
    "and_",
    "baquote",
    "bind",
    "bind_name",
    "bind_names",
    "bind_num",
    "bind_nums",
    "binds",
    "brackets",
    "brquote",
    "dquote",
    "esc",
    "exceptions",
    "name",
    "not_",
    "or_",
    "quote",
    "quote_identifier",
    "register_sql_arg",
    "sql_arg",
    "utils",
)
