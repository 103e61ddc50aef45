from typing import Any, Optional

__all__ = (
    "NoSetFieldsError",
    "NoTableNameError",
    "NoValuesError",
    "NoWhereCondError",
    "NoWhereFieldError",
    "NoWhereListError",
    "NoWhereQueryError",
    "NoWhereValueError",
    "SQLBuilderError",
)


class SQLBuilderError(Exception):
    """Base exception class from which all sqlbuilder exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLBuilderError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class NoTableNameError(SQLBuilderError):
    """The statement needs a table and none was given."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "No table name"
        super().__init__(message)


class NoValuesError(SQLBuilderError):
    """INSERT has no values, or a bare SELECT has no fields."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "No values"
        super().__init__(message)


class NoSetFieldsError(SQLBuilderError):
    """UPDATE has no SET assignments."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "No set fields"
        super().__init__(message)


class NoWhereFieldError(SQLBuilderError):
    """A condition was started or extended without a field."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "No where field"
        super().__init__(message)


class NoWhereValueError(SQLBuilderError):
    """A condition on ``field`` was given an empty value."""

    field: str

    def __init__(self, field: str = "") -> None:
        super().__init__(f"No where value for field {field}".strip())
        self.field = field


class NoWhereCondError(SQLBuilderError):
    """Reserved: a WHERE clause without any condition."""

    def __init__(self, message: Optional[str] = None) -> None:
        if message is None:
            message = "No where condition"
        super().__init__(message)


class NoWhereListError(SQLBuilderError):
    """Reserved: an IN list for ``field`` is empty."""

    field: str

    def __init__(self, field: str = "") -> None:
        super().__init__(f"No where list for field {field}".strip())
        self.field = field


class NoWhereQueryError(SQLBuilderError):
    """Reserved: an IN subquery for ``field`` is empty."""

    field: str

    def __init__(self, field: str = "") -> None:
        super().__init__(f"No where query for field {field}".strip())
        self.field = field
