import pytest

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


@pytest.mark.parametrize(
    ("error_class", "message"),
    [
        (NoTableNameError, "No table name"),
        (NoValuesError, "No values"),
        (NoSetFieldsError, "No set fields"),
        (NoWhereFieldError, "No where field"),
        (NoWhereCondError, "No where condition"),
    ],
)
def test_default_messages(error_class: type[SQLBuilderError], message: str) -> None:
    """Test exceptions fall back to their default message."""
    exc = error_class()
    assert str(exc) == message
    assert exc.detail == message
    assert isinstance(exc, SQLBuilderError)


def test_custom_message_overrides_default() -> None:
    """Test an explicit message replaces the default one."""
    assert str(NoTableNameError("table missing")) == "table missing"


@pytest.mark.parametrize("error_class", [NoWhereValueError, NoWhereListError, NoWhereQueryError])
def test_field_errors_keep_field(error_class: type[NoWhereValueError]) -> None:
    """Test field-carrying errors expose the field and mention it."""
    exc = error_class("price")
    assert exc.field == "price"
    assert str(exc).endswith("for field price")


def test_repr_includes_detail() -> None:
    """Test repr shows the class name and detail."""
    assert repr(NoValuesError()) == "NoValuesError - No values"


def test_exception_chaining() -> None:
    """Test exceptions support chaining with 'from'."""
    with pytest.raises(NoTableNameError) as exc_info:
        try:
            raise ValueError("Original error")
        except ValueError as e:
            raise NoTableNameError from e
    assert isinstance(exc_info.value.__cause__, ValueError)
