"""Tests for literal escaping, identifier quoting and names."""

import pytest

from sqlbuilder.quoting import QuoteStyle, SqlName, baquote, brquote, dquote, esc, name, quote, quote_identifier


def test_esc() -> None:
    """Test single quotes are doubled."""
    assert esc("Hello, 'World'") == "Hello, ''World''"


@pytest.mark.parametrize("text", ["", "plain", "Hello, 'World'", "''", "a'b'c"])
def test_quote_wraps_escaped_text(text: str) -> None:
    """Test quote is esc wrapped in single quotes."""
    assert quote(text) == "'" + esc(text) + "'"


def test_quote_example() -> None:
    assert quote("Hello, 'World'") == "'Hello, ''World'''"


def test_baquote() -> None:
    assert baquote("my table") == "`my table`"
    assert baquote("a`b") == "`a\\`b`"


def test_brquote() -> None:
    assert brquote("my table") == "[my table]"
    assert brquote("a]b") == "[a]]b]"


def test_dquote() -> None:
    assert dquote("my table") == '"my table"'
    assert dquote('a"b') == '"a\\"b"'


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        (QuoteStyle.SAFE, "`Books`"),
        (QuoteStyle.SINGLE, "'Books'"),
        (QuoteStyle.BACKTICK, "`Books`"),
        (QuoteStyle.BRACKET, "[Books]"),
        (QuoteStyle.DOUBLE, '"Books"'),
    ],
)
def test_quote_identifier(style: QuoteStyle, expected: str) -> None:
    """Test every quoting style on an identifier with uppercase letters."""
    assert quote_identifier("Books", style) == expected


def test_quote_identifier_safe_name_untouched() -> None:
    assert quote_identifier("safe_name_1") == "safe_name_1"


def test_quote_style_str() -> None:
    assert str(QuoteStyle.BACKTICK) == "backtick"


class TestSqlName:
    """Tests for dotted identifiers with aliases."""

    def test_simple_name(self) -> None:
        assert SqlName("safe_name").safe() == "safe_name"
        assert SqlName("safe_name").alias("sn").safe() == "safe_name AS sn"

    def test_spaced_name(self) -> None:
        assert SqlName("spaced name").safe() == "`spaced name`"
        assert SqlName("spaced name").alias("s n").safe() == "`spaced name` AS `s n`"

    def test_one_unsafe_part_quotes_all_parts(self) -> None:
        """Test a single unsafe part makes every part quoted."""
        assert SqlName("public", "BOOKS").alias("b").safe() == "`public`.`BOOKS` AS b"

    def test_add_parts(self) -> None:
        assert SqlName("b").add("title").safe() == "b.title"

    def test_quoted(self) -> None:
        name_ = SqlName("some 'awesome' name").alias("awesome name")
        assert name_.quoted() == "'some ''awesome'' name' AS `awesome name`"
        assert name_.add("sub").quoted() == "'some ''awesome'' name'.'sub' AS `awesome name`"

    def test_baquoted(self) -> None:
        assert SqlName("safe_name", "sub").alias("sn").baquoted() == "`safe_name`.`sub` AS sn"

    def test_brquoted(self) -> None:
        assert SqlName("safe_name", "sub").alias("sn").brquoted() == "[safe_name].[sub] AS sn"

    def test_dquoted(self) -> None:
        assert SqlName("safe_name", "sub").alias("sn").dquoted() == '"safe_name"."sub" AS sn'

    def test_str_is_safe_form(self) -> None:
        assert str(SqlName("shops", alias="s")) == "shops AS s"


def test_name_helper() -> None:
    """Test the one-call helper with each style."""
    assert name("b", "title") == "b.title"
    assert name("shops", alias="s") == "shops AS s"
    assert name("b", "id", style=QuoteStyle.BRACKET) == "[b].[id]"
    assert name("public", "BOOKS", alias="b", style=QuoteStyle.DOUBLE) == '"public"."BOOKS" AS b'
