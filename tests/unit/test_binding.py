"""Tests for placeholder substitution."""

import pytest

from sqlbuilder import SqlBuilder
from sqlbuilder.binding import bind, bind_name, bind_names, bind_num, bind_nums, binds


class TestBind:
    """Tests for single-shot ``?`` binding."""

    def test_replaces_first_marker_only(self) -> None:
        assert bind("?foo?", "lol") == "'lol'foo?"

    def test_chained(self) -> None:
        assert bind(bind("?foo?", "lol"), 10) == "'lol'foo10"

    def test_value_containing_marker_is_not_rebound(self) -> None:
        """Test markers inside the bound value are quoted, not replaced."""
        assert bind("fo?o", "f?o?o") == "fo'f?o?o'o"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(10, "fo10o"), (True, "foTRUEo"), (False, "foFALSEo"), (None, "foNULLo")],
    )
    def test_types(self, value: object, expected: str) -> None:
        assert bind("fo?o", value) == expected

    def test_no_marker(self) -> None:
        assert bind("foo", 1) == "foo"


class TestBinds:
    """Tests for cyclic ``?`` binding."""

    def test_cycles_through_values(self) -> None:
        assert binds("?f?o?o?", [10, 20, 30]) == "10f20o30o10"

    def test_strings(self) -> None:
        assert binds("?f?o?o?", ["abc", "def", "ghi"]) == "'abc'f'def'o'ghi'o'abc'"

    def test_mixed_types(self) -> None:
        assert binds("?f?o?o?", [10, "AAA", True]) == "10f'AAA'oTRUEo10"

    @pytest.mark.parametrize("count", [1, 2, 3, 7])
    def test_ith_marker_gets_value_modulo_length(self, count: int) -> None:
        """Test the i-th marker receives values[i % n]."""
        values = list(range(count))
        text = "?," * 10
        expected = "".join(f"{i % count}," for i in range(10))
        assert binds(text, values) == expected

    def test_empty_values_is_a_caller_error(self) -> None:
        """Test an empty value list is not silently accepted."""
        with pytest.raises(ZeroDivisionError):
            binds("?", [])

    def test_empty_values_without_markers(self) -> None:
        assert binds("SELECT 1", []) == "SELECT 1"

    def test_in_where(self) -> None:
        sql = (
            SqlBuilder.select_from("books")
            .fields(["title", "price"])
            .and_where(binds("price > ? AND title LIKE ?", [100, "Harry Potter%"]))
            .sql()
        )
        assert sql == "SELECT title, price FROM books WHERE price > 100 AND title LIKE 'Harry Potter%';"


class TestBindNum:
    """Tests for numbered ``$N`` binding."""

    def test_bind_num(self) -> None:
        assert bind_num("$1f$2o$1", 1, "x") == "'x'f$2o'x'"

    def test_bind_num_chain_order_independent(self) -> None:
        text = "$1 BETWEEN $2 AND $3"
        one = bind_num(bind_num(bind_num(text, 3, 30), 1, "price"), 2, 10)
        two = bind_num(bind_num(bind_num(text, 1, "price"), 2, 10), 3, 30)
        assert one == two == "'price' BETWEEN 10 AND 30"

    def test_bind_num_leaves_other_numbers(self) -> None:
        assert bind_num("$2", 1, 5) == "$2"

    def test_bind_nums_reference(self) -> None:
        assert bind_nums("$1f$02o$$o$3$4", [10, "AAA", True]) == "10f'AAA'o$oTRUE"

    def test_bind_nums_back_to_back(self) -> None:
        assert bind_nums("$1$2", [1, 2]) == "12"

    def test_bind_nums_repeated(self) -> None:
        assert bind_nums("$2 > $1 OR $2 < 0", [5, "x"]) == "'x' > 5 OR 'x' < 0"

    def test_bind_nums_out_of_range_dropped(self) -> None:
        """Test markers past the end of the values emit nothing."""
        assert bind_nums("a$9b", [1]) == "ab"
        assert bind_nums("a$9", [1]) == "a"

    def test_bind_nums_multi_digit(self) -> None:
        values = list(range(1, 13))
        assert bind_nums("$12,$10", values) == "12,10"

    def test_bind_nums_escaped_dollar(self) -> None:
        assert bind_nums("cost $$", []) == "cost $"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("cost $", "cost "),
            ("$a", "a"),
            ("$1$$", "1$"),
        ],
    )
    def test_bind_nums_dangling_dollar(self, text: str, expected: str) -> None:
        """Test a ``$`` without digits emits nothing and ``$$`` still escapes after a number."""
        assert bind_nums(text, [1]) == expected

    def test_bind_nums_zero_is_dropped(self) -> None:
        """Test ``$0`` refers to no value."""
        assert bind_nums("a$0b", [1]) == "ab"

    def test_bind_nums_in_builder(self) -> None:
        sql = (
            SqlBuilder.select_from("books")
            .fields(["title", "price"])
            .and_where(bind_nums("price BETWEEN $1 AND $2 OR price = $1", [100, 200]))
            .sql()
        )
        assert sql == "SELECT title, price FROM books WHERE price BETWEEN 100 AND 200 OR price = 100;"


class TestBindName:
    """Tests for named ``:name:`` binding."""

    def test_bind_name(self) -> None:
        assert bind_name(":a:f:b:o:a:", "a", 1) == "1f:b:o1"

    def test_bind_names(self) -> None:
        assert bind_names(":one:f:two:o:three:", {"one": 10, "two": "AAA", "three": True}) == "10f'AAA'oTRUE"

    def test_bind_names_missing_key_is_null(self) -> None:
        assert bind_names("a = :x:", {}) == "a = NULL"

    def test_bind_names_escaped_colon(self) -> None:
        assert bind_names("CAST(a AS int)::text = :v:", {"v": "1"}) == "CAST(a AS int):text = '1'"

    def test_bind_names_unterminated_key(self) -> None:
        """Test an unterminated marker is written as ';' plus the partial name."""
        assert bind_names("a = :abc", {"abc": 1}) == "a = ;abc"

    def test_bind_names_in_builder(self) -> None:
        sql = (
            SqlBuilder.select_from("books")
            .fields(["title", "price"])
            .and_where(bind_names("price BETWEEN :min: AND :max:", {"min": 100, "max": 200}))
            .sql()
        )
        assert sql == "SELECT title, price FROM books WHERE price BETWEEN 100 AND 200;"
