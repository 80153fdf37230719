"""Tests for caret reconciliation against the numeric run."""

import pytest

from currency_input.codec import DecimalCodec
from currency_input.cursor import cursor_at_end, numeric_run, reconcile


@pytest.fixture
def codec(usd_format) -> DecimalCodec:
    return DecimalCodec(usd_format)


class TestNumericRun:
    """Tests for numeric_run."""

    def test_prefix_symbol(self, codec):
        assert numeric_run("$1,234.56", codec) == (1, 9)

    def test_suffix_symbol(self, euro_format):
        assert numeric_run("1.234,5\xa0€", DecimalCodec(euro_format)) == (0, 7)

    def test_no_digits(self, codec):
        assert numeric_run("$", codec) is None

    def test_empty(self, codec):
        assert numeric_run("", codec) is None

    def test_interleaved_decoration(self, codec):
        """Digits split by decoration do not form a contiguous run."""
        assert numeric_run("1$2", codec) is None


class TestReconcile:
    """Tests for reconcile."""

    def test_before_the_run(self, codec):
        assert reconcile("$1,234.56", 0, codec) == 2

    def test_at_the_left_edge(self, codec):
        assert reconcile("$1,234.56", 1, codec) == 2

    def test_past_the_end(self, codec):
        assert reconcile("$1,234.56", 10, codec) == 9

    def test_at_the_right_edge(self, codec):
        assert reconcile("$1,234.56", 9, codec) == 9

    def test_inside_the_run(self, codec):
        assert reconcile("$1,234.56", 5, codec) == 5

    def test_no_decoration(self, codec):
        assert reconcile("1234", 0, codec) == 0

    def test_no_numeric_run(self, codec):
        assert reconcile("$", 0, codec) == 0

    def test_suffix_symbol(self, euro_format):
        codec = DecimalCodec(euro_format)
        assert reconcile("1.234,5\xa0€", 9, codec) == 7
        assert reconcile("1.234,5\xa0€", 0, codec) == 1


class TestCursorAtEnd:
    """Tests for cursor_at_end."""

    def test_prefix_symbol(self, codec):
        assert cursor_at_end("$1,234.56", codec) == 9

    def test_suffix_symbol(self, euro_format):
        assert cursor_at_end("1.234,5\xa0€", DecimalCodec(euro_format)) == 7

    def test_no_numeric_run(self, codec):
        assert cursor_at_end("$", codec) is None


class TestSpaceGrouping:
    """Grouping by the same space that separates the symbol."""

    @pytest.fixture
    def codec(self, usd_format) -> DecimalCodec:
        return DecimalCodec(
            usd_format.replace(
                currency_symbol="₽",
                decimal_separator=",",
                grouping_separator="\xa0",
                prefix="",
                suffix="\xa0¤",
            )
        )

    def test_run_excludes_symbol_spacing(self, codec):
        assert numeric_run("1\xa0234,5\xa0₽", codec) == (0, 7)

    def test_cursor_stops_before_symbol_spacing(self, codec):
        assert cursor_at_end("1\xa0234,5\xa0₽", codec) == 7
