"""Conversion between keystroke strings, display strings and Decimal values."""

from __future__ import annotations

from decimal import Decimal

from currency_input.number_format import NumberFormat


class DecimalCodec:
    """Extracts and renders numbers according to a NumberFormat."""

    def __init__(self, number_format: NumberFormat) -> None:
        self.number_format = number_format

    def filter_to_grammar(self, raw: str) -> str:
        """Keep only digits and the decimal separator.

        Used to recover the number the user meant from a paste or from
        text that still carries currency decoration.
        """
        separator = self.number_format.decimal_separator
        return "".join(ch for ch in raw if ch.isdecimal() or ch == separator)

    def filter_to_display_grammar(self, text: str) -> str:
        """Keep only digits, the decimal separator and the grouping separator.

        The result is the numeric run of an already formatted string.
        """
        fmt = self.number_format
        keep = {fmt.decimal_separator, fmt.grouping_separator} - {""}
        return "".join(ch for ch in text if ch.isdecimal() or ch in keep)

    def split_components(self, numeric: str) -> tuple[str, str]:
        """Split a grammar-filtered number into integer and fraction parts.

        Args:
            numeric: Output of :meth:`filter_to_grammar`.

        Returns:
            ``(integer, fraction)``; the fraction is empty when there is no
            separator, and both are empty when there is more than one.
        """
        parts = numeric.split(self.number_format.decimal_separator)
        match len(parts):
            case 1:
                return parts[0], ""
            case 2:
                return parts[0], parts[1]
            case _:
                return "", ""

    def to_decimal(self, raw: str) -> Decimal | None:
        """Parse *raw* with the configured format."""
        return self.number_format.parse(raw)

    def to_display(self, value: Decimal) -> str:
        """Format *value* with the configured format."""
        return self.number_format.format(value)

    @property
    def placeholder(self) -> str:
        return self.number_format.placeholder
