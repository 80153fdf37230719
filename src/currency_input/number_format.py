"""Locale-aware currency number format used by the currency input."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from babel import Locale, UnknownLocaleError
from babel.numbers import (
    get_currency_symbol,
    get_decimal_symbol,
    get_group_symbol,
    get_territory_currencies,
)

from currency_input.errors import FormatConfigurationError

# CLDR placeholder for the currency symbol inside pattern affixes.
CURRENCY_SIGN = "¤"

_TEXT_FIELDS = (
    "currency_symbol",
    "decimal_separator",
    "grouping_separator",
    "prefix",
    "suffix",
)


def _clashes(decoration: str, decimal_separator: str, grouping_separator: str) -> bool:
    """Whether *decoration* holds a character the number grammar would claim.

    Surrounding whitespace is ignored, so a no-break space used both as
    grouping separator and as symbol spacing is allowed.
    """
    reserved = {decimal_separator, grouping_separator} - {""}
    return any(ch.isdecimal() or ch in reserved for ch in decoration.strip())


@dataclass(frozen=True)
class NumberFormat:
    """Currency formatting rules for one input field.

    The affixes are CLDR pattern fragments where ``¤`` stands for the
    currency symbol, so ``prefix="¤"`` renders ``$1,234.56`` and
    ``suffix="\\xa0¤"`` renders ``1.234,56 €``.  Instances are immutable;
    use :meth:`replace` to reconfigure.
    """

    locale: str = "en_US"
    currency_symbol: str = "$"
    decimal_separator: str = "."
    grouping_separator: str = ","
    prefix: str = CURRENCY_SIGN
    suffix: str = ""
    grouping_size: int = 3
    min_integer_digits: int = 1
    max_integer_digits: int = 12
    min_fraction_digits: int = 0
    max_fraction_digits: int = 2

    def __post_init__(self) -> None:
        """Reject configurations that would corrupt parsing."""
        for name in _TEXT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise FormatConfigurationError(f"{name} must be a string, got {value!r}")
        if len(self.decimal_separator) != 1:
            raise FormatConfigurationError(
                f"Decimal separator must be a single character: {self.decimal_separator!r}"
            )
        if self.decimal_separator == self.grouping_separator:
            raise FormatConfigurationError(
                f"Decimal and grouping separators must differ: {self.decimal_separator!r}"
            )
        if any(ch.isdecimal() for ch in self.decimal_separator + self.grouping_separator):
            raise FormatConfigurationError("Separators must not contain digits")
        if self.max_integer_digits < 1:
            raise FormatConfigurationError("max_integer_digits must be at least 1")
        if not 0 <= self.min_integer_digits <= self.max_integer_digits:
            raise FormatConfigurationError(
                "min_integer_digits must be between 0 and max_integer_digits"
            )
        if not 0 <= self.min_fraction_digits <= self.max_fraction_digits:
            raise FormatConfigurationError(
                "min_fraction_digits must be between 0 and max_fraction_digits"
            )
        if self.grouping_size < 0:
            raise FormatConfigurationError("grouping_size must not be negative")
        for affix in (self.prefix, self.suffix):
            if _clashes(self._affix(affix), self.decimal_separator, self.grouping_separator):
                raise FormatConfigurationError(
                    f"Affix {self._affix(affix)!r} contains a digit or separator"
                )

    @classmethod
    def for_locale(
        cls, locale: str, currency: str | None = None, **overrides
    ) -> NumberFormat:
        """Build a format from the CLDR data of *locale*.

        Args:
            locale: A locale identifier such as ``'en_US'`` or ``'de_DE'``.
            currency: ISO 4217 code whose symbol is displayed.  Defaults to
                the territory's current currency, or the generic ``¤`` when
                the locale has no territory.
            **overrides: Field values that take precedence over the
                locale data (e.g. ``max_fraction_digits=0``).

        Returns:
            A validated NumberFormat.

        Raises:
            FormatConfigurationError: If the locale is unknown or the
                resulting configuration is inconsistent.
        """
        try:
            parsed = Locale.parse(locale)
        except (UnknownLocaleError, ValueError, TypeError) as exc:
            raise FormatConfigurationError(f"Unknown locale: {locale!r}") from exc

        if currency is None and parsed.territory:
            currencies = get_territory_currencies(parsed.territory)
            currency = currencies[0] if currencies else None
        symbol = get_currency_symbol(currency, locale=parsed) if currency else CURRENCY_SIGN
        decimal_separator = get_decimal_symbol(parsed)
        grouping_separator = get_group_symbol(parsed)
        # Symbols such as "kr." or "د.إ." would read as part of the number.
        if currency and _clashes(symbol, decimal_separator, grouping_separator):
            symbol = currency

        pattern = parsed.currency_formats["standard"]
        fields = {
            "locale": str(parsed),
            "currency_symbol": symbol,
            "decimal_separator": decimal_separator,
            "grouping_separator": grouping_separator,
            "prefix": pattern.prefix[0],
            "suffix": pattern.suffix[0],
            "grouping_size": pattern.grouping[0],
        }
        fields.update(overrides)
        return cls(**fields)

    def replace(self, **changes) -> NumberFormat:
        """Return a copy with *changes* applied, validated like a new instance."""
        return dataclasses.replace(self, **changes)

    @property
    def placeholder(self) -> str:
        """The locale's formatted zero, shown while the field has no value."""
        full_fraction = dataclasses.replace(
            self, min_fraction_digits=self.max_fraction_digits
        )
        return full_fraction.format(Decimal(0))

    def _affix(self, pattern: str) -> str:
        return pattern.replace(CURRENCY_SIGN, self.currency_symbol)

    def _group(self, digits: str) -> str:
        size = self.grouping_size
        if not self.grouping_separator or size <= 0 or len(digits) <= size:
            return digits
        head = len(digits) % size or size
        groups = [digits[:head]]
        groups.extend(digits[i : i + size] for i in range(head, len(digits), size))
        return self.grouping_separator.join(groups)

    def format(self, value: Decimal) -> str:
        """Render *value* in currency style.

        The sign is ignored.  Fraction digits beyond ``max_fraction_digits``
        are truncated and trailing zeros are kept only down to
        ``min_fraction_digits``.  Integer digits beyond
        ``max_integer_digits`` are dropped from the high-order end.

        Args:
            value: The amount to format.

        Returns:
            The display string, e.g. ``'$1,234.5'``.
        """
        integer, _, fraction = f"{abs(value):f}".partition(".")
        fraction = fraction[: self.max_fraction_digits].rstrip("0")
        fraction = fraction.ljust(self.min_fraction_digits, "0")

        integer = integer.lstrip("0")
        if len(integer) > self.max_integer_digits:
            integer = integer[-self.max_integer_digits :].lstrip("0")
        integer = integer.rjust(self.min_integer_digits, "0")
        if not integer and not fraction:
            integer = "0"

        number = self._group(integer)
        if fraction:
            number = f"{number}{self.decimal_separator}{fraction}"
        return f"{self._affix(self.prefix)}{number}{self._affix(self.suffix)}"

    def parse(self, text: str) -> Decimal | None:
        """Parse a locale formatted number.

        Surrounding affixes and grouping separators are tolerated.  What
        remains must be decimal digits with at most one decimal separator.

        Args:
            text: A raw or formatted number, e.g. ``'1234.5'`` or ``'$1,234.50'``.

        Returns:
            The exact Decimal value, or None if *text* is not a number.
        """
        body = text.strip()
        prefix = self._affix(self.prefix).strip()
        suffix = self._affix(self.suffix).strip()
        if prefix and body.startswith(prefix):
            body = body[len(prefix) :].lstrip()
        if suffix and body.endswith(suffix):
            body = body[: -len(suffix)].rstrip()
        if self.grouping_separator:
            body = body.replace(self.grouping_separator, "")

        if body.count(self.decimal_separator) > 1:
            return None
        if not any(ch.isdecimal() for ch in body):
            return None
        if not all(ch.isdecimal() or ch == self.decimal_separator for ch in body):
            return None
        try:
            return Decimal(body.replace(self.decimal_separator, "."))
        except InvalidOperation:
            return None
