"""Keystroke and paste validation for the currency input.

Every decision is a pure function of the current text, the proposed edit,
the number format and the stored value.  Nothing here touches a widget.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from currency_input.codec import DecimalCodec
from currency_input.number_format import NumberFormat


class RejectReason(Enum):
    """Why an edit was not applied."""

    MALFORMED_EDIT = "malformed_edit"
    INVALID_CHARACTER = "invalid_character"
    MULTIPLE_SEPARATORS = "multiple_separators"
    DIGIT_LIMIT_EXCEEDED = "digit_limit_exceeded"
    UNPARSABLE_NUMBER = "unparsable_number"


@dataclass(frozen=True)
class EditIntent:
    """A proposed replacement of ``base_text[start:end]`` by *replacement*."""

    base_text: str
    start: int
    end: int
    replacement: str = ""

    def edited_text(self) -> str | None:
        """Return the text after the edit, or None if the range is out of bounds."""
        if not 0 <= self.start <= self.end <= len(self.base_text):
            return None
        return self.base_text[: self.start] + self.replacement + self.base_text[self.end :]


@dataclass(frozen=True)
class Accept:
    """Let the host apply the edit verbatim."""


@dataclass(frozen=True)
class Reject:
    """Discard the edit; the text stays unchanged."""

    reason: RejectReason


@dataclass(frozen=True)
class Coerce:
    """Overwrite text and stored value; ``None`` clears to the placeholder."""

    value: Decimal | None


ValidationOutcome = Accept | Reject | Coerce


def validate_edit(
    intent: EditIntent,
    number_format: NumberFormat,
    current: Decimal | None,
) -> ValidationOutcome:
    """Decide what to do with a keystroke, deletion or range replacement.

    Rules are checked in order and the first match wins.

    Args:
        intent: The proposed edit against the current display text.
        number_format: The active number format.
        current: The value the field currently represents, or None.

    Returns:
        Accept, Reject or Coerce.
    """
    codec = DecimalCodec(number_format)
    separator = number_format.decimal_separator
    replacement = intent.replacement

    if replacement and not (replacement[0].isdecimal() or replacement == separator):
        return Reject(RejectReason.INVALID_CHARACTER)

    edited = intent.edited_text()
    if edited is None:
        return Reject(RejectReason.MALFORMED_EDIT)
    if not edited:
        return Coerce(None)
    if edited.count(separator) >= 2:
        return Reject(RejectReason.MULTIPLE_SEPARATORS)

    numeric = codec.filter_to_grammar(edited)
    if not numeric:
        return Coerce(None)
    # Collapse a leading-zero run to a clean zero instead of showing "00".
    if numeric in ("0", "00"):
        return Coerce(Decimal(0))

    value = codec.to_decimal(numeric)
    if value is None:
        return Reject(RejectReason.UNPARSABLE_NUMBER)

    integer, fraction = codec.split_components(numeric)
    if not 1 <= len(integer) <= number_format.max_integer_digits:
        return Reject(RejectReason.DIGIT_LIMIT_EXCEEDED)
    if len(fraction) > number_format.max_fraction_digits:
        return Reject(RejectReason.DIGIT_LIMIT_EXCEEDED)

    if current is not None and value == current:
        return Accept()
    return Coerce(value)


def validate_paste(text: str, number_format: NumberFormat) -> Coerce | Reject:
    """Decide what to do with pasted text.

    The pasted string replaces the whole field.  Digit limits are not
    checked here; the formatter truncates what it cannot display.

    Args:
        text: The pasted string, e.g. ``'3,400.25'``.
        number_format: The active number format.

    Returns:
        Coerce with the parsed value, or Reject when nothing parses.
    """
    codec = DecimalCodec(number_format)
    value = codec.to_decimal(codec.filter_to_grammar(text))
    if value is None:
        return Reject(RejectReason.UNPARSABLE_NUMBER)
    return Coerce(value)
