"""Edit orchestration between the validation engine and a text host.

The controller owns the field's Decimal value and number format.  A host
(the Textual ``CurrencyInput`` or any object implementing :class:`TextHost`)
reports edit intents; the controller validates them, rewrites text and
caret, and notifies value listeners.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal
from typing import Any, Protocol

from textual import log

from currency_input.codec import DecimalCodec
from currency_input.cursor import cursor_at_end, reconcile
from currency_input.number_format import NumberFormat
from currency_input.validator import (
    Accept,
    Coerce,
    EditIntent,
    Reject,
    ValidationOutcome,
    validate_edit,
    validate_paste,
)

ValueChangedHandler = Callable[[Decimal | None], None]


class TextHost(Protocol):
    """The capabilities the controller needs from a text widget."""

    def read_text(self) -> str: ...

    def read_selection(self) -> tuple[int, int]: ...

    def write_text(self, text: str) -> None: ...

    def write_selection(self, start: int, end: int) -> None: ...

    def show_placeholder(self, text: str) -> None: ...

    def edit_attempted(self) -> None: ...


class EditController:
    """Validates edits against a NumberFormat and keeps the host in sync."""

    def __init__(
        self,
        host: TextHost,
        number_format: NumberFormat | None = None,
        listener: Any = None,
    ) -> None:
        """Initialize the controller and publish the placeholder.

        Args:
            host: The text widget being mediated.
            number_format: Formatting rules; defaults to US dollars.
            listener: Optional application object receiving forwarded
                events (see :meth:`dispatch`).
        """
        self.host = host
        self.listener = listener
        self.value: Decimal | None = None
        self._handlers: list[ValueChangedHandler] = []
        self.set_number_format(number_format or NumberFormat())

    @property
    def number_format(self) -> NumberFormat:
        return self._number_format

    def set_number_format(self, number_format: NumberFormat) -> None:
        """Use *number_format* from now on and refresh the placeholder."""
        self._number_format = number_format
        self._codec = DecimalCodec(number_format)
        self.host.show_placeholder(number_format.placeholder)

    def configure(self, **changes) -> None:
        """Replace format fields and refresh the placeholder.

        Text already in the field is not reformatted.
        """
        self.set_number_format(self._number_format.replace(**changes))

    def set_locale(self, locale: str, currency: str | None = None) -> None:
        """Switch to the separators, affixes and symbol of *locale*.

        The digit limits of the current format are kept.
        """
        fmt = self._number_format
        self.set_number_format(
            NumberFormat.for_locale(
                locale,
                currency,
                min_integer_digits=fmt.min_integer_digits,
                max_integer_digits=fmt.max_integer_digits,
                min_fraction_digits=fmt.min_fraction_digits,
                max_fraction_digits=fmt.max_fraction_digits,
            )
        )

    def on_value_changed(self, handler: ValueChangedHandler) -> None:
        """Register *handler* to be called with each user-driven value change."""
        self._handlers.append(handler)

    def dispatch(self, name: str, *args, default: Any = None) -> Any:
        """Forward a host event to the listener.

        Args:
            name: Listener method name, e.g. ``'should_return'``.
            *args: Arguments for the listener method.
            default: Returned when there is no listener or it lacks *name*.

        Returns:
            The listener's result, or *default*.
        """
        method = getattr(self.listener, name, None)
        if method is None:
            return default
        return method(*args)

    def formatted(self, value: Decimal) -> str:
        """Format *value* the way the field would, without changing the field."""
        return self._codec.to_display(value)

    def handle_edit(self, start: int, end: int, replacement: str) -> bool:
        """Validate an edit of the host text.

        Args:
            start: Start offset of the replaced range.
            end: End offset (exclusive) of the replaced range.
            replacement: Text inserted in place of the range.

        Returns:
            True if the host should apply the edit itself, False if the
            edit was rejected or already applied as a coercion.
        """
        intent = EditIntent(self.host.read_text(), start, end, replacement)
        try:
            outcome = validate_edit(intent, self._number_format, self.value)
            return self._apply_outcome(outcome)
        finally:
            self.host.edit_attempted()

    def handle_paste(self, text: str) -> bool:
        """Replace the whole field with the number found in pasted *text*.

        Returns:
            Always False; the raw paste is never inserted.
        """
        try:
            self._apply_outcome(validate_paste(text, self._number_format))
            return False
        finally:
            self.host.edit_attempted()

    def _apply_outcome(self, outcome: ValidationOutcome) -> bool:
        match outcome:
            case Accept():
                return True
            case Reject(reason=reason):
                log.debug("currency edit rejected", reason=reason.value)
                return False
            case Coerce(value=value):
                log.debug("currency edit coerced", value=value)
                self._write_value(value, notify=True)
                return False

    def set_value(self, value: Decimal | None) -> None:
        """Set the value programmatically; listeners are not notified.

        Args:
            value: The new amount, or None to clear to the placeholder.
        """
        self._write_value(value, notify=False)

    def _write_value(self, value: Decimal | None, notify: bool) -> None:
        previous = self.value
        self.value = value
        if value is None:
            self.host.write_text("")
        else:
            self.host.write_text(self._codec.to_display(value))
            self.reset_cursor()
        if notify and value != previous:
            for handler in self._handlers:
                handler(value)
            self.dispatch("value_changed", value)

    def reset_cursor(self) -> None:
        """Place the caret right after the numeric run."""
        offset = cursor_at_end(self.host.read_text(), self._codec)
        if offset is not None:
            self.host.write_selection(offset, offset)

    def reconcile_position(self, offset: int) -> int:
        """Map a pointer-derived caret *offset* into the numeric run."""
        return reconcile(self.host.read_text(), offset, self._codec)

    def reconcile_cursor(self) -> None:
        """Move the host caret back into the numeric run after an accepted edit."""
        start, end = self.host.read_selection()
        if start != end:
            return
        offset = self.reconcile_position(end)
        if offset != end:
            self.host.write_selection(offset, offset)
