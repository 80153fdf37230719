"""Currency input widget with locale-aware formatting while typing."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from textual import events
from textual.events import Blur, Focus
from textual.message import Message
from textual.widgets import Input
from textual.widgets.input import Selection

from currency_input.controller import EditController
from currency_input.number_format import NumberFormat


class CurrencyInput(Input):
    """An Input that keeps its text a formatted currency amount.

    Every insertion, deletion and paste is validated by an
    :class:`~currency_input.controller.EditController`.  Digits are
    reformatted as they are typed (``1234`` shows as ``$1,234``) and the
    caret never rests inside the currency symbol.  The numeric value is
    available as :attr:`amount`.
    """

    @dataclass
    class ValueChanged(Message):
        """Posted when the user changes the amount."""

        currency_input: CurrencyInput
        value: Decimal | None

        @property
        def control(self) -> CurrencyInput:
            return self.currency_input

    @dataclass
    class EditAttempted(Message):
        """Posted for every attempted edit, including rejected ones."""

        currency_input: CurrencyInput
        text: str

        @property
        def control(self) -> CurrencyInput:
            return self.currency_input

    def __init__(
        self,
        amount: Decimal | None = None,
        *,
        number_format: NumberFormat | None = None,
        listener: Any = None,
        **kwargs,
    ) -> None:
        """Initialize the currency input.

        Args:
            amount: Initial amount.  None shows the placeholder.
            number_format: Formatting rules; defaults to US dollars.
            listener: Optional object receiving forwarded events
                (``value_changed``, ``did_begin_editing``,
                ``did_end_editing``, ``did_change_selection``,
                ``should_return``, ``should_clear``).
            **kwargs: Passed through to :class:`~textual.widgets.Input`.

        Raises:
            TypeError: If ``value`` is passed; the text is derived from *amount*.
        """
        if "value" in kwargs:
            raise TypeError("CurrencyInput takes amount=, not value=")
        kwargs.setdefault("select_on_focus", False)
        super().__init__(**kwargs)
        self._controller = EditController(self, number_format, listener)
        self._controller.on_value_changed(self._post_value_changed)
        if amount is not None:
            self._controller.set_value(amount)

    def on_mount(self) -> None:
        """Move the caret after the number once the widget has a region."""
        if self._controller.value is not None:
            self._controller.reset_cursor()

    # -- TextHost -------------------------------------------------------

    def read_text(self) -> str:
        return self.value

    def read_selection(self) -> tuple[int, int]:
        start, end = self.selection
        return start, end

    def write_text(self, text: str) -> None:
        self.value = text

    def write_selection(self, start: int, end: int) -> None:
        if not self.is_attached:
            return
        self.selection = Selection(start, end)

    def show_placeholder(self, text: str) -> None:
        self.placeholder = text

    def edit_attempted(self) -> None:
        self.post_message(self.EditAttempted(self, self.value))

    def _post_value_changed(self, value: Decimal | None) -> None:
        self.post_message(self.ValueChanged(self, value))

    # -- Public API -------------------------------------------------------

    @property
    def amount(self) -> Decimal | None:
        """The amount the field represents, or None when empty."""
        return self._controller.value

    @amount.setter
    def amount(self, value: Decimal | None) -> None:
        self._controller.set_value(value)

    @property
    def listener(self) -> Any:
        return self._controller.listener

    @listener.setter
    def listener(self, listener: Any) -> None:
        self._controller.listener = listener

    @property
    def number_format(self) -> NumberFormat:
        return self._controller.number_format

    @number_format.setter
    def number_format(self, number_format: NumberFormat) -> None:
        self._controller.set_number_format(number_format)

    @property
    def currency_symbol(self) -> str:
        return self.number_format.currency_symbol

    @currency_symbol.setter
    def currency_symbol(self, symbol: str) -> None:
        self._controller.configure(currency_symbol=symbol)

    @property
    def locale(self) -> str:
        return self.number_format.locale

    @locale.setter
    def locale(self, locale: str) -> None:
        self._controller.set_locale(locale)

    @property
    def max_integer_digits(self) -> int:
        return self.number_format.max_integer_digits

    @max_integer_digits.setter
    def max_integer_digits(self, digits: int) -> None:
        self._controller.configure(max_integer_digits=digits)

    @property
    def max_fraction_digits(self) -> int:
        return self.number_format.max_fraction_digits

    @max_fraction_digits.setter
    def max_fraction_digits(self, digits: int) -> None:
        self._controller.configure(max_fraction_digits=digits)

    def formatted(self, value: Decimal) -> str:
        """Format *value* the same way this field does, without changing it."""
        return self._controller.formatted(value)

    # -- Input overrides --------------------------------------------------

    def replace(self, text: str, start: int, end: int) -> None:
        """Apply an edit only if the controller accepts it verbatim."""
        start, end = sorted((start, end))
        if self._controller.handle_edit(start, end, text):
            super().replace(text, start, end)
            self._controller.reconcile_cursor()

    def clear(self) -> None:
        """Clear to the placeholder unless the listener vetoes it."""
        if self._controller.dispatch("should_clear", default=True):
            self._controller.set_value(None)

    def _on_paste(self, event: events.Paste) -> None:
        """Replace the whole field with the pasted amount."""
        event.prevent_default()
        event.stop()
        if event.text:
            self._controller.handle_paste(event.text.splitlines()[0])

    def action_paste(self) -> None:
        """Paste an amount from the local clipboard."""
        clipboard = self.app.clipboard
        if clipboard:
            self._controller.handle_paste(clipboard.splitlines()[0])

    def _cell_offset_to_index(self, offset: int) -> int:
        """Keep pointer-placed carets inside the numeric run."""
        index = super()._cell_offset_to_index(offset)
        return self._controller.reconcile_position(index)

    def _watch_selection(self, selection: Selection) -> None:
        super()._watch_selection(selection)
        self._controller.dispatch("did_change_selection")

    def _on_focus(self, event: Focus) -> None:
        self._controller.dispatch("did_begin_editing")

    def _on_blur(self, event: Blur) -> None:
        self._controller.dispatch("did_end_editing")

    async def action_submit(self) -> None:
        """Submit unless the listener vetoes it."""
        if self._controller.dispatch("should_return", default=True):
            await super().action_submit()
