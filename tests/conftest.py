"""Shared test fixtures."""

from __future__ import annotations

from decimal import Decimal

import pytest

from currency_input.controller import EditController
from currency_input.number_format import NumberFormat


class FakeHost:
    """In-memory stand-in for a text widget."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.selection = (len(text), len(text))
        self.placeholder = ""
        self.attempts = 0

    def read_text(self) -> str:
        return self.text

    def read_selection(self) -> tuple[int, int]:
        return self.selection

    def write_text(self, text: str) -> None:
        self.text = text
        self.selection = (len(text), len(text))

    def write_selection(self, start: int, end: int) -> None:
        self.selection = (start, end)

    def show_placeholder(self, text: str) -> None:
        self.placeholder = text

    def edit_attempted(self) -> None:
        self.attempts += 1


class RecordingListener:
    """Listener that records every forwarded event."""

    def __init__(self, should_return: bool = True) -> None:
        self.calls: list[tuple[str, tuple]] = []
        self._should_return = should_return

    def value_changed(self, value: Decimal | None) -> None:
        self.calls.append(("value_changed", (value,)))

    def did_begin_editing(self) -> None:
        self.calls.append(("did_begin_editing", ()))

    def did_end_editing(self) -> None:
        self.calls.append(("did_end_editing", ()))

    def did_change_selection(self) -> None:
        self.calls.append(("did_change_selection", ()))

    def should_return(self) -> bool:
        self.calls.append(("should_return", ()))
        return self._should_return

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def usd_format() -> NumberFormat:
    """US dollar format with the default digit limits."""
    return NumberFormat()


@pytest.fixture
def euro_format() -> NumberFormat:
    """German-style euro format with the symbol after the number."""
    return NumberFormat(
        locale="de_DE",
        currency_symbol="€",
        decimal_separator=",",
        grouping_separator=".",
        prefix="",
        suffix="\xa0¤",
    )


@pytest.fixture
def host() -> FakeHost:
    """An empty fake text host."""
    return FakeHost()


@pytest.fixture
def changes() -> list:
    """Collects values passed to value-changed handlers."""
    return []


@pytest.fixture
def controller(host: FakeHost, usd_format: NumberFormat, changes: list) -> EditController:
    """A controller bound to the fake host, recording value changes."""
    ctrl = EditController(host, usd_format)
    ctrl.on_value_changed(changes.append)
    return ctrl


@pytest.fixture
def listener() -> RecordingListener:
    """A listener recording forwarded events."""
    return RecordingListener()


@pytest.fixture
def refusing_listener() -> RecordingListener:
    """A listener that vetoes return-key submission."""
    return RecordingListener(should_return=False)
