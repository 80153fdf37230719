"""Textual widgets for currency entry."""

from currency_input.widgets.currency_input import CurrencyInput

__all__ = ["CurrencyInput"]
