"""Locale-aware currency entry field for Textual applications."""
