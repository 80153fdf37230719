"""Custom exceptions for currency input configuration."""


class FormatConfigurationError(ValueError):
    """Raised when a number format is configured inconsistently."""
