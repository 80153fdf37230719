"""Configuration resolution for currency input defaults.

Locale priority order (highest to lowest):
1. explicit ``locale`` argument
2. CURRENCY_INPUT_LOCALE environment variable
3. ~/.config/currency-input/config.toml -> [format] locale key
4. en_US (default)
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from currency_input.errors import FormatConfigurationError
from currency_input.number_format import NumberFormat

_CONFIG_PATH = Path.home() / ".config" / "currency-input" / "config.toml"

_DEFAULT_LOCALE = "en_US"

# Keys of the [format] section passed straight to NumberFormat.
_DIGIT_KEYS = (
    "min_integer_digits",
    "max_integer_digits",
    "min_fraction_digits",
    "max_fraction_digits",
)


def _load_config_dict() -> dict:
    """Load the full config.toml as a dict, or return empty dict on failure."""
    if not _CONFIG_PATH.exists():
        return {}
    try:
        with open(_CONFIG_PATH, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def load_format_settings() -> dict:
    """Return the ``[format]`` section of config.toml.

    Example config.toml::

        [format]
        locale = "de_DE"
        currency = "EUR"
        max_fraction_digits = 2

    Returns:
        The section as a dict, or an empty dict when it is missing.
    """
    section = _load_config_dict().get("format", {})
    return section if isinstance(section, dict) else {}


def _text_setting(settings: dict, key: str) -> str | None:
    """Return a string value of the [format] section, or None when unset."""
    value = settings.get(key)
    if value is not None and not isinstance(value, str):
        raise FormatConfigurationError(
            f"{key} in {_CONFIG_PATH} must be a string, got {value!r}"
        )
    return value


def resolve_locale(locale: str | None = None) -> str:
    """Resolve the locale identifier using the priority chain.

    Args:
        locale: An explicitly requested locale, if any.

    Returns:
        The locale identifier to format with.

    Raises:
        FormatConfigurationError: If the config file locale is not a string.
    """
    if locale:
        return locale
    env_locale = os.environ.get("CURRENCY_INPUT_LOCALE")
    if env_locale:
        return env_locale
    return _text_setting(load_format_settings(), "locale") or _DEFAULT_LOCALE


def load_number_format(
    locale: str | None = None, currency: str | None = None
) -> NumberFormat:
    """Build the NumberFormat described by the environment and config.toml.

    Args:
        locale: Explicit locale; overrides environment and config.
        currency: Explicit ISO 4217 code; overrides the config ``currency`` key.

    Returns:
        A validated NumberFormat.

    Raises:
        FormatConfigurationError: If the configured values are invalid.
    """
    settings = load_format_settings()
    overrides: dict[str, int] = {}
    for key in _DIGIT_KEYS:
        if key not in settings:
            continue
        value = settings[key]
        if not isinstance(value, int) or isinstance(value, bool):
            raise FormatConfigurationError(
                f"{key} in {_CONFIG_PATH} must be an integer, got {value!r}"
            )
        overrides[key] = value
    currency = currency or _text_setting(settings, "currency")
    return NumberFormat.for_locale(resolve_locale(locale), currency, **overrides)
