"""Caret placement that keeps the cursor inside the numeric run."""

from __future__ import annotations

from currency_input.codec import DecimalCodec


def numeric_run(text: str, codec: DecimalCodec) -> tuple[int, int] | None:
    """Locate the numeric run of a formatted string.

    Args:
        text: The display text, e.g. ``'$1,234.56'``.
        codec: Codec for the active number format.

    Returns:
        ``(left, right)`` offsets of the first contiguous occurrence of the
        digits and separators, or None if there is no such run.
    """
    numeric = codec.filter_to_display_grammar(text)
    # A grouping separator never starts or ends the number itself.
    grouping = codec.number_format.grouping_separator
    if grouping:
        numeric = numeric.strip(grouping)
    if not numeric:
        return None
    left = text.find(numeric)
    if left < 0:
        return None
    return left, left + len(numeric)


def reconcile(text: str, desired: int, codec: DecimalCodec) -> int:
    """Map a desired caret offset onto a valid offset inside the numeric run.

    Args:
        text: The display text.
        desired: The offset the user aimed at.
        codec: Codec for the active number format.

    Returns:
        ``desired`` when it already lies inside the run (or the text has no
        decoration), one past the run's left edge when it lies at or before
        it, and the run's right edge when it lies beyond it.
    """
    if text == codec.filter_to_display_grammar(text):
        return desired
    run = numeric_run(text, codec)
    if run is None:
        return desired
    left, right = run
    if desired <= left:
        return left + 1
    if desired > right:
        return right
    return desired


def cursor_at_end(text: str, codec: DecimalCodec) -> int | None:
    """Return the offset just after the numeric run, or None if there is none."""
    run = numeric_run(text, codec)
    if run is None:
        return None
    return run[1]
