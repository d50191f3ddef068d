"""
Normalization of processor error messages.

Processors often report failures as ``"line 4: bad token"``. The line is
already carried separately on the resulting lint message, so the prefix is
stripped from the text.
"""

import re
from typing import Optional, Tuple

LINE_PREFIX_PATTERN = re.compile(r"^line \d+:", re.IGNORECASE)


def strip_line_prefix(text: str) -> str:
    """Remove a leading ``line <digits>:`` marker and surrounding whitespace."""
    return LINE_PREFIX_PATTERN.sub("", text, count=1).strip()


def error_text(exc: BaseException) -> str:
    """
    The message an exception was raised with.

    A single string argument is used as-is, since ``str()`` quotes it for
    ``KeyError``. Anything else falls back to ``str(exc)``.
    """
    if len(exc.args) == 1 and isinstance(exc.args[0], str):
        return exc.args[0]
    return str(exc)


def format_preprocessing_error(exc: BaseException, prefix: str) -> str:
    """Render a processor exception as a lint message text."""
    return f"{prefix}{strip_line_prefix(error_text(exc))}"


def error_location(exc: BaseException) -> Tuple[Optional[int], Optional[int]]:
    """
    Read the line and column an exception reports, if any.

    ``line_number``/``column`` are checked first, then the ``lineno``/``offset``
    pair that ``SyntaxError`` and parser errors carry.
    """
    line = getattr(exc, "line_number", None)
    if line is None:
        line = getattr(exc, "lineno", None)

    column = getattr(exc, "column", None)
    if column is None:
        column = getattr(exc, "offset", None)

    return line, column
