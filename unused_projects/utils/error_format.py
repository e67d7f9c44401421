"""Error messages for the console.

Exceptions raised without a message (e.g. a bare PermissionError) still need
something to show after "Error:".
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

FRIENDLY_MESSAGES: dict[type, str] = {
    FileNotFoundError: "File or directory not found.",
    PermissionError: "Permission denied while reading extension metadata.",
}


def format_error_message(e: BaseException) -> str:
    """Return the exception's message, or a fallback when it has none.

    Examples:
        >>> format_error_message(ValueError("Site root not found: web"))
        'Site root not found: web'

        >>> format_error_message(PermissionError())
        'Permission denied while reading extension metadata.'
    """
    message = str(e)
    if message:
        return message

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return friendly_msg

    return f"{type(e).__name__} (no additional details)"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings."""
    return _escape_markup(str(value))
