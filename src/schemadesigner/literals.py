"""Rendering of values as TypeScript literal tokens."""

from __future__ import annotations

import json


def format_number(value: float) -> str:
    """Render a number the way JavaScript prints it.

    Args:
        value (float): Integer or float value.

    Returns:
        str: `3` for `3` and `3.0`, `2.5` for `2.5`.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def double_quoted(text: str) -> str:
    """Return a double-quoted string literal."""
    return json.dumps(text, ensure_ascii=False)


def single_quoted(text: str) -> str:
    """Return a single-quoted string literal."""
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def literal_token(value: str | float | bool) -> str:
    """Render an opaque default value as an unquoted token.

    Strings are returned verbatim: the caller owns their validity.

    Args:
        value (str | float | bool): Default value.

    Returns:
        str: Token text.
    """
    if isinstance(value, str):
        return value
    return format_number(value)
