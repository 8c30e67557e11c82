"""String helpers shared by setters and header writers."""

import re
from typing import Optional

_LINE_BREAK = re.compile(r"(?:\r\n|\r|\n)([ \t])?")


def is_empty(value: Optional[str]) -> bool:
    """
    Check whether a string value is missing.

    Args:
        value: Value to check (may be None)

    Returns:
        True for None and the empty string

    Examples:
        >>> is_empty("")
        True
        >>> is_empty(" ")
        False
    """
    return value is None or value == ""


def normalize_optional(value: Optional[str]) -> Optional[str]:
    """
    Collapse an empty string to None.

    Args:
        value: Raw value passed to a setter

    Returns:
        The value unchanged, or None when it was empty

    Examples:
        >>> normalize_optional("")
        >>> normalize_optional("localhost")
        'localhost'
    """
    if is_empty(value):
        return None
    return value


def unfold_line_breaks(value: str) -> str:
    """
    Turn line breaks in a header value into folding whitespace.

    A break already followed by a space or tab is dropped; a bare break
    becomes a single space.

    Args:
        value: Raw header value

    Returns:
        Single-line value

    Examples:
        >>> unfold_line_breaks("a\\nb")
        'a b'
        >>> unfold_line_breaks("a\\r\\n\\tb")
        'a\\tb'
    """
    return _LINE_BREAK.sub(lambda m: m.group(1) or " ", value)
