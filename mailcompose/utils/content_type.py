"""Content-Type parsing and charset helpers."""

import codecs
from email.message import Message
from typing import Optional, Tuple

DEFAULT_CONTENT_TYPE = "text/plain"


def parse_content_type(content_type: Optional[str]) -> Tuple[str, str, Optional[str]]:
    """
    Split a Content-Type value into its parts.

    Args:
        content_type: Raw value such as "text/html; charset=ISO-8859-1"

    Returns:
        Tuple of (maintype, subtype, charset); charset is None when absent

    Examples:
        >>> parse_content_type("text/html; charset=ISO-8859-1")
        ('text', 'html', 'iso-8859-1')
        >>> parse_content_type(None)
        ('text', 'plain', None)
    """
    holder = Message()
    holder["Content-Type"] = content_type or DEFAULT_CONTENT_TYPE
    charset = holder.get_param("charset")
    if isinstance(charset, tuple):
        # RFC 2231 encoded parameter
        charset = charset[2]
    return (
        holder.get_content_maintype(),
        holder.get_content_subtype(),
        charset.lower() if charset else None,
    )


def normalize_charset(charset: str) -> str:
    """
    Validate a charset name and return it in canonical lower case.

    Args:
        charset: Charset name (e.g. "ISO-8859-1")

    Returns:
        Lower-cased charset name

    Raises:
        ValueError: If the charset is empty or unknown to Python
    """
    if not charset or not charset.strip():
        raise ValueError("Charset can not be null or empty")

    charset = charset.strip()
    try:
        codecs.lookup(charset)
    except LookupError as e:
        raise ValueError(f"Unsupported charset: {charset}") from e

    return charset.lower()
