"""Utility functions"""

from .content_type import DEFAULT_CONTENT_TYPE, normalize_charset, parse_content_type
from .text_utils import is_empty, normalize_optional, unfold_line_breaks

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "is_empty",
    "normalize_charset",
    "normalize_optional",
    "parse_content_type",
    "unfold_line_breaks",
]
