"""Mail session resolution."""

from .session_resolver import SessionResolver

__all__ = ["SessionResolver"]
