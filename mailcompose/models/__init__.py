"""Data models for message composition"""

from .mail_session import (
    Authenticator,
    DefaultAuthenticator,
    MailSession,
    PasswordAuthentication,
)
from .pending_message import BuildState, PendingMessage, RecipientType

__all__ = [
    "Authenticator",
    "BuildState",
    "DefaultAuthenticator",
    "MailSession",
    "PasswordAuthentication",
    "PendingMessage",
    "RecipientType",
]
