"""Business logic services"""

from .addressing import AddressValidator
from .composing import (
    MessageBuilder,
    MessageFactory,
    MessageSink,
    MimeMessage,
    SimpleMessageBuilder,
)
from .session import SessionResolver

__all__ = [
    "AddressValidator",
    "MessageBuilder",
    "MessageFactory",
    "MessageSink",
    "MimeMessage",
    "SessionResolver",
    "SimpleMessageBuilder",
]
