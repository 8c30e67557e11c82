"""Message composition services."""

from .base import MessageFactory, MessageSink
from .message_builder import MessageBuilder
from .mime_message import MimeMessage
from .simple_builder import SimpleMessageBuilder

__all__ = [
    "MessageFactory",
    "MessageSink",
    "MessageBuilder",
    "MimeMessage",
    "SimpleMessageBuilder",
]
