"""Builder variant for plain-text messages."""

from typing import Optional

from mailcompose.exceptions import EmailError
from mailcompose.utils.content_type import DEFAULT_CONTENT_TYPE
from mailcompose.utils.text_utils import is_empty
from .message_builder import MessageBuilder


class SimpleMessageBuilder(MessageBuilder):
    """MessageBuilder whose body is always a plain-text message."""

    def set_msg(self, msg: Optional[str]) -> "SimpleMessageBuilder":
        """
        Set the plain-text body.

        Args:
            msg: Message text

        Raises:
            EmailError: If msg is None or empty
        """
        if is_empty(msg):
            raise EmailError("Invalid message supplied")

        self.set_content(msg, DEFAULT_CONTENT_TYPE)
        return self
