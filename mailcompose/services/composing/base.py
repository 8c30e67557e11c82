"""Abstract message sink the builder writes into."""

from abc import ABC, abstractmethod
from datetime import datetime
from email.headerregistry import Address
from typing import Callable, Optional, Sequence, Union

from mailcompose.models.mail_session import MailSession
from mailcompose.models.pending_message import RecipientType


class MessageSink(ABC):
    """
    Minimal capability a built message must offer.

    MessageBuilder only talks to this interface, so richer message
    variants can add their own capabilities without the builder knowing.
    Implementations are created bound to the session they will be sent with.
    """

    @abstractmethod
    def set_from(self, address: Address) -> None:
        """Set the sender."""
        pass

    @abstractmethod
    def set_recipients(self, recipient_type: RecipientType, addresses: Sequence[Address]) -> None:
        """
        Set one recipient header.

        Args:
            recipient_type: Header to write (To, Cc or Bcc)
            addresses: Validated, non-empty list of addresses
        """
        pass

    @abstractmethod
    def set_reply_to(self, addresses: Sequence[Address]) -> None:
        """Set the Reply-To addresses."""
        pass

    @abstractmethod
    def set_subject(self, subject: str, charset: Optional[str] = None) -> None:
        """Set the subject line."""
        pass

    @abstractmethod
    def set_body(
        self,
        content: Optional[Union[str, bytes]],
        content_type: Optional[str] = None,
        charset: Optional[str] = None,
    ) -> None:
        """
        Set the single-part body.

        Args:
            content: Body content; None produces an empty text/plain body
            content_type: MIME type (defaults to text/plain)
            charset: Charset for text content (a charset parameter in
                content_type takes precedence)
        """
        pass

    @abstractmethod
    def set_sent_date(self, sent_date: datetime) -> None:
        """Set the Date header."""
        pass

    @abstractmethod
    def add_raw_header(self, name: str, value: str) -> None:
        """Add a header verbatim, without further validation."""
        pass


MessageFactory = Callable[[MailSession], MessageSink]
