"""MIME message implementation of the message sink."""

from datetime import datetime
from email.headerregistry import Address
from email.message import EmailMessage
from email.policy import Policy, default
from typing import List, Optional, Sequence, Tuple, Union

from mailcompose.models.mail_session import MailSession
from mailcompose.models.pending_message import RecipientType
from mailcompose.utils.content_type import parse_content_type
from mailcompose.utils.text_utils import unfold_line_breaks
from .base import MessageSink

DEFAULT_CHARSET = "utf-8"


class MimeMessage(EmailMessage, MessageSink):
    """
    EmailMessage bound to the session it was built for.

    Attributes:
        session: MailSession resolved for this message (None on nested parts)
    """

    def __init__(self, session: Optional[MailSession] = None, policy: Optional[Policy] = None):
        super().__init__(policy=policy or default)
        self.session = session
        self._body_text: Optional[str] = None
        self._body_payload = None

    def set_from(self, address: Address) -> None:
        self._replace_header("From", address)

    def set_recipients(self, recipient_type: RecipientType, addresses: Sequence[Address]) -> None:
        self._replace_header(recipient_type.value, list(addresses))

    def set_reply_to(self, addresses: Sequence[Address]) -> None:
        self._replace_header("Reply-To", list(addresses))

    def set_subject(self, subject: str, charset: Optional[str] = None) -> None:
        # Non-ASCII subjects are RFC 2047 encoded by the policy on output
        self._replace_header("Subject", unfold_line_breaks(subject))

    def set_body(
        self,
        content: Optional[Union[str, bytes]],
        content_type: Optional[str] = None,
        charset: Optional[str] = None,
    ) -> None:
        maintype, subtype, type_charset = parse_content_type(content_type)
        charset = type_charset or charset or DEFAULT_CHARSET

        if content is None:
            content = ""

        if isinstance(content, str) and maintype == "text":
            self.set_content(content, subtype=subtype, charset=charset)
            self._body_text = content
            self._body_payload = self._payload
            return

        if isinstance(content, str):
            content = content.encode(charset)
        self.set_content(content, maintype, subtype)

    def set_sent_date(self, sent_date: datetime) -> None:
        if sent_date.tzinfo is None:
            sent_date = sent_date.astimezone()
        self._replace_header("Date", sent_date)

    def add_raw_header(self, name: str, value: str) -> None:
        if self.policy.header_max_count(name) is not None:
            del self[name]
        self[name] = unfold_line_breaks(value)

    def get_content(self, *args, content_manager=None, **kw):
        """
        Return the body content.

        A text body written by set_body comes back exactly as it was given;
        the transfer encoding always ends it with a line break.
        """
        unchanged = self._body_text is not None and self._payload is self._body_payload
        if unchanged and not args and content_manager is None and not kw:
            return self._body_text
        return super().get_content(*args, content_manager=content_manager, **kw)

    def get_from(self) -> Optional[Address]:
        """Return the sender, or None if not set."""
        header = self["From"]
        if header is None or not header.addresses:
            return None
        return header.addresses[0]

    def get_recipients(self, recipient_type: RecipientType) -> Tuple[Address, ...]:
        """
        Return the addresses of one recipient header.

        Args:
            recipient_type: Header to read

        Returns:
            Tuple of addresses (empty when the header is absent)
        """
        header = self[recipient_type.value]
        if header is None:
            return ()
        return header.addresses

    def get_reply_to(self) -> Tuple[Address, ...]:
        """Return the Reply-To addresses (empty when absent)."""
        header = self["Reply-To"]
        if header is None:
            return ()
        return header.addresses

    def get_sent_date(self) -> Optional[datetime]:
        """Return the Date header as a datetime, or None."""
        header = self["Date"]
        if header is None:
            return None
        return header.datetime

    def get_header(self, name: str) -> List[str]:
        """Return every value of a header, in order."""
        return [str(value) for value in self.get_all(name, [])]

    def _replace_header(self, name: str, value) -> None:
        del self[name]
        self[name] = value
