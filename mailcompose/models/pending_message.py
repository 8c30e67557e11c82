"""Accumulated state of a message that has not been built yet."""

from dataclasses import dataclass, field
from datetime import datetime
from email.headerregistry import Address
from enum import Enum
from typing import Dict, List, Optional, Union

from .mail_session import MailSession


class BuildState(Enum):
    """Lifecycle of a compose cycle."""

    EMPTY = "empty"
    POPULATED = "populated"
    BUILT = "built"


class RecipientType(Enum):
    """Recipient header a list of addresses is written to."""

    TO = "To"
    CC = "Cc"
    BCC = "Bcc"


@dataclass
class PendingMessage:
    """
    Everything a builder has been told about the next message.

    Attributes:
        from_address: Validated sender (None until set)
        to_list: To recipients in insertion order
        cc_list: Cc recipients in insertion order
        bcc_list: Bcc recipients in insertion order
        reply_to_list: Reply-To addresses in insertion order
        headers: Extra headers, last write wins
        subject: Subject line
        content: Body content (str or bytes)
        content_type: MIME type of the content
        charset: Charset used for text content and the subject
        sent_date: Explicit Date header value
        explicit_session: Caller-supplied session that overrides derived settings
        state: Build lifecycle tag
    """

    from_address: Optional[Address] = None
    to_list: List[Address] = field(default_factory=list)
    cc_list: List[Address] = field(default_factory=list)
    bcc_list: List[Address] = field(default_factory=list)
    reply_to_list: List[Address] = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    subject: Optional[str] = None
    content: Optional[Union[str, bytes]] = None
    content_type: Optional[str] = None
    charset: Optional[str] = None
    sent_date: Optional[datetime] = None
    explicit_session: Optional[MailSession] = None
    state: BuildState = BuildState.EMPTY

    @property
    def built(self) -> bool:
        return self.state is BuildState.BUILT

    def recipients(self, recipient_type: RecipientType) -> List[Address]:
        """Return the live recipient list for the given header."""
        if recipient_type is RecipientType.TO:
            return self.to_list
        if recipient_type is RecipientType.CC:
            return self.cc_list
        return self.bcc_list

    def has_recipients(self) -> bool:
        return bool(self.to_list or self.cc_list or self.bcc_list)
