"""Accumulate-then-build engine for outbound messages."""

import logging
from datetime import datetime
from email.headerregistry import Address
from typing import Dict, Iterable, List, Mapping, Optional, Union

from mailcompose.config.compose_config import (
    DEFAULT_SESSION_DEFAULTS,
    AppConfig,
    SessionDefaults,
    TransportSettings,
)
from mailcompose.exceptions import (
    BuildAlreadyCompletedError,
    BuildFailedError,
    MissingFromError,
    MissingHostnameError,
    MissingRecipientsError,
)
from mailcompose.models.mail_session import MAIL_HOST, MailSession
from mailcompose.models.pending_message import BuildState, PendingMessage, RecipientType
from mailcompose.services.addressing.address_validator import AddressValidator
from mailcompose.services.session.session_resolver import SessionResolver
from mailcompose.utils.content_type import normalize_charset, parse_content_type
from mailcompose.utils.text_utils import is_empty, normalize_optional
from .base import MessageFactory, MessageSink
from .mime_message import MimeMessage

logger = logging.getLogger(__name__)

AddressInput = Union[str, Iterable[str], None]


class MessageBuilder:
    """
    Collects message and transport settings, then builds one message.

    Setters may be called in any order and any number of times; each
    address goes through AddressValidator as soon as it is set. build()
    succeeds at most once per builder.

    Example:
        >>> message = (
        ...     MessageBuilder()
        ...     .set_host_name("localhost")
        ...     .set_from("aaa@bbb.com")
        ...     .add_to("ccc@ddd.com")
        ...     .build()
        ... )
    """

    def __init__(
        self,
        defaults: SessionDefaults = DEFAULT_SESSION_DEFAULTS,
        address_validator: Optional[AddressValidator] = None,
        session_resolver: Optional[SessionResolver] = None,
        message_factory: Optional[MessageFactory] = None,
    ):
        """
        Initialize builder.

        Args:
            defaults: Immutable defaults table for session resolution
            address_validator: Optional custom address validator
            session_resolver: Optional custom session resolver
            message_factory: Callable creating the message sink for a session
                (default: MimeMessage)
        """
        self.defaults = defaults
        self.address_validator = address_validator or AddressValidator()
        self.session_resolver = session_resolver or SessionResolver(defaults)
        self.message_factory = message_factory or MimeMessage

        self._pending = PendingMessage()
        self._settings = TransportSettings()
        self._message: Optional[MessageSink] = None

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs) -> "MessageBuilder":
        """
        Create a builder seeded with loaded configuration.

        Args:
            config: Application configuration
            **kwargs: Passed through to the constructor

        Returns:
            New builder with transport settings, charset and default sender applied
        """
        builder = cls(defaults=config.session_defaults, **kwargs)
        builder._settings = config.transport.model_copy()

        if config.compose.charset:
            builder.set_charset(config.compose.charset)
        if config.compose.from_address:
            builder.set_from(config.compose.from_address, config.compose.from_name)

        return builder

    # Addresses

    def set_from(self, address: Optional[str], name: Optional[str] = None) -> "MessageBuilder":
        """
        Set the sender, replacing any previous one.

        Raises:
            InvalidAddressError: If address is empty or malformed
        """
        self._pending.from_address = self.address_validator.parse(address, name)
        self._touch()
        return self

    def add_to(self, addresses: AddressInput, name: Optional[str] = None) -> "MessageBuilder":
        """
        Append one address (str) or a batch of addresses to To.

        Raises:
            InvalidAddressError: If an address is malformed
            InvalidAddressListError: If a batch is None or empty
        """
        return self._add_recipients(RecipientType.TO, addresses, name)

    def add_cc(self, addresses: AddressInput, name: Optional[str] = None) -> "MessageBuilder":
        """Append one address (str) or a batch of addresses to Cc."""
        return self._add_recipients(RecipientType.CC, addresses, name)

    def add_bcc(self, addresses: AddressInput, name: Optional[str] = None) -> "MessageBuilder":
        """Append one address (str) or a batch of addresses to Bcc."""
        return self._add_recipients(RecipientType.BCC, addresses, name)

    def set_to(self, addresses: Optional[Iterable[str]]) -> "MessageBuilder":
        """Replace all To recipients with a validated batch."""
        return self._set_recipients(RecipientType.TO, addresses)

    def set_cc(self, addresses: Optional[Iterable[str]]) -> "MessageBuilder":
        """Replace all Cc recipients with a validated batch."""
        return self._set_recipients(RecipientType.CC, addresses)

    def set_bcc(self, addresses: Optional[Iterable[str]]) -> "MessageBuilder":
        """Replace all Bcc recipients with a validated batch."""
        return self._set_recipients(RecipientType.BCC, addresses)

    def add_reply_to(self, address: Optional[str], name: Optional[str] = None) -> "MessageBuilder":
        """
        Append a Reply-To address.

        Args:
            address: Address string
            name: Optional display name carried on the address
        """
        self._pending.reply_to_list.append(self.address_validator.parse(address, name))
        self._touch()
        return self

    def set_reply_to(self, addresses: Optional[Iterable[str]]) -> "MessageBuilder":
        """Replace all Reply-To addresses with a validated batch."""
        self._pending.reply_to_list[:] = self.address_validator.parse_all(addresses)
        self._touch()
        return self

    def get_from_address(self) -> Optional[Address]:
        return self._pending.from_address

    def get_to_addresses(self) -> List[Address]:
        return list(self._pending.to_list)

    def get_cc_addresses(self) -> List[Address]:
        return list(self._pending.cc_list)

    def get_bcc_addresses(self) -> List[Address]:
        return list(self._pending.bcc_list)

    def get_reply_to_addresses(self) -> List[Address]:
        return list(self._pending.reply_to_list)

    # Headers and content

    def add_header(self, name: Optional[str], value: Optional[str]) -> "MessageBuilder":
        """
        Add or overwrite a header.

        Raises:
            ValueError: If name or value is None or empty
        """
        self._check_header(name, value)
        self._pending.headers[name] = value
        self._touch()
        return self

    def set_headers(self, headers: Mapping[str, str]) -> "MessageBuilder":
        """
        Replace all headers.

        Raises:
            ValueError: If any name or value is None or empty (nothing is replaced)
        """
        for name, value in headers.items():
            self._check_header(name, value)

        self._pending.headers = dict(headers)
        self._touch()
        return self

    def get_headers(self) -> Dict[str, str]:
        return dict(self._pending.headers)

    def get_header(self, name: str) -> Optional[str]:
        return self._pending.headers.get(name)

    def set_subject(self, subject: Optional[str]) -> "MessageBuilder":
        self._pending.subject = subject
        self._touch()
        return self

    def get_subject(self) -> Optional[str]:
        return self._pending.subject

    def set_content(
        self,
        content: Optional[Union[str, bytes]],
        content_type: Optional[str] = None,
    ) -> "MessageBuilder":
        """
        Set the body content and, optionally, its MIME type.

        Args:
            content: Body content
            content_type: MIME type; a charset parameter also sets the charset
        """
        if content_type is not None:
            self._update_content_type(content_type)
        self._pending.content = content
        self._touch()
        return self

    def set_content_type(self, content_type: Optional[str]) -> "MessageBuilder":
        """Set the MIME type independently of the content."""
        self._update_content_type(content_type)
        self._touch()
        return self

    def get_content(self) -> Optional[Union[str, bytes]]:
        return self._pending.content

    def get_content_type(self) -> Optional[str]:
        return self._pending.content_type

    def set_charset(self, charset: str) -> "MessageBuilder":
        """
        Set the charset used for text content.

        Raises:
            ValueError: If the charset is empty or unknown
        """
        self._pending.charset = normalize_charset(charset)
        self._touch()
        return self

    def get_charset(self) -> Optional[str]:
        return self._pending.charset

    def set_sent_date(self, sent_date: Optional[datetime]) -> "MessageBuilder":
        """Set the Date header value; None restores the build-time default."""
        self._pending.sent_date = sent_date
        self._touch()
        return self

    def get_sent_date(self) -> datetime:
        """Return the configured sent date, or the current time if none was set."""
        if self._pending.sent_date is None:
            return datetime.now().astimezone()
        return self._pending.sent_date

    # Transport settings

    def set_host_name(self, host_name: Optional[str]) -> "MessageBuilder":
        """Set the SMTP host; None or an empty string clears it."""
        self._settings.host = normalize_optional(host_name)
        self._touch()
        return self

    def get_host_name(self) -> Optional[str]:
        """
        Return the configured host.

        Returns:
            Explicit host if set, else the host property of a caller-supplied
            session, else None
        """
        if self._settings.host:
            return self._settings.host
        if self._pending.explicit_session is not None:
            return self._pending.explicit_session.get_property(MAIL_HOST)
        return None

    def set_smtp_port(self, port: int) -> "MessageBuilder":
        """
        Set the SMTP port.

        Raises:
            ValueError: If port is less than 1
        """
        if port < 1:
            raise ValueError(f"Cannot connect to a port number that is less than 1 ( {port} )")

        self._settings.smtp_port = port
        self._touch()
        return self

    def get_smtp_port(self) -> Optional[int]:
        return self._settings.smtp_port

    def set_ssl_smtp_port(self, port: int) -> "MessageBuilder":
        """Set the port used when SSL is enabled on connect."""
        if port < 1:
            raise ValueError(f"Cannot connect to a port number that is less than 1 ( {port} )")

        self._settings.ssl_smtp_port = port
        self._touch()
        return self

    def get_ssl_smtp_port(self) -> int:
        return self._settings.ssl_smtp_port or self.defaults.ssl_smtp_port

    def set_authentication(self, username: Optional[str], password: Optional[str]) -> "MessageBuilder":
        """Set SMTP AUTH credentials; both are needed for AUTH to be enabled."""
        self._settings.auth_username = username
        self._settings.auth_password = password
        self._touch()
        return self

    def set_ssl_on_connect(self, enabled: bool) -> "MessageBuilder":
        self._settings.ssl_on_connect = enabled
        self._touch()
        return self

    def is_ssl_on_connect(self) -> bool:
        return self._settings.ssl_on_connect

    def set_start_tls_enabled(self, enabled: bool) -> "MessageBuilder":
        self._settings.start_tls_enabled = enabled
        self._touch()
        return self

    def is_start_tls_enabled(self) -> bool:
        return self._settings.start_tls_enabled

    def set_start_tls_required(self, required: bool) -> "MessageBuilder":
        self._settings.start_tls_required = required
        self._touch()
        return self

    def is_start_tls_required(self) -> bool:
        return self._settings.start_tls_required

    def set_ssl_check_server_identity(self, enabled: bool) -> "MessageBuilder":
        self._settings.ssl_check_server_identity = enabled
        self._touch()
        return self

    def set_socket_connection_timeout(self, timeout_ms: int) -> "MessageBuilder":
        """Set the connection timeout in milliseconds."""
        self._settings.socket_connection_timeout_ms = timeout_ms
        self._touch()
        return self

    def get_socket_connection_timeout(self) -> int:
        if self._settings.socket_connection_timeout_ms is None:
            return self.defaults.socket_connection_timeout_ms
        return self._settings.socket_connection_timeout_ms

    def set_socket_timeout(self, timeout_ms: int) -> "MessageBuilder":
        """Set the socket read/write timeout in milliseconds."""
        self._settings.socket_timeout_ms = timeout_ms
        self._touch()
        return self

    def get_socket_timeout(self) -> int:
        if self._settings.socket_timeout_ms is None:
            return self.defaults.socket_timeout_ms
        return self._settings.socket_timeout_ms

    def set_bounce_address(self, address: Optional[str]) -> "MessageBuilder":
        """
        Set the envelope sender used for bounces; None clears it.

        Raises:
            InvalidAddressError: If address is given but malformed
        """
        if address is None:
            self._settings.bounce_address = None
        else:
            self._settings.bounce_address = self.address_validator.parse(address).addr_spec
        self._touch()
        return self

    def get_bounce_address(self) -> Optional[str]:
        return self._settings.bounce_address

    def set_debug(self, debug: bool) -> "MessageBuilder":
        self._settings.debug = debug
        self._touch()
        return self

    def set_mail_session(self, session: MailSession) -> "MessageBuilder":
        """
        Supply a pre-built session that takes precedence over derived settings.

        Raises:
            ValueError: If session is None
        """
        if session is None:
            raise ValueError("no mail session supplied")

        self._pending.explicit_session = self.session_resolver.adopt(session)
        self._touch()
        return self

    def get_mail_session(self) -> MailSession:
        """
        Return the session described by the current settings.

        Returns:
            Supplied session with configured settings layered on top, or a
            session derived from the settings alone

        Raises:
            MissingHostnameError: If no session was supplied and no host is set
        """
        if self._pending.explicit_session is not None:
            return self.session_resolver.layer(self._pending.explicit_session, self._settings)
        return self.session_resolver.resolve(self._settings)

    # Build

    def build(self) -> MessageSink:
        """
        Assemble the message from the accumulated state.

        Returns:
            The built message (a MimeMessage unless a custom factory was given)

        Raises:
            BuildAlreadyCompletedError: If this builder already built a message
            MissingFromError: If no sender is set
            MissingRecipientsError: If To, Cc and Bcc are all empty
            BuildFailedError: If no mail session can be resolved

        Notes:
            - Checks run in the order listed above
            - A failed build leaves the builder unchanged and buildable
        """
        pending = self._pending

        if pending.built:
            raise BuildAlreadyCompletedError()
        if pending.from_address is None:
            raise MissingFromError()
        if not pending.has_recipients():
            raise MissingRecipientsError()

        try:
            session = self.session_resolver.resolve(self._settings, pending.explicit_session)
        except MissingHostnameError as e:
            raise BuildFailedError(str(e)) from e

        message = self.message_factory(session)

        message.set_from(pending.from_address)
        for recipient_type in RecipientType:
            addresses = pending.recipients(recipient_type)
            if addresses:
                message.set_recipients(recipient_type, addresses)
        if pending.reply_to_list:
            message.set_reply_to(pending.reply_to_list)

        if not is_empty(pending.subject):
            message.set_subject(pending.subject, pending.charset)
        message.set_body(pending.content, pending.content_type, pending.charset)
        message.set_sent_date(self.get_sent_date())

        for name, value in pending.headers.items():
            message.add_raw_header(name, value)

        self._message = message
        pending.state = BuildState.BUILT

        logger.info(
            "Built message from %s to %d recipient(s)",
            pending.from_address.addr_spec,
            len(pending.to_list) + len(pending.cc_list) + len(pending.bcc_list),
        )
        return message

    def get_mime_message(self) -> Optional[MessageSink]:
        """Return the built message, or None before a successful build."""
        return self._message

    def is_built(self) -> bool:
        return self._pending.built

    def get_state(self) -> BuildState:
        return self._pending.state

    # Internals

    def _add_recipients(
        self,
        recipient_type: RecipientType,
        addresses: AddressInput,
        name: Optional[str],
    ) -> "MessageBuilder":
        if isinstance(addresses, str):
            parsed = [self.address_validator.parse(addresses, name)]
        else:
            parsed = self.address_validator.parse_all(addresses)

        self._pending.recipients(recipient_type).extend(parsed)
        self._touch()
        return self

    def _set_recipients(
        self,
        recipient_type: RecipientType,
        addresses: Optional[Iterable[str]],
    ) -> "MessageBuilder":
        parsed = self.address_validator.parse_all(addresses)
        self._pending.recipients(recipient_type)[:] = parsed
        self._touch()
        return self

    def _update_content_type(self, content_type: Optional[str]) -> None:
        if is_empty(content_type):
            self._pending.content_type = None
            return

        _, _, charset = parse_content_type(content_type)
        if charset:
            self._pending.charset = normalize_charset(charset)
        self._pending.content_type = content_type

    def _check_header(self, name: Optional[str], value: Optional[str]) -> None:
        if is_empty(name):
            raise ValueError("Name can not be null or empty")
        if is_empty(value):
            raise ValueError("Value can not be null or empty")

    def _touch(self) -> None:
        if self._pending.state is BuildState.EMPTY:
            self._pending.state = BuildState.POPULATED
