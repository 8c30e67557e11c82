"""Derivation of transport sessions from explicit settings."""

import logging
from typing import Dict, Optional

from mailcompose.config.compose_config import (
    DEFAULT_SESSION_DEFAULTS,
    SessionDefaults,
    TransportSettings,
)
from mailcompose.exceptions import MissingHostnameError
from mailcompose.models.mail_session import (
    MAIL_DEBUG,
    MAIL_HOST,
    MAIL_PORT,
    MAIL_SMTP_AUTH,
    MAIL_SMTP_CONNECTIONTIMEOUT,
    MAIL_SMTP_FROM,
    MAIL_SMTP_PASSWORD,
    MAIL_SMTP_SOCKET_FACTORY_PORT,
    MAIL_SMTP_SSL_CHECKSERVERIDENTITY,
    MAIL_SMTP_SSL_ENABLE,
    MAIL_SMTP_TIMEOUT,
    MAIL_SMTP_USER,
    MAIL_TRANSPORT_PROTOCOL,
    MAIL_TRANSPORT_STARTTLS_ENABLE,
    MAIL_TRANSPORT_STARTTLS_REQUIRED,
    Authenticator,
    DefaultAuthenticator,
    MailSession,
)

logger = logging.getLogger(__name__)


def _flag(value: bool) -> str:
    return "true" if value else "false"


class SessionResolver:
    """
    Produces the authoritative mail session for a build.

    A caller-supplied session always wins over derived settings. Without
    one, a fresh session is computed from TransportSettings on every call.
    """

    def __init__(self, defaults: SessionDefaults = DEFAULT_SESSION_DEFAULTS):
        """
        Initialize resolver.

        Args:
            defaults: Immutable table of default values
        """
        self.defaults = defaults

    def resolve(
        self,
        config: TransportSettings,
        explicit_session: Optional[MailSession] = None,
    ) -> MailSession:
        """
        Resolve the session to use for a message.

        Args:
            config: Explicit transport settings
            explicit_session: Pre-built session supplied by the caller

        Returns:
            explicit_session unchanged when given, else a new MailSession

        Raises:
            MissingHostnameError: If no explicit session and no host is configured
        """
        if explicit_session is not None:
            logger.debug("Using caller-supplied mail session")
            return explicit_session

        if not config.host:
            raise MissingHostnameError()

        properties = self.build_properties(config)
        logger.debug("Resolved mail session for %s:%s", config.host, properties.get(MAIL_PORT))
        return MailSession.get_instance(properties, self.build_authenticator(config))

    def build_properties(self, config: TransportSettings) -> Dict[str, str]:
        """
        Compute the property mapping for the given settings.

        Args:
            config: Transport settings with a host

        Returns:
            Property mapping with string values
        """
        ssl_port = config.ssl_smtp_port or self.defaults.ssl_smtp_port
        debug = self.defaults.debug if config.debug is None else config.debug

        properties = {
            MAIL_TRANSPORT_PROTOCOL: self.defaults.protocol,
            MAIL_HOST: config.host,
            MAIL_DEBUG: _flag(debug),
            MAIL_SMTP_SSL_ENABLE: _flag(config.ssl_on_connect),
            MAIL_TRANSPORT_STARTTLS_ENABLE: _flag(config.start_tls_enabled),
            MAIL_TRANSPORT_STARTTLS_REQUIRED: _flag(config.start_tls_required),
            MAIL_SMTP_CONNECTIONTIMEOUT: str(self._connection_timeout(config)),
            MAIL_SMTP_TIMEOUT: str(self._socket_timeout(config)),
        }

        if config.smtp_port is not None:
            properties[MAIL_PORT] = str(config.smtp_port)

        if config.ssl_on_connect:
            properties.setdefault(MAIL_PORT, str(ssl_port))
            properties[MAIL_SMTP_SOCKET_FACTORY_PORT] = str(ssl_port)

        if (config.ssl_on_connect or config.start_tls_enabled) and config.ssl_check_server_identity:
            properties[MAIL_SMTP_SSL_CHECKSERVERIDENTITY] = "true"

        if config.has_credentials():
            properties[MAIL_SMTP_AUTH] = "true"

        if config.bounce_address:
            properties[MAIL_SMTP_FROM] = config.bounce_address

        return properties

    def build_authenticator(self, config: TransportSettings) -> Optional[Authenticator]:
        """Return an authenticator when both credentials are configured."""
        if not config.has_credentials():
            return None
        return DefaultAuthenticator(config.auth_username, config.auth_password)

    def layer(self, explicit_session: MailSession, config: TransportSettings) -> MailSession:
        """
        Re-apply configured settings on top of a caller-supplied session.

        Args:
            explicit_session: Session supplied by the caller
            config: Explicit transport settings

        Returns:
            New MailSession; the supplied session is not modified

        Notes:
            - Only settings the caller actually configured are applied
            - Properties of the supplied session are otherwise preserved
        """
        properties = explicit_session.get_properties()
        authenticator = explicit_session.authenticator

        if config.host:
            properties[MAIL_HOST] = config.host
        if config.smtp_port is not None:
            properties[MAIL_PORT] = str(config.smtp_port)
        if config.ssl_on_connect:
            properties[MAIL_SMTP_SSL_ENABLE] = "true"
        if config.start_tls_enabled:
            properties[MAIL_TRANSPORT_STARTTLS_ENABLE] = "true"
        if config.has_credentials():
            properties[MAIL_SMTP_AUTH] = "true"
            authenticator = self.build_authenticator(config)

        return MailSession.get_instance(properties, authenticator)

    def adopt(self, session: MailSession) -> MailSession:
        """
        Attach an authenticator to a session that declares its own credentials.

        Args:
            session: Caller-supplied session

        Returns:
            A copy with a DefaultAuthenticator when mail.smtp.auth is "true" and
            mail.smtp.user / mail.smtp.password are present, else session itself
        """
        if (session.get_property(MAIL_SMTP_AUTH) or "").lower() != "true":
            return session

        username = session.get_property(MAIL_SMTP_USER)
        password = session.get_property(MAIL_SMTP_PASSWORD)
        if not username or not password:
            return session

        return MailSession.get_instance(session.properties, DefaultAuthenticator(username, password))

    def _connection_timeout(self, config: TransportSettings) -> int:
        if config.socket_connection_timeout_ms is None:
            return self.defaults.socket_connection_timeout_ms
        return config.socket_connection_timeout_ms

    def _socket_timeout(self, config: TransportSettings) -> int:
        if config.socket_timeout_ms is None:
            return self.defaults.socket_timeout_ms
        return config.socket_timeout_ms
