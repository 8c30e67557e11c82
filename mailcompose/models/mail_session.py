"""Transport session model and its property keys."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

MAIL_TRANSPORT_PROTOCOL = "mail.transport.protocol"
MAIL_HOST = "mail.smtp.host"
MAIL_PORT = "mail.smtp.port"
MAIL_SMTP_AUTH = "mail.smtp.auth"
MAIL_SMTP_USER = "mail.smtp.user"
MAIL_SMTP_PASSWORD = "mail.smtp.password"
MAIL_SMTP_SSL_ENABLE = "mail.smtp.ssl.enable"
MAIL_SMTP_SSL_CHECKSERVERIDENTITY = "mail.smtp.ssl.checkserveridentity"
MAIL_SMTP_SOCKET_FACTORY_PORT = "mail.smtp.socketFactory.port"
MAIL_TRANSPORT_STARTTLS_ENABLE = "mail.smtp.starttls.enable"
MAIL_TRANSPORT_STARTTLS_REQUIRED = "mail.smtp.starttls.required"
MAIL_SMTP_CONNECTIONTIMEOUT = "mail.smtp.connectiontimeout"
MAIL_SMTP_TIMEOUT = "mail.smtp.timeout"
MAIL_SMTP_FROM = "mail.smtp.from"
MAIL_DEBUG = "mail.debug"

SMTP = "smtp"


@dataclass(frozen=True)
class PasswordAuthentication:
    """Username/password pair handed to the transport on demand."""

    username: str
    password: str


class Authenticator(ABC):
    """Supplies credentials when the transport asks for them."""

    @abstractmethod
    def get_password_authentication(self) -> PasswordAuthentication:
        """
        Return the credentials for the current connection.

        Returns:
            PasswordAuthentication instance
        """
        pass


class DefaultAuthenticator(Authenticator):
    """Authenticator backed by a fixed username and password."""

    def __init__(self, username: str, password: str):
        self._authentication = PasswordAuthentication(username, password)

    def get_password_authentication(self) -> PasswordAuthentication:
        return self._authentication

    def __repr__(self) -> str:
        return f"DefaultAuthenticator(username={self._authentication.username!r})"


@dataclass
class MailSession:
    """
    Resolved transport-session configuration.

    Attributes:
        properties: Transport property mapping (all values are strings)
        authenticator: Optional credential supplier for SMTP AUTH
    """

    properties: Dict[str, str] = field(default_factory=dict)
    authenticator: Optional[Authenticator] = None

    @classmethod
    def get_instance(
        cls,
        properties: Mapping[str, str],
        authenticator: Optional[Authenticator] = None,
    ) -> "MailSession":
        """
        Create a session from a property mapping.

        Args:
            properties: Property mapping; copied, never shared
            authenticator: Optional credential supplier

        Returns:
            New MailSession instance
        """
        return cls(properties=dict(properties), authenticator=authenticator)

    def get_property(self, key: str) -> Optional[str]:
        """Return a single property value, or None if it is not set."""
        return self.properties.get(key)

    def get_properties(self) -> Dict[str, str]:
        """Return a copy of the property mapping."""
        return dict(self.properties)
