"""mailcompose - compose email messages and prepare SMTP sessions"""

from .config import AppConfig, ConfigLoader, SessionDefaults, TransportSettings
from .exceptions import (
    BuildAlreadyCompletedError,
    BuildFailedError,
    ConfigurationError,
    EmailError,
    InvalidAddressError,
    InvalidAddressListError,
    MissingFromError,
    MissingHostnameError,
    MissingRecipientsError,
)
from .models import (
    Authenticator,
    BuildState,
    DefaultAuthenticator,
    MailSession,
    PendingMessage,
    RecipientType,
)
from .services import (
    AddressValidator,
    MessageBuilder,
    MessageSink,
    MimeMessage,
    SessionResolver,
    SimpleMessageBuilder,
)

__version__ = "0.1.0"

__all__ = [
    "AddressValidator",
    "AppConfig",
    "Authenticator",
    "BuildAlreadyCompletedError",
    "BuildFailedError",
    "BuildState",
    "ConfigLoader",
    "ConfigurationError",
    "DefaultAuthenticator",
    "EmailError",
    "InvalidAddressError",
    "InvalidAddressListError",
    "MailSession",
    "MessageBuilder",
    "MessageSink",
    "MimeMessage",
    "MissingFromError",
    "MissingHostnameError",
    "MissingRecipientsError",
    "PendingMessage",
    "RecipientType",
    "SessionDefaults",
    "SessionResolver",
    "SimpleMessageBuilder",
    "TransportSettings",
]
