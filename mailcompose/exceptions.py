"""Exception hierarchy for message composition and session preparation."""

from typing import Optional


class EmailError(Exception):
    """Base class for all mailcompose errors."""

    default_message = "Email operation failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class InvalidAddressError(EmailError):
    """Raised when a single address is empty or malformed."""

    default_message = "Address provided was invalid"


class InvalidAddressListError(EmailError):
    """Raised when a batch of addresses is missing or empty."""

    default_message = "Address List provided was invalid"


class MissingFromError(EmailError):
    """Raised when building a message without a sender."""

    default_message = "From address required"


class MissingRecipientsError(EmailError):
    """Raised when building a message without any To, Cc or Bcc recipient."""

    default_message = "At least one receiver address required"


class MissingHostnameError(EmailError):
    """Raised when no hostname is available to derive a mail session."""

    default_message = "Cannot find valid hostname for mail session"


class BuildAlreadyCompletedError(EmailError):
    """Raised when a builder is asked to build a second message."""

    default_message = "The MimeMessage is already built."


class BuildFailedError(EmailError):
    """Raised when the mail session for a build cannot be resolved."""

    default_message = "Unable to build message: no valid mail session"


class ConfigurationError(EmailError):
    """Raised when a configuration file cannot be loaded."""

    default_message = "Invalid configuration"
