"""Configuration models for session defaults and transport settings."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mailcompose.utils.content_type import normalize_charset
from mailcompose.utils.text_utils import normalize_optional


class SessionDefaults(BaseModel):
    """Immutable table of defaults applied during session resolution."""

    model_config = ConfigDict(frozen=True)

    protocol: str = "smtp"
    ssl_smtp_port: int = Field(default=465, ge=1, le=65535)
    socket_connection_timeout_ms: int = Field(default=60000, ge=0)
    socket_timeout_ms: int = Field(default=60000, ge=0)
    debug: bool = False


DEFAULT_SESSION_DEFAULTS = SessionDefaults()


class TransportSettings(BaseModel):
    """Explicit transport settings accumulated by a builder."""

    model_config = ConfigDict(validate_assignment=True)

    host: Optional[str] = None
    smtp_port: Optional[int] = Field(default=None, ge=1, le=65535)
    ssl_smtp_port: Optional[int] = Field(default=None, ge=1, le=65535)
    ssl_on_connect: bool = False
    start_tls_enabled: bool = False
    start_tls_required: bool = False
    ssl_check_server_identity: bool = False
    auth_username: Optional[str] = None
    auth_password: Optional[str] = None
    socket_connection_timeout_ms: Optional[int] = Field(default=None, ge=0)
    socket_timeout_ms: Optional[int] = Field(default=None, ge=0)
    bounce_address: Optional[str] = None
    debug: Optional[bool] = None

    @field_validator("host", "auth_username", "auth_password", "bounce_address", mode="before")
    @classmethod
    def empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        return normalize_optional(v)

    def has_credentials(self) -> bool:
        """Return True when both username and password are present."""
        return bool(self.auth_username) and bool(self.auth_password)


class ComposeSettings(BaseModel):
    """Defaults applied to every new message."""

    charset: Optional[str] = None
    from_address: Optional[str] = None
    from_name: Optional[str] = None

    @field_validator("charset")
    @classmethod
    def validate_charset(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return normalize_charset(v)


class AppConfig(BaseModel):
    """Main application configuration."""

    schema_version: str = "1.0"
    session_defaults: SessionDefaults = Field(default_factory=SessionDefaults)
    transport: TransportSettings = Field(default_factory=TransportSettings)
    compose: ComposeSettings = Field(default_factory=ComposeSettings)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        if not v:
            raise ValueError("schema_version is required")
        return v


def expand_path(path: Path) -> Path:
    """Expand a user-relative config path."""
    return Path(path).expanduser()
