"""Configuration management"""

from .compose_config import (
    DEFAULT_SESSION_DEFAULTS,
    AppConfig,
    ComposeSettings,
    SessionDefaults,
    TransportSettings,
)
from .config_loader import ConfigLoader

__all__ = [
    "DEFAULT_SESSION_DEFAULTS",
    "AppConfig",
    "ComposeSettings",
    "ConfigLoader",
    "SessionDefaults",
    "TransportSettings",
]
