"""JSON configuration file lookup for mailcompose."""

import json
import logging
from pathlib import Path
from typing import Iterator, Optional

from pydantic import ValidationError

from mailcompose.exceptions import ConfigurationError
from .compose_config import AppConfig, expand_path

logger = logging.getLogger(__name__)


class ConfigLoader:
    """
    Finds, parses and caches the mailcompose settings file.

    An explicit path replaces the search list. The first existing file wins;
    with none present the built-in defaults are used.
    """

    DEFAULT_CONFIG_PATHS = [
        Path("~/.mailcompose/config.json"),
        Path("config/mailcompose.json"),
    ]

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path
        self._config: Optional[AppConfig] = None

    def load_app_config(self) -> AppConfig:
        """
        Return the settings, reading the file on first use.

        Raises:
            ConfigurationError: If the file found is not JSON or fails validation
        """
        if self._config is None:
            self._config = self._read()
        return self._config

    def reload(self) -> AppConfig:
        """Drop the cached settings and read them again."""
        self._config = None
        return self.load_app_config()

    def _candidates(self) -> Iterator[Path]:
        paths = [self.config_path] if self.config_path else self.DEFAULT_CONFIG_PATHS
        for path in paths:
            path = expand_path(path)
            if path.exists():
                yield path

    def _read(self) -> AppConfig:
        path = next(self._candidates(), None)
        if path is None:
            logger.debug("No mailcompose config file, using defaults")
            return AppConfig()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            config = AppConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            raise ConfigurationError(f"Invalid config in {path}: {e}") from e

        logger.debug("Loaded mailcompose config from %s", path)
        return config
