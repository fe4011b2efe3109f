"""
Configuration management for the Tank Relay server.

Settings come from the process environment, optionally seeded from a
``.env`` file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from ..infrastructure.exceptions import ConfigurationError, ValidationError
from ..infrastructure.logging_manager import LogLevel

logger = logging.getLogger(__name__)


@dataclass
class RelayConfig:
    """Runtime configuration for the relay server."""

    host: str = "0.0.0.0"
    port: int = 3000

    # Directory served over plain HTTP next to the WebSocket endpoint
    public_dir: str = "public"

    ping_interval: int = 30
    max_connections: int = 100
    max_message_size: int = 2**20

    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Post-initialization validation."""
        if not 0 <= self.port <= 65535:
            raise ValidationError(f"PORT must be between 0 and 65535, got {self.port}")
        if self.ping_interval <= 0:
            raise ValidationError("PING_INTERVAL must be positive")
        if self.max_connections <= 0:
            raise ValidationError("MAX_CONNECTIONS must be positive")
        if self.max_message_size <= 0:
            raise ValidationError("MAX_MESSAGE_SIZE must be positive")
        try:
            self.log_level = LogLevel.parse(self.log_level).value
        except ValueError:
            raise ValidationError(f"Invalid LOG_LEVEL: {self.log_level!r}")


class RelayConfigManager:
    """Environment-backed configuration manager."""

    def __init__(self, env_file_path: str = ".env"):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to environment file
        """
        self.env_file_path = env_file_path
        self._load_environment()

    def _load_environment(self):
        """Load environment variables from file."""
        if os.path.exists(self.env_file_path):
            load_dotenv(dotenv_path=self.env_file_path)
            logger.info(f"Loaded environment from {self.env_file_path}")
        else:
            logger.debug(f"Environment file {self.env_file_path} not found")

    def _get_optional_env(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get optional environment variable.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            Environment variable value or default
        """
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def _get_int_env(self, key: str, default: int) -> int:
        """
        Get an integer environment variable.

        Raises:
            ConfigurationError: If the value is set but is not an integer
        """
        value = self._get_optional_env(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {value!r}")

    def get_config(self) -> RelayConfig:
        """
        Get the relay configuration.

        Returns:
            RelayConfig: Relay configuration

        Raises:
            ConfigurationError: If a value is malformed
        """
        try:
            config = RelayConfig(
                host=self._get_optional_env("HOST", "0.0.0.0"),
                port=self._get_int_env("PORT", 3000),
                public_dir=self._get_optional_env("PUBLIC_DIR", "public"),
                ping_interval=self._get_int_env("PING_INTERVAL", 30),
                max_connections=self._get_int_env("MAX_CONNECTIONS", 100),
                max_message_size=self._get_int_env("MAX_MESSAGE_SIZE", 2**20),
                log_level=self._get_optional_env("LOG_LEVEL", "INFO"),
                log_file=self._get_optional_env("LOG_FILE"),
            )
        except ConfigurationError as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        logger.info("Configuration loaded successfully")
        return config


# Global configuration manager instance
config_manager = RelayConfigManager()
