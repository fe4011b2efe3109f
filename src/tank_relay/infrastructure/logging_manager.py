"""
Environment-aware logging management for the Tank Relay server.

Logging is configured from a YAML dictConfig file when one is available
and falls back to a console handler otherwise. An optional log file is
attached on top of either.

Environment Log Levels:
- Development: DEBUG and above
- Staging: INFO and above
- Production: WARNING and above
"""

import logging
import logging.config
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Third-party loggers that stay at WARNING regardless of environment
NOISY_LOGGERS = (
    "websockets",
    "websockets.server",
    "websockets.client",
    "asyncio",
)


class LogLevel(Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def parse(cls, value: str) -> "LogLevel":
        """Return the member matching ``value`` case-insensitively."""
        return cls(value.strip().upper())


class Environment(Enum):
    """Environment enumeration."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LoggingManager:
    """Centralized logging management with production controls."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize logging manager.

        Args:
            config_path: Path to YAML configuration file. If None, uses
                ``LOG_CONFIG`` from the environment or the packaged
                ``logging.yaml``.
        """
        if config_path is None:
            env_path = os.getenv("LOG_CONFIG")
            config_path = (
                Path(env_path)
                if env_path
                else Path(__file__).parent.parent / "logging.yaml"
            )

        self.config_path = config_path
        self._config_cache: Optional[Dict[str, Any]] = None
        self._environment = self._detect_environment()
        self._production_mode = self._environment == Environment.PRODUCTION

    def _detect_environment(self) -> Environment:
        """Detect current environment from environment variables."""
        env = os.getenv("ENVIRONMENT", "development").lower()

        if env in ["prod", "production"]:
            return Environment.PRODUCTION
        elif env in ["staging", "stage"]:
            return Environment.STAGING
        else:
            return Environment.DEVELOPMENT

    def _load_yaml_config(self) -> Optional[Dict[str, Any]]:
        """Load YAML logging configuration."""
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            return None

        try:
            with open(self.config_path, "r") as f:
                config = yaml.safe_load(f)
        except (yaml.YAMLError, IOError) as e:
            logging.getLogger(__name__).warning(
                f"Failed to load YAML logging config {self.config_path}: {e}"
            )
            return None

        if not isinstance(config, dict):
            return None

        self._config_cache = config
        return config

    def _get_environment_log_level(self) -> str:
        """Get appropriate log level for current environment."""
        if self._production_mode:
            return LogLevel.WARNING.value
        elif self._environment == Environment.STAGING:
            return LogLevel.INFO.value
        else:
            return LogLevel.DEBUG.value

    def _apply_production_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply production-specific overrides to configuration."""
        if not self._production_mode:
            return config

        env_log_level = self._get_environment_log_level()

        if "root" in config:
            config["root"]["level"] = env_log_level

        for logger_name, logger_config in config.get("loggers", {}).items():
            if logger_name in NOISY_LOGGERS:
                continue
            logger_config["level"] = env_log_level

        return config

    def _ensure_log_directories(self, config: Dict[str, Any]) -> None:
        """Create parent directories for any file handlers in ``config``."""
        for handler_config in config.get("handlers", {}).values():
            filename = handler_config.get("filename")
            if filename:
                Path(filename).parent.mkdir(parents=True, exist_ok=True)

    def _formatter(self) -> logging.Formatter:
        if self._production_mode:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            fmt = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
        return logging.Formatter(fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def _attach_file_handler(self, logger: logging.Logger, log_file: str) -> None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.WARNING if self._production_mode else logging.DEBUG)
        file_handler.setFormatter(self._formatter())
        logger.addHandler(file_handler)

    @property
    def environment(self) -> Environment:
        return self._environment

    def setup_logging(
        self,
        component_name: str,
        log_level: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> logging.Logger:
        """
        Set up logging for a component with environment-aware configuration.

        Args:
            component_name: Name of the component
            log_level: Override log level (if None, uses environment-appropriate level)
            log_file: Extra file to log to, on top of the configured handlers

        Returns:
            Configured logger instance
        """
        if log_level is None:
            log_level = self._get_environment_log_level()

        config = self._load_yaml_config()

        if config:
            config = self._apply_production_overrides(dict(config))
            self._ensure_log_directories(config)
            logging.config.dictConfig(config)

            logger = logging.getLogger(component_name)
            logger.setLevel(getattr(logging, log_level.upper()))
        else:
            logger = self._setup_basic_logging(component_name, log_level)

        if log_file:
            self._attach_file_handler(logger, log_file)

        self._suppress_noisy_loggers()
        logger.debug(f"Logging configured for {self._environment.value} environment")
        return logger

    def _setup_basic_logging(self, component_name: str, log_level: str) -> logging.Logger:
        """Set up a console handler when YAML config is not available."""
        logger = logging.getLogger(component_name)
        logger.setLevel(getattr(logging, log_level.upper()))
        logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logger.level)
        console_handler.setFormatter(self._formatter())
        logger.addHandler(console_handler)
        return logger

    def _suppress_noisy_loggers(self):
        """Suppress noisy third-party library loggers."""
        for logger_name in NOISY_LOGGERS:
            logging.getLogger(logger_name).setLevel(logging.WARNING)


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(
    component_name: str,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Set up logging for a component (convenience function)."""
    return _logging_manager.setup_logging(component_name, log_level, log_file)


def get_logger(component_name: str) -> logging.Logger:
    return logging.getLogger(component_name)
