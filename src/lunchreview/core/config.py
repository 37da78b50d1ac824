#!/usr/bin/env python3
"""
Configuration Management for Lunch Money Review

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production); parsing of
remote data is strict outside production so malformed records fail loudly.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class LunchMoneyConfig:
    """Lunch Money API configuration."""

    api_token: str | None = None
    base_url: str = "https://dev.lunchmoney.app"
    timeout: float = 30.0


@dataclass
class Config:
    """
    Main configuration class for the review tool.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment
    lunchmoney: LunchMoneyConfig = field(default_factory=LunchMoneyConfig)

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("LUNCHREVIEW_ENV", "development"))

        lunchmoney = LunchMoneyConfig(
            api_token=os.getenv("LUNCHMONEY_API_TOKEN"),
            base_url=os.getenv("LUNCHMONEY_BASE_URL", "https://dev.lunchmoney.app").rstrip("/"),
            timeout=float(os.getenv("LUNCHMONEY_TIMEOUT", "30")),
        )

        return cls(
            environment=env,
            lunchmoney=lunchmoney,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def strict_parsing(self) -> bool:
        """Whether malformed transaction records raise instead of being dropped."""
        return self.environment != Environment.PRODUCTION

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if self.environment == Environment.PRODUCTION and not self.lunchmoney.api_token:
            errors.append("LUNCHMONEY_API_TOKEN is required in production")

        if self.lunchmoney.timeout <= 0:
            errors.append("Lunch Money timeout must be positive")

        if not self.lunchmoney.base_url.startswith(("http://", "https://")):
            errors.append(f"Invalid Lunch Money base URL: {self.lunchmoney.base_url}")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from external libraries in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("urllib3").setLevel(logging.WARNING)
            logging.getLogger("requests").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return ["lunchmoney.api_token"]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***"
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        # Validate configuration
        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
