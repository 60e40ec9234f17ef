# -*- coding: utf-8 -*-
"""
API and Wizard Configuration
============================

Provides typed settings for the resource API backend and the show wizard:
- Environment variable support
- Settings grouped per concern
- A process-wide settings cache with test hooks
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional, Any
from abc import ABC, abstractmethod
from pathlib import Path

# Load environment variables from .env file
try:
    from dotenv import load_dotenv
    env_path = Path(__file__).parent.parent / '.env'
    load_dotenv(dotenv_path=env_path)
except ImportError:
    pass  # dotenv not installed, will use system environment variables

# Set up module logger
logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Provider
# ============================================================================

class ConfigurationProvider(ABC):
    """Abstract base for configuration providers."""

    @abstractmethod
    def get_value(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key."""
        pass


class EnvironmentConfigProvider(ConfigurationProvider):
    """Provides configuration from environment variables."""

    def __init__(self, prefix: str = ""):
        """
        Initialize provider with optional prefix.

        Args:
            prefix: Prefix for environment variables (e.g., "SHOW_WIZARD_")
        """
        self.prefix = prefix

    def get_value(self, key: str, default: Any = None) -> Any:
        """Get value from environment variables."""
        env_key = f"{self.prefix}{key}" if self.prefix else key
        value = os.getenv(env_key, default)
        return value

    def get_int(self, key: str, default: int = 0) -> int:
        """Get integer value from environment."""
        value = self.get_value(key, str(default))
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get boolean value from environment."""
        value = self.get_value(key, str(default))
        if isinstance(value, bool):
            return value
        return str(value).lower() in ('true', '1', 'yes', 'on')


# ============================================================================
# Settings Classes
# ============================================================================

@dataclass
class ApiSettings:
    """Resource API connection settings."""

    # Connection
    base_url: str = "http://localhost:3091/api"
    timeout: int = 15

    # Bearer token handed over by the authentication layer
    access_token: Optional[str] = None

    # Gateway mode
    gateway_mode: str = "api"  # "api" or "mock"

    @classmethod
    def from_env(cls, config_provider: Optional[ConfigurationProvider] = None) -> "ApiSettings":
        """Create settings from environment variables."""
        if config_provider is None:
            config_provider = EnvironmentConfigProvider()

        return cls(
            base_url=config_provider.get_value("API_BASE_URL", "http://localhost:3091/api"),
            timeout=config_provider.get_int("API_TIMEOUT", 15),
            access_token=config_provider.get_value("API_TOKEN", None),
            gateway_mode=config_provider.get_value("GATEWAY_MODE", "api"),
        )


@dataclass
class WizardSettings:
    """
    Show wizard behaviour settings.

    strict_preconditions: require at least one event before showtimes and
        at least one category before price tiers.
    gate_advance: refuse to advance past a step whose completion
        requirement is not met.
    rollback_on_abandon: delete created resources when a session is
        abandoned instead of leaving them on the server.
    reference_prefix: first part of the review reference number.
    """

    strict_preconditions: bool = True
    gate_advance: bool = True
    rollback_on_abandon: bool = False
    default_currency: str = "INR"
    reference_prefix: str = "SHW"

    @classmethod
    def from_env(cls, config_provider: Optional[ConfigurationProvider] = None) -> "WizardSettings":
        """Create settings from environment variables."""
        if config_provider is None:
            config_provider = EnvironmentConfigProvider()

        return cls(
            strict_preconditions=config_provider.get_bool("WIZARD_STRICT_PRECONDITIONS", True),
            gate_advance=config_provider.get_bool("WIZARD_GATE_ADVANCE", True),
            rollback_on_abandon=config_provider.get_bool("WIZARD_ROLLBACK_ON_ABANDON", False),
            default_currency=config_provider.get_value("DEFAULT_CURRENCY", "INR"),
            reference_prefix=config_provider.get_value("WIZARD_REFERENCE_PREFIX", "SHW"),
        )


@dataclass
class ApplicationSettings:
    """Combined application settings."""

    api: ApiSettings = field(default_factory=ApiSettings)
    wizard: WizardSettings = field(default_factory=WizardSettings)

    # Metadata
    config_source: str = "environment"

    @classmethod
    def from_env(cls) -> "ApplicationSettings":
        """Create all settings from environment."""
        config_provider = EnvironmentConfigProvider()

        return cls(
            api=ApiSettings.from_env(config_provider),
            wizard=WizardSettings.from_env(config_provider),
            config_source="environment"
        )

    @classmethod
    def with_defaults(cls) -> "ApplicationSettings":
        """Create settings with all defaults."""
        return cls(
            api=ApiSettings(),
            wizard=WizardSettings(),
            config_source="defaults"
        )


# ============================================================================
# Global Settings Manager (Singleton Pattern)
# ============================================================================

class SettingsManager:
    """Manages global application settings (Singleton)."""

    _instance: Optional["SettingsManager"] = None
    _settings: Optional[ApplicationSettings] = None

    def __new__(cls):
        """Implement Singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_settings(cls) -> ApplicationSettings:
        """
        Get application settings (creates if needed).

        Returns:
            ApplicationSettings instance
        """
        instance = cls()
        if instance._settings is None:
            instance._settings = ApplicationSettings.from_env()
            logger.info(f"Settings loaded from {instance._settings.config_source}")
        return instance._settings

    @classmethod
    def set_settings(cls, settings: ApplicationSettings):
        """Set custom settings (for testing)."""
        instance = cls()
        instance._settings = settings

    @classmethod
    def reset(cls):
        """Reset settings (for testing)."""
        instance = cls()
        instance._settings = None


# ============================================================================
# Public API
# ============================================================================

def get_api_settings() -> ApiSettings:
    """
    Get API settings.

    Example:
        >>> settings = get_api_settings()
        >>> print(settings.base_url)
        http://localhost:3091/api
    """
    return SettingsManager.get_settings().api


def get_wizard_settings() -> WizardSettings:
    """Get wizard settings."""
    return SettingsManager.get_settings().wizard


def reset_settings():
    """Reset all settings (for testing)."""
    SettingsManager.reset()
