"""Configuration management for the Guardian client.

This module provides configuration for the enrollment client and allows
environment variable overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

DEFAULT_USER_AGENT = "GuardianClient/1.0.0"


@dataclass
class GuardianConfig:
    """Complete Guardian client configuration."""

    # Server settings
    base_url: str = ""
    timeout_seconds: int = 30
    user_agent: str = DEFAULT_USER_AGENT

    # Device identification (auto-detected when empty)
    device_identifier: str = ""
    device_name: str = ""

    # Logging
    log_level: str = "INFO"
    log_to_console: bool = True
    log_file: Optional[Path] = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"

    def __post_init__(self):
        """Apply environment variable overrides."""
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply configuration overrides from environment variables."""
        if base_url := os.getenv("GUARDIAN_BASE_URL"):
            self.base_url = base_url

        if timeout := os.getenv("GUARDIAN_TIMEOUT"):
            try:
                self.timeout_seconds = int(timeout)
            except ValueError:
                logger.warning(f"Invalid timeout: {timeout}")

        if device_identifier := os.getenv("GUARDIAN_DEVICE_IDENTIFIER"):
            self.device_identifier = device_identifier

        if device_name := os.getenv("GUARDIAN_DEVICE_NAME"):
            self.device_name = device_name

        if log_level := os.getenv("GUARDIAN_LOG_LEVEL"):
            self.log_level = log_level.upper()

        if log_file := os.getenv("GUARDIAN_LOG_FILE"):
            self.log_file = Path(log_file)

    def validate(self) -> tuple[bool, list[str]]:
        """Validate the configuration.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        errors = []

        if not self.base_url:
            errors.append("Base URL is required")
        elif not self.base_url.startswith(("http://", "https://")):
            errors.append("Base URL must use http or https")

        if self.timeout_seconds <= 0:
            errors.append("Timeout must be positive")

        return len(errors) == 0, errors


class ConfigManager:
    """Manages Guardian client configuration."""

    def __init__(self):
        self._config: Optional[GuardianConfig] = None

    def load_config(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        device_name: Optional[str] = None,
    ) -> GuardianConfig:
        """Load configuration with optional overrides.

        Explicit arguments win over environment variables.

        Args:
            base_url: Base URL override
            timeout_seconds: Request timeout override
            device_name: Device name override

        Returns:
            Configured GuardianConfig instance
        """
        config = GuardianConfig()

        if base_url:
            config.base_url = base_url

        if timeout_seconds:
            config.timeout_seconds = timeout_seconds

        if device_name:
            config.device_name = device_name

        self._config = config
        return config

    def get_config(self) -> Optional[GuardianConfig]:
        """Get current configuration."""
        return self._config

    def validate_config(self) -> tuple[bool, list[str]]:
        """Validate current configuration.

        Returns:
            Tuple of (is_valid, error_messages)
        """
        if not self._config:
            return False, ["No configuration loaded"]

        return self._config.validate()


# Global configuration manager instance
_config_manager = ConfigManager()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager."""
    return _config_manager


def get_current_config() -> Optional[GuardianConfig]:
    """Get the current configuration."""
    return _config_manager.get_config()
