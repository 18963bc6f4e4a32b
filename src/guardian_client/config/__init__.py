"""Configuration module for the Guardian client."""

from .logger_config import setup_logging
from .settings import ConfigManager, GuardianConfig, get_config_manager, get_current_config

__all__ = ["GuardianConfig", "ConfigManager", "get_config_manager", "get_current_config", "setup_logging"]
