"""Configuration module for loading and managing indexer settings"""
from typing import Dict, Any, Optional
from .lib.load_settings_conf import (
    load_settings_conf,
    validate_settings,
    contract_sources,
    SettingsError,
    DEFAULTS,
    SOURCE_SETTINGS,
)
import configparser

__all__ = [
    'load_config',
    'get_settings',
    'load_settings_conf',
    'validate_settings',
    'contract_sources',
    'SettingsError',
    'DEFAULTS',
    'SOURCE_SETTINGS',
]

_settings_conf: Optional[Dict[str, Any]] = None

def load_config(config_path: Optional[str] = None) -> configparser.ConfigParser:
    """Load configuration from file.

    Args:
        config_path: Optional path to config file. If not provided,
                    will look for settings.conf in current directory.

    Returns:
        ConfigParser object with loaded settings
    """
    config = configparser.ConfigParser(defaults=DEFAULTS)

    if config_path:
        config.read(config_path)
    else:
        config.read('settings.conf')

    return config

def get_settings(settings_path: str = ".") -> Dict[str, Any]:
    """Load settings.conf once and return the cached, validated settings.

    Raises:
        SettingsError: If the settings file is missing or invalid
    """
    global _settings_conf

    if _settings_conf is None:
        try:
            _settings_conf = load_settings_conf(settings_path)
        except SettingsError as e:
            # Re-raise the error but provide more context
            raise SettingsError(
                f"Configuration Error\n"
                "=================\n\n"
                f"{str(e)}\n\n"
                "Please ensure settings.conf is properly configured.\n"
                "See settings.conf.example for the available settings."
            ) from e
    return _settings_conf
