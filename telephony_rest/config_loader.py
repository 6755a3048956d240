"""
ConfigLoader module for loading and validating TOML client configuration files
"""

import logging
import os
import tomllib
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any


DEFAULT_PAGE_SIZE = 50

DEFAULT_DOMAINS = {
    'api': 'https://api.twilio.com',
    'conversations': 'https://conversations.twilio.com',
    'pricing': 'https://pricing.twilio.com',
    'taskrouter': 'https://taskrouter.twilio.com',
}


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete"""
    pass


class EnvironmentVariableError(Exception):
    """Raised when required environment variables are missing"""
    pass


@dataclass
class ClientConfig:
    """Account context and transport settings passed explicitly to every operation"""
    account_sid: str
    authentication: Dict[str, Any] = field(default_factory=dict)
    domains: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DOMAINS))
    timeout_seconds: float = 30.0
    page_size: int = DEFAULT_PAGE_SIZE
    logging: Dict[str, Any] = field(default_factory=dict)


class ConfigLoader:
    """Loads and validates TOML configuration files"""

    # Required configuration sections and their mandatory keys
    REQUIRED_SECTIONS = {
        'api': ['account_sid'],
        'authentication': ['type'],
    }

    @staticmethod
    def load_toml_config(config_path: Path) -> ClientConfig:
        """
        Load client configuration from TOML file

        Args:
            config_path: Path to the TOML configuration file

        Returns:
            ClientConfig object with all configuration data

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If TOML is invalid or required configuration is missing
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'rb') as f:
                config_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {config_path}: {e}")

        ConfigLoader._validate_required_sections(config_data)

        http_section = config_data.get('http', {})
        pagination_section = config_data.get('pagination', {})

        page_size = pagination_section.get('page_size', DEFAULT_PAGE_SIZE)
        if not isinstance(page_size, int) or page_size < 1:
            raise ConfigurationError(f"pagination.page_size must be a positive integer, got {page_size!r}")

        return ClientConfig(
            account_sid=config_data['api']['account_sid'],
            authentication=config_data['authentication'],
            domains={**DEFAULT_DOMAINS, **config_data.get('domains', {})},
            timeout_seconds=float(http_section.get('timeout_seconds', 30.0)),
            page_size=page_size,
            logging=config_data.get('logging', {})
        )

    @staticmethod
    def _validate_required_sections(config_data: Dict[str, Any]) -> None:
        """
        Validate that all required configuration sections and keys are present

        Args:
            config_data: Parsed TOML configuration data

        Raises:
            ConfigurationError: If any required section or key is missing
        """
        missing_items = []

        for section_name, required_keys in ConfigLoader.REQUIRED_SECTIONS.items():
            if section_name not in config_data:
                missing_items.append(f"Section [{section_name}]")
            else:
                section_data = config_data[section_name]
                for key in required_keys:
                    if key not in section_data:
                        missing_items.append(f"Key '{key}' in section [{section_name}]")

        if missing_items:
            raise ConfigurationError(
                f"Missing required configuration items: {', '.join(missing_items)}"
            )

    @staticmethod
    def validate_environment_variables(config: ClientConfig) -> bool:
        """
        Validate that all environment variables referenced by the authentication section are set

        Args:
            config: ClientConfig object to validate

        Returns:
            True if all environment variables are present

        Raises:
            EnvironmentVariableError: If any required environment variables are missing
        """
        missing_vars = []

        for key, value in config.authentication.items():
            if key.endswith('_env') and isinstance(value, str):
                if not os.getenv(value):
                    missing_vars.append(value)

        if missing_vars:
            raise EnvironmentVariableError(
                f"Missing required environment variables: {', '.join(missing_vars)}"
            )

        return True

    @staticmethod
    def get_environment_value(env_var_name: str) -> str:
        """
        Get environment variable value with proper error handling

        Raises:
            EnvironmentVariableError: If environment variable is not set
        """
        value = os.getenv(env_var_name)
        if value is None:
            raise EnvironmentVariableError(f"Environment variable '{env_var_name}' is not set")
        return value


def configure_logging(config: ClientConfig) -> None:
    """Apply the [logging] level to the package logger"""
    level_name = str(config.logging.get('level', 'WARNING')).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown logging level: {level_name}")
    logging.getLogger('telephony_rest').setLevel(level)
