# Path: knxproj/core/config_loader.py
"""
knxproj Configuration Loader

Centralized configuration management for the knxproj module.
Loads and validates environment variables with type safety and defaults.

Architecture:
- Singleton pattern for global configuration
- Type-safe access with validation
- Sensible defaults from knxproj.constants
- Optional .env file at the project root
"""

import os
from typing import Any, Optional
from pathlib import Path
from dotenv import load_dotenv

from knxproj.constants import (
    ENV_MAX_RECURSION_DEPTH,
    ENV_MAX_ARCHIVE_SIZE,
    ENV_CHUNK_SIZE,
    ENV_TEMP_DIR,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    ENV_LOG_CONSOLE,
    DEFAULT_CHUNK_SIZE,
    MAX_RECURSION_DEPTH,
    MAX_ARCHIVE_SIZE,
)


class ConfigLoader:
    """
    Singleton configuration loader.

    Loads configuration from environment variables with validation,
    type conversion, and sensible defaults.

    Example:
        config = ConfigLoader()
        depth = config.get('max_recursion_depth')
        chunk_size = config.get('chunk_size')
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern.
        """
        if ConfigLoader._initialized:
            return

        # config_loader.py is at: <root>/knxproj/core/config_loader.py
        # .env is at: <root>/.env
        current_file = Path(__file__).resolve()
        project_root = current_file.parent.parent.parent
        env_path = project_root / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def reload(self) -> None:
        """Re-read configuration from the current environment."""
        self._config = self._load_configuration()

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load and validate all configuration from environment.

        Returns:
            Dictionary of validated configuration values
        """
        config = {
            # ================================================================
            # EXTRACTION CONFIGURATION
            # ================================================================
            'max_recursion_depth': self._get_int(ENV_MAX_RECURSION_DEPTH, MAX_RECURSION_DEPTH),
            'max_archive_size': self._get_int(ENV_MAX_ARCHIVE_SIZE, MAX_ARCHIVE_SIZE),
            'chunk_size': self._get_int(ENV_CHUNK_SIZE, DEFAULT_CHUNK_SIZE),

            # ================================================================
            # DIRECTORY PATHS
            # ================================================================
            'temp_dir': self._get_path(ENV_TEMP_DIR),
            'log_dir': self._get_path(ENV_LOG_DIR),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_level': self._get_env(ENV_LOG_LEVEL, 'INFO'),
            'log_console': self._get_bool(ENV_LOG_CONSOLE, False),
        }

        if config['max_recursion_depth'] < 0:
            raise ValueError(
                f"{ENV_MAX_RECURSION_DEPTH} must not be negative: {config['max_recursion_depth']}"
            )
        if config['chunk_size'] <= 0:
            raise ValueError(f"{ENV_CHUNK_SIZE} must be positive: {config['chunk_size']}")

        return config

    def _get_env(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: If True, raises ValueError when missing

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """
        Get integer environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found or invalid

        Returns:
            Integer value
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str) -> Optional[Path]:
        """Get path environment variable (None when unset)."""
        value = os.getenv(key)

        if value is None or not value.strip():
            return None

        return Path(value.strip())

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to configuration."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config

    def keys(self):
        """Get all configuration keys."""
        return self._config.keys()

    def items(self):
        """Get all configuration key-value pairs."""
        return self._config.items()


__all__ = ['ConfigLoader']
