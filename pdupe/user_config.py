"""
User configuration management for the perceptual duplicate finder.

Supports configuration from multiple sources (in order of priority):
1. Runtime parameters (highest priority)
2. Environment variables
3. User config file (~/.pdupe/config.json)
4. Default values from config.py (lowest priority)

Example config.json:
{
    "default_threshold": 10.0,
    "default_workers": 4,
    "default_metric": "simple",
    "grid_rows": 32,
    "grid_cols": 32,
    "max_image_pixels": 500000000
}
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Optional
import logging

from .config import (
    CONFIG_DIR,
    DEFAULT_COLS,
    DEFAULT_METRIC,
    DEFAULT_ROWS,
    DEFAULT_THRESHOLD,
    DEFAULT_WORKERS,
    MAX_IMAGE_PIXELS,
)
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class UserConfig:
    """
    Manages user configuration from file and environment variables.

    Attributes are lazy-loaded and cached for performance.
    """

    _instance: Optional['UserConfig'] = None
    _config_data: Optional[dict] = None

    def __new__(cls):
        """Singleton pattern to ensure one config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @property
    def config_dir(self) -> Path:
        """Get the configuration directory path."""
        env_dir = os.getenv('PDUPE_CONFIG_DIR')
        if env_dir:
            return Path(env_dir)
        return Path(CONFIG_DIR)

    @property
    def config_file_path(self) -> Path:
        """Get the configuration file path."""
        return self.config_dir / 'config.json'

    def _load_config_file(self) -> dict:
        """Load configuration from JSON file."""
        if not self.config_file_path.exists():
            return {}

        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                logger.debug(f"Loaded configuration from {self.config_file_path}")
                return data
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config file {self.config_file_path}: {e}")
            return {}

    def _get_config_data(self) -> dict:
        """Get cached config data (lazy loading)."""
        if self._config_data is None:
            self._config_data = self._load_config_file()
        return self._config_data

    def reload(self):
        """Reload configuration from file."""
        self._config_data = None

    def get(self, key: str, default: Any = None, env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value with priority:
        1. Environment variable (if env_var specified)
        2. Config file
        3. Default value

        Args:
            key: Configuration key
            default: Default value if not found
            env_var: Optional environment variable name to check

        Returns:
            Configuration value
        """
        if env_var:
            env_value = os.getenv(env_var)
            if env_value is not None:
                # Try to parse as JSON for numbers and other non-string types
                try:
                    return json.loads(env_value)
                except (json.JSONDecodeError, TypeError):
                    return env_value

        config_data = self._get_config_data()
        if key in config_data:
            return config_data[key]

        return default

    def get_typed(self, key: str, cast: Callable[[Any], Any], default: Any,
                  env_var: Optional[str] = None) -> Any:
        """
        Get a configuration value converted with cast.

        Raises:
            ConfigError: If the configured value cannot be converted
        """
        value = self.get(key, default=default, env_var=env_var)
        try:
            return cast(value)
        except (TypeError, ValueError) as e:
            if env_var and os.getenv(env_var) is not None:
                source = f"environment variable {env_var}"
            else:
                source = f"'{key}' in {self.config_file_path}"
            raise ConfigError(f"Invalid value {value!r} for {source}: {e}") from e

    @property
    def default_threshold(self) -> float:
        """Match threshold on the 0-255 distance scale."""
        return self.get_typed('default_threshold', float, DEFAULT_THRESHOLD, 'PDUPE_THRESHOLD')

    @property
    def default_workers(self) -> int:
        """Number of parallel workers for fingerprinting."""
        return self.get_typed('default_workers', int, DEFAULT_WORKERS, 'PDUPE_WORKERS')

    @property
    def default_metric(self) -> str:
        """Distance metric name used when --metric is not given."""
        return self.get_typed('default_metric', str, DEFAULT_METRIC, 'PDUPE_METRIC')

    @property
    def grid_rows(self) -> int:
        """Fingerprint grid rows."""
        return self.get_typed('grid_rows', int, DEFAULT_ROWS, 'PDUPE_GRID_ROWS')

    @property
    def grid_cols(self) -> int:
        """Fingerprint grid columns."""
        return self.get_typed('grid_cols', int, DEFAULT_COLS, 'PDUPE_GRID_COLS')

    @property
    def max_image_pixels(self) -> int:
        """Maximum image size in pixels (decompression bomb limit)."""
        return self.get_typed('max_image_pixels', int, MAX_IMAGE_PIXELS, 'PDUPE_MAX_PIXELS')

    def create_example_config(self) -> bool:
        """Create an example configuration file."""
        example_config = {
            "_comment": "pdupe user configuration",
            "default_threshold": DEFAULT_THRESHOLD,
            "default_workers": DEFAULT_WORKERS,
            "default_metric": DEFAULT_METRIC,
            "grid_rows": DEFAULT_ROWS,
            "grid_cols": DEFAULT_COLS,
            "max_image_pixels": MAX_IMAGE_PIXELS,
        }

        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(example_config, f, indent=2)
            logger.info(f"Created example config file at {self.config_file_path}")
            return True
        except OSError as e:
            logger.error(f"Failed to create example config: {e}")
            return False


# Global instance
_user_config = UserConfig()


def get_user_config() -> UserConfig:
    """Get the global UserConfig instance."""
    return _user_config
