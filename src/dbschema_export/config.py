"""
Configuration loader for the schema exporter.

Loads settings from config.yaml with sensible defaults.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

# Default configuration values
DEFAULTS = {
    'export': {
        'format': 'sql',
        'pretty_print': False,
        'indent': 4,
    },
    'logging': {
        'level': 'INFO',
    },
}


class Config:
    """Configuration manager for the schema exporter."""

    _instance: Optional['Config'] = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        """Singleton pattern to ensure single config instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _candidate_paths(self):
        return [
            Path('config.yaml'),
            Path('config.yml'),
            Path(__file__).parent.parent.parent / 'config.yaml',
            Path(__file__).parent.parent.parent / 'config.yml',
            Path.home() / '.dbschema-export' / 'config.yaml',
        ]

    def _load_config(self, path: Optional[Path] = None):
        """Load configuration from config.yaml or use defaults."""
        self._config = copy.deepcopy(DEFAULTS)

        config_file = None
        if path is not None:
            config_file = Path(path)
        else:
            for candidate in self._candidate_paths():
                if candidate.exists():
                    config_file = candidate
                    break

        if config_file is None:
            logger.debug("No config.yaml found, using defaults")
            return

        try:
            with open(config_file, 'r') as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config from {config_file}: {e}")
            return

        if not isinstance(file_config, dict):
            logger.warning(f"Ignoring config {config_file}: top level must be a mapping")
            return

        # Deep merge with defaults
        self._config = self._deep_merge(DEFAULTS, file_config)
        logger.info(f"Loaded configuration from {config_file}")

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries."""
        result = copy.deepcopy(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def get(self, *keys, default=None) -> Any:
        """
        Get a configuration value by key path.

        Usage:
            config.get('export', 'indent')
            config.get('logging', 'level', default='INFO')
        """
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    @property
    def export(self) -> Dict[str, Any]:
        """Get export configuration."""
        return self._config.get('export', DEFAULTS['export'])

    @property
    def logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self._config.get('logging', DEFAULTS['logging'])

    def reload(self, path: Optional[Path] = None):
        """Reload configuration, from an explicit file when given."""
        self._load_config(path)


# Global config instance
config = Config()


def get_config() -> Config:
    """Get the global configuration instance."""
    return config
