#!/usr/bin/env python3
"""
Configuration Management Module for TapHeir CLI

Handles hierarchical configuration loading, environment variable mapping
and validation of settings.
"""

import os
import json
import math
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List, Union

import yaml

from network.params import Network


# Configuration file locations in order of precedence (highest to lowest)
CONFIG_SEARCH_PATHS = [
    Path.cwd() / '.tapheir.yml',            # Project-specific YAML
    Path.cwd() / '.tapheir.json',           # Project-specific JSON
    Path.cwd() / 'tapheir.config.yml',      # Alternative project config
    Path.cwd() / 'tapheir.config.json',     # Alternative project config
    Path.home() / '.tapheir' / 'config.yml',    # User global YAML
    Path.home() / '.tapheir' / 'config.json',   # User global JSON
]

# Environment variable prefix
ENV_PREFIX = 'TAPHEIR_'

OUTPUT_FORMATS = ['table', 'json', 'yaml']

# Default configuration values
DEFAULT_CONFIG = {
    'network': {
        'type': 'testnet',  # mainnet, testnet
    },
    'trust': {
        'timelock_hours': 1,
    },
    'cli': {
        'output_format': 'table',
        'verbose': 0,
    },
    'oracle': {
        'service_name': 'TapHeir Oracle Service',
    },
}


class ConfigurationManager:
    """Manages hierarchical configuration with environment variable support."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Explicit configuration file path
        """
        self.logger = logging.getLogger('tapheir-cli.config')
        self.config_file = config_file
        self._config_cache = None
        self._config_sources = []

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from all sources in hierarchical order.

        Returns:
            Merged configuration dictionary
        """
        if self._config_cache is not None:
            return self._config_cache

        configs = [DEFAULT_CONFIG]
        self._config_sources = ["defaults"]

        if self.config_file:
            path = Path(self.config_file)
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")
            configs.append(self._load_config_file(path))
            self._config_sources.append(f"file:{path}")
        else:
            for config_path in CONFIG_SEARCH_PATHS:
                if config_path.exists():
                    configs.append(self._load_config_file(config_path))
                    self._config_sources.append(f"file:{config_path}")
                    self.logger.debug(f"Loaded config from {config_path}")
                    break  # first file found wins

        env_config = self._load_environment_variables()
        if env_config:
            configs.append(env_config)
            self._config_sources.append("environment")

        self._config_cache = self._deep_merge(*configs)
        return self._config_cache

    def _load_config_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration from a YAML or JSON file."""
        with open(path, 'r') as f:
            if path.suffix in ['.yml', '.yaml']:
                try:
                    data = yaml.safe_load(f)
                except yaml.YAMLError as e:
                    raise ValueError(f"Invalid YAML in {path}: {e}")
            elif path.suffix == '.json':
                data = json.load(f)
            else:
                raise ValueError(f"Unknown config file format: {path}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    def _load_environment_variables(self) -> Dict[str, Any]:
        """
        Load configuration from environment variables.

        The first segment after the prefix names the section, the rest the
        key, e.g. TAPHEIR_TRUST_TIMELOCK_HOURS -> {'trust': {'timelock_hours': ...}}.
        """
        env_config = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            config_key = key[len(ENV_PREFIX):].lower()
            section, _, name = config_key.partition('_')
            if not section or not name:
                continue
            env_config.setdefault(section, {})[name] = self._parse_env_value(value)

        return env_config

    def _parse_env_value(self, value: str) -> Union[str, int, float, bool]:
        """Parse environment variable value to appropriate type."""
        if value.lower() in ['true', 'yes']:
            return True
        elif value.lower() in ['false', 'no']:
            return False

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            return value

    def _deep_merge(self, *dicts: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge multiple dictionaries."""
        result = {}

        for dictionary in dicts:
            for key, value in dictionary.items():
                if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                    result[key] = self._deep_merge(result[key], value)
                elif isinstance(value, dict):
                    result[key] = self._deep_merge(value)
                else:
                    result[key] = value

        return result

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key_path: Dot-separated path (e.g., 'trust.timelock_hours')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        current = self.load()

        for key in key_path.split('.'):
            if isinstance(current, dict) and key in current:
                current = current[key]
            else:
                return default

        return current

    def validate(self) -> List[str]:
        """
        Validate current configuration.

        Returns:
            List of validation errors (empty if valid)
        """
        config = self.load()
        errors = []

        network_type = config.get('network', {}).get('type')
        try:
            Network.from_name(network_type)
        except ValueError:
            errors.append(f"Invalid network type: {network_type}")

        hours = config.get('trust', {}).get('timelock_hours')
        if (isinstance(hours, bool) or not isinstance(hours, (int, float))
                or not math.isfinite(hours) or hours < 0):
            errors.append(f"Timelock hours must be a finite non-negative number: {hours}")

        output_format = config.get('cli', {}).get('output_format')
        if output_format not in OUTPUT_FORMATS:
            errors.append(f"Invalid output format: {output_format}")

        return errors

    def get_network(self) -> Network:
        """Resolve the configured network."""
        return Network.from_name(self.get('network.type', DEFAULT_CONFIG['network']['type']))

    def get_sources(self) -> List[str]:
        """Get list of configuration sources that were loaded."""
        self.load()
        return self._config_sources
