#!/usr/bin/env python3
"""
Shared CLI state and helpers for the TapHeir command modules.
"""

import functools
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click

from crypto.exceptions import CryptoError
from network.params import Network
from oracle.exceptions import OracleError
from scripts.exceptions import ScriptError
from .config import ConfigurationManager
from .output import OutputFormatter


class CLIContext:
    """Global CLI context for sharing state across commands."""

    def __init__(self):
        self.config_file: Optional[str] = None
        self.output_format: Optional[str] = None
        self.verbose: int = 0
        self.network: Optional[Network] = None
        self.config_manager: Optional[ConfigurationManager] = None
        self.logger: logging.Logger = logging.getLogger('tapheir-cli')

    def setup_logging(self):
        """Configure logging based on verbosity level."""
        log_levels = {
            0: logging.WARNING,
            1: logging.INFO,
            2: logging.DEBUG
        }
        level = log_levels.get(min(self.verbose, 2), logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        root = logging.getLogger()
        previous_level = root.level
        root.addHandler(handler)
        root.setLevel(level)

        def teardown():
            root.removeHandler(handler)
            root.setLevel(previous_level)

        # Detached when the command context closes
        click.get_current_context().call_on_close(teardown)

    def load_config(self, network_override: Optional[str] = None):
        """Load configuration and resolve the effective network and output format."""
        self.config_manager = ConfigurationManager(self.config_file)
        errors = self.config_manager.validate()
        if errors:
            raise click.ClickException("Invalid configuration: " + "; ".join(errors))

        if network_override:
            self.network = Network.from_name(network_override)
        else:
            self.network = self.config_manager.get_network()

        if self.output_format is None:
            self.output_format = self.config_manager.get('cli.output_format', 'table')

        self.logger.debug(f"Configuration sources: {self.config_manager.get_sources()}")

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value with fallback to default."""
        if self.config_manager is None:
            return default
        return self.config_manager.get(key, default)

    def output(self, data: Any):
        """Output data in the selected format."""
        click.echo(OutputFormatter(self.output_format or 'table').format(data))


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


def handle_cli_error(func):
    """Decorator to turn domain errors into a one-line message and exit code 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (CryptoError, ScriptError, OracleError, ValueError, OSError) as e:
            ctx = click.get_current_context().find_object(CLIContext)
            if ctx is not None and ctx.verbose >= 2:
                ctx.logger.exception("Command failed")
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    return wrapper


def load_json_file(file_path: str) -> Dict[str, Any]:
    """Load and validate JSON file."""
    path = Path(file_path)
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise click.FileError(file_path, hint=f"invalid JSON: {e}")
    if not isinstance(data, dict):
        raise click.FileError(file_path, hint="expected a JSON object")
    return data


def save_json_file(data: Dict[str, Any], file_path: str, indent: int = 2):
    """Save data to JSON file."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        json.dump(data, f, indent=indent, default=str)
