#!/usr/bin/env python3
"""
Configuration Commands for TapHeir CLI
"""

import click

from cli.config import ENV_PREFIX
from cli.context import CLIContext, pass_context


@click.group()
@pass_context
def config(ctx: CLIContext):
    """Inspect the effective configuration."""
    ctx.logger.debug("Config command group invoked")


@config.command('show')
@pass_context
def show(ctx: CLIContext):
    """Show the merged configuration and where it came from."""
    ctx.output({
        "config": ctx.config_manager.load(),
        "sources": ctx.config_manager.get_sources(),
        "env_prefix": ENV_PREFIX,
    })
