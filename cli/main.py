#!/usr/bin/env python3
"""
TapHeir - Command Line Interface

Create Taproot inheritance trusts, validate addresses and issue oracle
certificates from the shell.
"""

from typing import Optional

import click

from cli import __version__
from cli.config import OUTPUT_FORMATS
from cli.context import CLIContext, pass_context
from cli.commands.address import address
from cli.commands.config import config
from cli.commands.keys import keys
from cli.commands.oracle import oracle
from cli.commands.trust import trust


@click.group(context_settings={'help_option_names': ['-h', '--help']})
@click.option('--config-file', '-c',
              type=click.Path(exists=True, dir_okay=False),
              help='Path to configuration file')
@click.option('--output-format', '-o',
              type=click.Choice(OUTPUT_FORMATS),
              help='Output format (default from configuration)')
@click.option('--network', '-n',
              type=click.Choice(['main', 'test', 'mainnet', 'testnet']),
              help='Bitcoin network (default from configuration)')
@click.option('--verbose', '-v',
              count=True,
              help='Increase verbosity (-v for INFO, -vv for DEBUG)')
@click.version_option(__version__, prog_name='TapHeir CLI')
@pass_context
def cli(ctx: CLIContext, config_file: Optional[str], output_format: Optional[str],
        network: Optional[str], verbose: int):
    """
    TapHeir Command Line Interface

    Bitcoin inheritance through Taproot: the owner spends through the key
    path, the heir after a timelock, or the heir together with an oracle.

    Examples:
        tapheir keys generate
        tapheir trust create --owner <hex> --heir <hex> --oracle <hex> --hours 24
        tapheir address validate tb1p...
        tapheir oracle issue --wif <wif> --trust-id tb1p... --name "Alice"
    """
    ctx.config_file = config_file
    ctx.output_format = output_format
    ctx.verbose = verbose

    ctx.setup_logging()

    try:
        ctx.load_config(network)
    except (ValueError, OSError) as e:
        raise click.ClickException(str(e))

    ctx.logger.debug(f"CLI initialized for {ctx.network.label}")


cli.add_command(keys)
cli.add_command(trust)
cli.add_command(address)
cli.add_command(oracle)
cli.add_command(config)


def main():
    """Console script entry point."""
    cli(prog_name='tapheir')


if __name__ == '__main__':
    main()
