#!/usr/bin/env python3
"""
Trust Commands for TapHeir CLI

Create inheritance trust addresses and explain their spending paths.
"""

from typing import Optional

import click

from trust.builder import (
    TaprootTrust,
    create_simple_taproot_address,
    create_taproot_trust,
    explain_taproot_trust,
)
from cli.context import CLIContext, pass_context, handle_cli_error, load_json_file, save_json_file


@click.group()
@pass_context
def trust(ctx: CLIContext):
    """
    Inheritance trust commands.

    Build Taproot trust outputs with a heir timelock path and an
    oracle path, and inspect saved trusts.
    """
    ctx.logger.debug("Trust command group invoked")


@trust.command('create')
@click.option('--owner', required=True, help="Owner's public key (internal key)")
@click.option('--heir', required=True, help="Heir's public key")
@click.option('--oracle', required=True, help="Oracle's public key")
@click.option('--hours', type=float, help='Hours until the heir timelock path opens')
@click.option('--locktime', type=int, help='Absolute Unix timestamp locktime (overrides --hours)')
@click.option('--output-file', type=click.Path(dir_okay=False), help='Save the trust as JSON')
@pass_context
@handle_cli_error
def create(ctx: CLIContext, owner: str, heir: str, oracle: str, hours: Optional[float],
           locktime: Optional[int], output_file: Optional[str]):
    """
    Create a Taproot inheritance trust.

    Examples:
        tapheir trust create --owner <hex> --heir <hex> --oracle <hex> --hours 24
    """
    if hours is None:
        hours = ctx.get_config('trust.timelock_hours', 1)

    result = create_taproot_trust(
        owner, heir, oracle,
        timelock_hours=hours,
        locktime=locktime,
        network=ctx.network,
    )
    data = result.to_dict()

    if output_file:
        save_json_file(data, output_file)
        ctx.logger.info(f"Trust saved to {output_file}")

    ctx.output(data)


@trust.command('explain')
@click.argument('trust_file', type=click.Path(exists=True, dir_okay=False))
@pass_context
@handle_cli_error
def explain(ctx: CLIContext, trust_file: str):
    """Explain the spending paths of a saved trust."""
    data = load_json_file(trust_file)
    try:
        saved = TaprootTrust.from_dict(data)
    except KeyError as e:
        raise click.ClickException(f"Trust file is missing field {e}")
    ctx.output(explain_taproot_trust(saved))


@trust.command('simple')
@click.option('--pubkey', required=True, help='Public key for a key-path-only output')
@pass_context
@handle_cli_error
def simple(ctx: CLIContext, pubkey: str):
    """Create a key-path-only Taproot address."""
    ctx.output(create_simple_taproot_address(pubkey, ctx.network))
