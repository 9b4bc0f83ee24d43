#!/usr/bin/env python3
"""
Address Commands for TapHeir CLI
"""

import sys

import click

from scripts.address import decode_address, is_valid_taproot_address
from cli.context import CLIContext, pass_context, handle_cli_error


@click.group()
@pass_context
def address(ctx: CLIContext):
    """Validate and decode Taproot addresses."""
    ctx.logger.debug("Address command group invoked")


@address.command('validate')
@click.argument('addr')
@pass_context
@handle_cli_error
def validate(ctx: CLIContext, addr: str):
    """
    Check that ADDR is a Taproot address on the selected network.

    Exits with status 1 when the address is not valid.
    """
    valid = is_valid_taproot_address(addr, ctx.network)
    ctx.output({
        "address": addr,
        "network": ctx.network.label,
        "valid": valid,
    })
    if not valid:
        sys.exit(1)


@address.command('decode')
@click.argument('addr')
@pass_context
@handle_cli_error
def decode(ctx: CLIContext, addr: str):
    """Decode a Taproot address on any known network."""
    decoded = decode_address(addr)
    ctx.output({
        "address": addr,
        "network": decoded.network.label,
        "witness_version": decoded.version,
        "output_key": decoded.program.hex(),
        "output_script": decoded.output_script.hex(),
    })
