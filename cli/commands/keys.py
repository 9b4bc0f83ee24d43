#!/usr/bin/env python3
"""
Key Management Commands for TapHeir CLI
"""

from typing import Optional

import click

from crypto.keys import PrivateKey
from crypto.material import generate_key_pair, key_material_from_wif
from cli.context import CLIContext, pass_context, handle_cli_error


@click.group()
@pass_context
def keys(ctx: CLIContext):
    """Generate and import key pairs."""
    ctx.logger.debug("Keys command group invoked")


@keys.command('generate')
@click.option('--private-key', 'private_key_hex', help='Derive from this 32-byte hex private key instead of generating one')
@pass_context
@handle_cli_error
def generate(ctx: CLIContext, private_key_hex: Optional[str]):
    """
    Generate a key pair for the selected network.

    The output contains the private key; keep it secret.
    """
    private_key = PrivateKey.from_hex(private_key_hex).bytes if private_key_hex else None
    material = generate_key_pair(ctx.network, private_key)
    ctx.output(material.to_dict())


@keys.command('import')
@click.argument('wif')
@pass_context
@handle_cli_error
def import_wif(ctx: CLIContext, wif: str):
    """Show the public keys for a WIF-encoded private key."""
    material = key_material_from_wif(wif)
    ctx.output({
        "public_key": material.public_key.hex(),
        "x_only_public_key": material.x_only.hex(),
        "network": material.network.label,
    })
