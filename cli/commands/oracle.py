#!/usr/bin/env python3
"""
Oracle Commands for TapHeir CLI

Issue and verify oracle death certificates.
"""

import sys
from typing import Optional

import click

from crypto.keys import PrivateKey
from crypto.wif import decode_wif
from oracle.certificate import (
    describe_oracle,
    explain_oracle_role,
    issue_certificate,
    oracle_signing_key,
    verify_certificate,
)
from cli.context import CLIContext, pass_context, handle_cli_error, load_json_file, save_json_file


@click.group()
@pass_context
def oracle(ctx: CLIContext):
    """Oracle certificate commands."""
    ctx.logger.debug("Oracle command group invoked")


@oracle.command('issue')
@click.option('--wif', help="Oracle's WIF-encoded private key")
@click.option('--private-key', 'private_key_hex', help="Oracle's 32-byte hex private key")
@click.option('--trust-id', required=True, help='Trust identifier (address or custom id)')
@click.option('--name', 'person_name', required=True, help='Name of the deceased')
@click.option('--timestamp', type=int, help='Issuance Unix time (defaults to now)')
@click.option('--output-file', type=click.Path(dir_okay=False), help='Save the certificate as JSON')
@pass_context
@handle_cli_error
def issue(ctx: CLIContext, wif: Optional[str], private_key_hex: Optional[str], trust_id: str,
          person_name: str, timestamp: Optional[int], output_file: Optional[str]):
    """
    Issue a signed death certificate for a trust.

    Examples:
        tapheir oracle issue --wif <wif> --trust-id tb1p... --name "Alice"
    """
    if bool(wif) == bool(private_key_hex):
        raise click.UsageError("Provide exactly one of --wif or --private-key")

    if wif:
        key_bytes, _, _ = decode_wif(wif)
    else:
        key_bytes = PrivateKey.from_hex(private_key_hex).bytes

    with oracle_signing_key(key_bytes) as signing_key:
        del key_bytes
        certificate = issue_certificate(signing_key, trust_id, person_name, timestamp)

    data = certificate.to_dict()
    if output_file:
        save_json_file(data, output_file)
        ctx.logger.info(f"Certificate saved to {output_file}")

    ctx.output(data)


@oracle.command('verify')
@click.argument('certificate_file', type=click.Path(exists=True, dir_okay=False))
@pass_context
@handle_cli_error
def verify(ctx: CLIContext, certificate_file: str):
    """
    Verify a saved certificate.

    Exits with status 1 when the certificate does not verify.
    """
    data = load_json_file(certificate_file)
    valid = verify_certificate(data)
    ctx.output({
        "certificate_id": data.get("certificate_id"),
        "trust_id": data.get("trust_id"),
        "valid": valid,
    })
    if not valid:
        sys.exit(1)


@oracle.command('info')
@click.option('--public-key', required=True, help="Oracle's public key")
@pass_context
@handle_cli_error
def info(ctx: CLIContext, public_key: str):
    """Show oracle service information."""
    result = describe_oracle(public_key)
    result["service_name"] = ctx.get_config('oracle.service_name', result["service_name"])
    ctx.output(result)


@oracle.command('explain')
@pass_context
def explain(ctx: CLIContext):
    """Explain the oracle's role in an inheritance trust."""
    ctx.output(explain_oracle_role())
