"""
TapHeir - Inheritance Trust Module

Composes the script assembler, tap tree, Taproot commitment and address
codec into an immutable TaprootTrust record.
"""

from .builder import (
    TaprootTrust,
    compute_locktime,
    create_taproot_trust,
    create_simple_taproot_address,
    explain_taproot_trust,
)

__all__ = [
    "TaprootTrust",
    "compute_locktime",
    "create_taproot_trust",
    "create_simple_taproot_address",
    "explain_taproot_trust",
]
