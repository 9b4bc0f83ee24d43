"""
TapHeir - Taproot Commitment

Tweaks an x-only internal key with a script tree Merkle root (BIP341):

    t = tagged_hash("TapTweak", P || merkle_root)
    Q = lift_x(P) + t*G

The output key is x(Q); the parity bit records whether Q has odd y.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from crypto.exceptions import InvalidKeyError, InvalidTweakError, PointAtInfinityError
from crypto.keys import CURVE_ORDER, PublicKey, tagged_hash


logger = logging.getLogger(__name__)


WITNESS_VERSION_TAPROOT = 1
OP_1 = 0x51
TAPROOT_OUTPUT_SCRIPT_SIZE = 34


@dataclass(frozen=True)
class TaprootCommitment:
    """Result of tweaking an internal key."""
    output_key: bytes
    parity: int
    tweak: bytes

    def __post_init__(self):
        if len(self.output_key) != 32:
            raise InvalidKeyError("Output key must be 32 bytes (x-only)")
        if self.parity not in (0, 1):
            raise ValueError("Parity must be 0 or 1")

    @property
    def output_script(self) -> bytes:
        return taproot_output_script(self.output_key)


def compute_taproot_tweak(internal_pubkey: bytes, merkle_root: Optional[bytes] = None) -> bytes:
    """
    Compute Taproot tweak according to BIP341.

    Args:
        internal_pubkey: 32-byte x-only internal public key
        merkle_root: Optional 32-byte Merkle root of script tree

    Returns:
        32-byte tweak value
    """
    if len(internal_pubkey) != 32:
        raise InvalidKeyError("Internal pubkey must be 32 bytes (x-only)")

    tweak_data = internal_pubkey
    if merkle_root is not None:
        if len(merkle_root) != 32:
            raise InvalidKeyError("Merkle root must be 32 bytes")
        tweak_data += merkle_root

    return tagged_hash("TapTweak", tweak_data)


def commit(internal_pubkey: bytes, merkle_root: Optional[bytes] = None) -> TaprootCommitment:
    """
    Commit an internal key to a script tree.

    Args:
        internal_pubkey: 32-byte x-only internal public key
        merkle_root: 32-byte Merkle root, or None for a key-path-only output

    Returns:
        TaprootCommitment with output key and parity
    """
    tweak = compute_taproot_tweak(internal_pubkey, merkle_root)

    t = int.from_bytes(tweak, 'big')
    if t >= CURVE_ORDER:
        raise InvalidTweakError("Taproot tweak exceeds the curve order")

    internal_point = PublicKey.from_x_only(internal_pubkey)

    try:
        output_point = internal_point.add_generator_multiple(t)
    except ValueError:
        raise PointAtInfinityError("Tweaked output key is the point at infinity")

    commitment = TaprootCommitment(
        output_key=output_point.x_only,
        parity=0 if output_point.has_even_y else 1,
        tweak=tweak,
    )
    logger.debug(
        f"Committed internal key {internal_pubkey.hex()} to output key "
        f"{commitment.output_key.hex()} (parity {commitment.parity})"
    )
    return commitment


def taproot_output_script(output_key: bytes) -> bytes:
    """
    Create Taproot output script (witness program).

    Args:
        output_key: 32-byte x-only tweaked public key

    Returns:
        34-byte P2TR output script
    """
    if len(output_key) != 32:
        raise InvalidKeyError("Tweaked pubkey must be 32 bytes")

    # P2TR script: OP_1 <32-byte-tweaked-pubkey>
    return bytes([OP_1, 0x20]) + output_key
