"""
Schnorr Signature Operations for TapHeir

BIP340 Schnorr signatures over 32-byte message hashes, matching the x-only
key model used by the Taproot commitment engine.

References:
- BIP340: https://github.com/bitcoin/bips/blob/master/bip-0340.mediawiki
"""

import secrets
from dataclasses import dataclass
from typing import Optional, Union

from coincurve.keys import PublicKeyXOnly

from .exceptions import InvalidSignatureError
from .keys import PrivateKey, to_x_only


SCHNORR_SIGNATURE_SIZE = 64


@dataclass(frozen=True)
class SchnorrSignature:
    """
    BIP340 Schnorr signature representation.
    """
    r: bytes  # 32-byte x-coordinate of R point
    s: bytes  # 32-byte scalar

    def __post_init__(self):
        """Validate signature components."""
        if len(self.r) != 32:
            raise InvalidSignatureError("Schnorr r must be 32 bytes")
        if len(self.s) != 32:
            raise InvalidSignatureError("Schnorr s must be 32 bytes")

    @classmethod
    def from_bytes(cls, sig_bytes: bytes) -> 'SchnorrSignature':
        """
        Parse 64-byte Schnorr signature.

        Args:
            sig_bytes: 64-byte signature (32-byte r + 32-byte s)

        Returns:
            SchnorrSignature object
        """
        if len(sig_bytes) != SCHNORR_SIGNATURE_SIZE:
            raise InvalidSignatureError("Schnorr signature must be 64 bytes")

        return cls(r=bytes(sig_bytes[:32]), s=bytes(sig_bytes[32:]))

    def to_bytes(self) -> bytes:
        """Encode signature as 64 bytes."""
        return self.r + self.s


def sign_schnorr(private_key: Union[PrivateKey, bytes], message_hash: bytes,
                 aux_rand: Optional[bytes] = None) -> SchnorrSignature:
    """
    Sign a 32-byte message hash with a BIP340 Schnorr signature.

    Args:
        private_key: Private key for signing
        message_hash: 32-byte message hash
        aux_rand: Optional 32-byte auxiliary randomness

    Returns:
        Schnorr signature
    """
    if len(message_hash) != 32:
        raise InvalidSignatureError("Message hash must be 32 bytes")

    if aux_rand is None:
        aux_rand = secrets.token_bytes(32)
    elif len(aux_rand) != 32:
        raise InvalidSignatureError("Auxiliary randomness must be 32 bytes")

    if not isinstance(private_key, PrivateKey):
        private_key = PrivateKey(private_key)

    try:
        signature = private_key._key.sign_schnorr(message_hash, aux_rand)
    except ValueError as e:
        raise InvalidSignatureError(f"Schnorr signing failed: {e}")

    return SchnorrSignature.from_bytes(signature)


def verify_schnorr(public_key: Union[bytes, str], signature: Union[SchnorrSignature, bytes],
                   message_hash: bytes) -> bool:
    """
    Verify a BIP340 Schnorr signature.

    Args:
        public_key: x-only (or compressed) public key
        signature: Schnorr signature to verify
        message_hash: 32-byte message hash

    Returns:
        True if signature is valid
    """
    try:
        if len(message_hash) != 32:
            return False

        if isinstance(signature, SchnorrSignature):
            signature = signature.to_bytes()
        if len(signature) != SCHNORR_SIGNATURE_SIZE:
            return False

        x_only_key = PublicKeyXOnly(to_x_only(public_key))
        return bool(x_only_key.verify(bytes(signature), bytes(message_hash)))
    except Exception:
        return False
