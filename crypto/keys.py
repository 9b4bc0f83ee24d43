"""
Key Handling for TapHeir

This module wraps secp256k1 private/public keys and provides the BIP340/341
primitives the Taproot commitment engine is built on: tagged hashing,
x-only normalization and lifting an x-coordinate to its even-Y point.

References:
- BIP340: https://github.com/bitcoin/bips/blob/master/bip-0340.mediawiki
- BIP341: https://github.com/bitcoin/bips/blob/master/bip-0341.mediawiki
"""

import hashlib
import secrets
from typing import Optional, Union

from coincurve import PrivateKey as CoinCurvePrivateKey, PublicKey as CoinCurvePublicKey

from .exceptions import InvalidKeyError


# secp256k1 domain parameters
CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
FIELD_PRIME = 2**256 - 2**32 - 977

X_ONLY_KEY_SIZE = 32
COMPRESSED_KEY_SIZE = 33
UNCOMPRESSED_KEY_SIZE = 65


def tagged_hash(tag: str, data: bytes) -> bytes:
    """
    Compute BIP340/341 tagged hash: SHA256(SHA256(tag) + SHA256(tag) + data).

    Args:
        tag: Tag string for the hash
        data: Data to hash

    Returns:
        32-byte tagged hash
    """
    tag_hash = hashlib.sha256(tag.encode('utf-8')).digest()
    return hashlib.sha256(tag_hash + tag_hash + data).digest()


def lift_x(x: bytes) -> Optional[bytes]:
    """
    Lift x-coordinate to full point, returning the even y-coordinate point.

    Args:
        x: 32-byte x-coordinate

    Returns:
        33-byte compressed public key with even y, or None if x is not on the curve
    """
    if len(x) != X_ONLY_KEY_SIZE:
        return None
    if int.from_bytes(x, 'big') >= FIELD_PRIME:
        return None

    # The 0x02 prefix selects the even-y root by definition
    candidate = b'\x02' + x
    try:
        CoinCurvePublicKey(candidate)
    except ValueError:
        return None
    return candidate


def has_even_y(pubkey: bytes) -> bool:
    """
    Check if a compressed public key has an even y-coordinate.

    Args:
        pubkey: 33-byte compressed public key

    Returns:
        True if y-coordinate is even
    """
    return len(pubkey) == COMPRESSED_KEY_SIZE and pubkey[0] == 0x02


def to_x_only(public_key: Union[bytes, str]) -> bytes:
    """
    Normalize a public key to its 32-byte x-only form.

    Compressed (33 bytes) and uncompressed (65 bytes) keys lose their
    format prefix; x-only keys pass through unchanged.

    Args:
        public_key: Public key bytes or hex string

    Returns:
        32-byte x-only public key
    """
    if isinstance(public_key, str):
        try:
            public_key = bytes.fromhex(public_key)
        except ValueError:
            raise InvalidKeyError("Public key hex string is malformed")

    if not isinstance(public_key, (bytes, bytearray)):
        raise InvalidKeyError("Public key must be bytes or a hex string")

    key = bytes(public_key)
    if len(key) == X_ONLY_KEY_SIZE:
        return key
    if len(key) == COMPRESSED_KEY_SIZE:
        if key[0] not in (0x02, 0x03):
            raise InvalidKeyError(f"Invalid compressed key prefix: {key[0]:#04x}")
        return key[1:]
    if len(key) == UNCOMPRESSED_KEY_SIZE:
        if key[0] != 0x04:
            raise InvalidKeyError(f"Invalid uncompressed key prefix: {key[0]:#04x}")
        return key[1:33]

    raise InvalidKeyError(
        f"Invalid public key length: {len(key)}. Expected 32, 33, or 65 bytes."
    )


def require_valid_x_only(public_key: Union[bytes, str]) -> bytes:
    """Normalize to x-only and check the x-coordinate lies on the curve."""
    x_only = to_x_only(public_key)
    if lift_x(x_only) is None:
        raise InvalidKeyError(f"Not a valid x-only public key: {x_only.hex()}")
    return x_only


class PrivateKey:
    """
    Wrapper for private key operations.
    """

    def __init__(self, key_bytes: Optional[bytes] = None):
        """
        Initialize private key.

        Args:
            key_bytes: 32-byte private key. If None, generates random key.
        """
        if key_bytes is None:
            key_bytes = secrets.randbits(256).to_bytes(32, 'big')
            while not 0 < int.from_bytes(key_bytes, 'big') < CURVE_ORDER:
                key_bytes = secrets.randbits(256).to_bytes(32, 'big')

        if not isinstance(key_bytes, (bytes, bytearray)) or len(key_bytes) != 32:
            raise InvalidKeyError("Private key must be 32 bytes")

        key_int = int.from_bytes(key_bytes, 'big')
        if key_int == 0 or key_int >= CURVE_ORDER:
            raise InvalidKeyError("Private key out of valid range")

        self._key = CoinCurvePrivateKey(bytes(key_bytes))

    @classmethod
    def from_hex(cls, hex_string: str) -> 'PrivateKey':
        """Create a private key from a 64-character hex string."""
        try:
            return cls(bytes.fromhex(hex_string))
        except ValueError:
            raise InvalidKeyError("Private key hex string is malformed")

    def __repr__(self) -> str:
        return f"PrivateKey(x_only={self.x_only.hex()})"

    @property
    def bytes(self) -> bytes:
        """Get private key as bytes."""
        return self._key.secret

    @property
    def hex(self) -> str:
        """Get private key as hex string."""
        return self._key.secret.hex()

    @property
    def x_only(self) -> bytes:
        """Get the x-only public key for this private key."""
        return self.public_key().x_only

    def public_key(self) -> 'PublicKey':
        """Get corresponding public key."""
        return PublicKey(self._key.public_key)


class PublicKey:
    """
    Wrapper for public key operations.
    """

    def __init__(self, key_data: Union[bytes, CoinCurvePublicKey]):
        """
        Initialize public key.

        Args:
            key_data: Public key bytes (33 or 65 bytes) or CoinCurvePublicKey
        """
        if isinstance(key_data, CoinCurvePublicKey):
            self._key = key_data
            return

        if not isinstance(key_data, (bytes, bytearray)):
            raise InvalidKeyError("Public key data must be bytes")
        if len(key_data) not in (COMPRESSED_KEY_SIZE, UNCOMPRESSED_KEY_SIZE):
            raise InvalidKeyError("Public key must be 33 or 65 bytes")

        try:
            self._key = CoinCurvePublicKey(bytes(key_data))
        except ValueError as e:
            raise InvalidKeyError(f"Failed to create public key: {e}")

    @classmethod
    def from_x_only(cls, x_only: bytes) -> 'PublicKey':
        """Lift an x-only key to the even-y public key."""
        lifted = lift_x(x_only)
        if lifted is None:
            raise InvalidKeyError("x-coordinate is not on the curve")
        return cls(lifted)

    def __eq__(self, other) -> bool:
        return isinstance(other, PublicKey) and self.bytes == other.bytes

    def __hash__(self) -> int:
        return hash(self.bytes)

    @property
    def bytes(self) -> bytes:
        """Get compressed public key as bytes."""
        return self._key.format(compressed=True)

    @property
    def uncompressed_bytes(self) -> bytes:
        """Get uncompressed public key as bytes."""
        return self._key.format(compressed=False)

    @property
    def hex(self) -> str:
        """Get compressed public key as hex string."""
        return self.bytes.hex()

    @property
    def x_only(self) -> bytes:
        """Get x-only public key for Taproot (32 bytes)."""
        return self.bytes[1:]

    @property
    def has_even_y(self) -> bool:
        return has_even_y(self.bytes)

    def add_generator_multiple(self, scalar: int) -> 'PublicKey':
        """
        Compute P + scalar*G.

        Args:
            scalar: Integer in [0, n)

        Returns:
            Resulting public key

        Raises:
            ValueError: If the sum is the point at infinity
        """
        if scalar == 0:
            return self
        scalar_point = CoinCurvePrivateKey(scalar.to_bytes(32, 'big')).public_key
        combined = CoinCurvePublicKey.combine_keys([self._key, scalar_point])
        return PublicKey(combined)
