"""
Wallet Import Format (WIF) Codec for TapHeir

WIF strings are base58check encodings of
``version_byte || private_key || [0x01 compression flag]``. The version
byte selects the network.
"""

from typing import Tuple

import base58

from network.params import Network
from .exceptions import KeyMaterialError
from .keys import CURVE_ORDER


COMPRESSION_FLAG = 0x01


def encode_wif(private_key: bytes, network: Network, compressed: bool = True) -> str:
    """
    Encode a raw private key as WIF.

    Args:
        private_key: 32-byte private key
        network: Network whose version byte prefixes the payload
        compressed: Append the compression flag byte

    Returns:
        Base58check WIF string
    """
    if len(private_key) != 32:
        raise KeyMaterialError("Private key must be 32 bytes")

    payload = bytes([network.wif_version]) + private_key
    if compressed:
        payload += bytes([COMPRESSION_FLAG])
    return base58.b58encode_check(payload).decode('ascii')


def decode_wif(wif: str) -> Tuple[bytes, Network, bool]:
    """
    Decode a WIF string.

    Args:
        wif: Base58check WIF string

    Returns:
        Tuple of (private_key_bytes, network, compressed)
    """
    try:
        payload = base58.b58decode_check(wif.strip())
    except ValueError as e:
        raise KeyMaterialError(f"Invalid WIF encoding: {e}")

    if len(payload) == 34 and payload[-1] == COMPRESSION_FLAG:
        compressed = True
        key = payload[1:33]
    elif len(payload) == 33:
        compressed = False
        key = payload[1:]
    else:
        raise KeyMaterialError(f"Invalid WIF payload length: {len(payload)}")

    try:
        network = Network.from_wif_version(payload[0])
    except ValueError as e:
        raise KeyMaterialError(str(e))

    if not 0 < int.from_bytes(key, 'big') < CURVE_ORDER:
        raise KeyMaterialError("WIF private key out of valid range")

    return key, network, compressed
