"""
TapHeir - Cryptographic Operations Module

This module provides cryptographic utilities for TapHeir including:
- BIP340/341 tagged hashes and x-only key handling
- BIP340 Schnorr signatures
- Key material generation and WIF import/export

Dependencies:
- coincurve: Fast secp256k1 operations
- base58: Base58check encoding for WIF
- hashlib: Cryptographic hash functions
"""

from .exceptions import (
    CryptoError,
    InvalidKeyError,
    InvalidSignatureError,
    InvalidTweakError,
    PointAtInfinityError,
    KeyMaterialError,
)
from .keys import (
    CURVE_ORDER,
    PrivateKey,
    PublicKey,
    tagged_hash,
    lift_x,
    has_even_y,
    to_x_only,
)
from .signatures import (
    SchnorrSignature,
    sign_schnorr,
    verify_schnorr,
)
from .wif import encode_wif, decode_wif
from .material import KeyMaterial, generate_key_pair, key_material_from_wif

__version__ = "0.1.0"
__all__ = [
    # Exceptions
    "CryptoError",
    "InvalidKeyError",
    "InvalidSignatureError",
    "InvalidTweakError",
    "PointAtInfinityError",
    "KeyMaterialError",

    # Keys
    "CURVE_ORDER",
    "PrivateKey",
    "PublicKey",
    "tagged_hash",
    "lift_x",
    "has_even_y",
    "to_x_only",

    # Signatures
    "SchnorrSignature",
    "sign_schnorr",
    "verify_schnorr",

    # Key material
    "encode_wif",
    "decode_wif",
    "KeyMaterial",
    "generate_key_pair",
    "key_material_from_wif",
]
