"""
Cryptographic Exceptions for TapHeir

This module defines custom exceptions for key handling, tweaking and
signature operations.
"""


class CryptoError(Exception):
    """Base exception for all cryptographic errors."""
    pass


class InvalidKeyError(CryptoError):
    """Raised when a key is invalid or malformed."""
    pass


class InvalidSignatureError(CryptoError):
    """Raised when a signature is invalid or signing fails."""
    pass


class InvalidTweakError(CryptoError):
    """Raised when a Taproot tweak is not below the curve order."""
    pass


class PointAtInfinityError(CryptoError):
    """Raised when a tweaked output point is the identity."""
    pass


class KeyMaterialError(CryptoError):
    """Raised when WIF or other key material cannot be decoded."""
    pass
