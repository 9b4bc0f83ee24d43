"""
TapHeir - Bech32/Bech32m Primitives

Checksum computation, base32 conversion and string encoding for segwit
addresses (BIP173, BIP350). Taproot outputs use the bech32m constant.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .exceptions import InvalidAddressError


CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
SEPARATOR = "1"
MAX_LENGTH = 90
CHECKSUM_LENGTH = 6

_GENERATOR = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]


class Encoding(Enum):
    """Checksum variants."""
    BECH32 = 1
    BECH32M = 0x2bc830a3


def polymod(values: Sequence[int]) -> int:
    """Compute the bech32 checksum polynomial over 5-bit values."""
    chk = 1
    for value in values:
        top = chk >> 25
        chk = ((chk & 0x1ffffff) << 5) ^ value
        for i in range(5):
            chk ^= _GENERATOR[i] if ((top >> i) & 1) else 0
    return chk


def hrp_expand(hrp: str) -> List[int]:
    """Expand the human-readable part for checksum computation."""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def create_checksum(hrp: str, data: Sequence[int], encoding: Encoding) -> List[int]:
    values = hrp_expand(hrp) + list(data)
    mod = polymod(values + [0] * CHECKSUM_LENGTH) ^ encoding.value
    return [(mod >> 5 * (5 - i)) & 31 for i in range(CHECKSUM_LENGTH)]


def verify_checksum(hrp: str, data: Sequence[int]) -> Optional[Encoding]:
    """Return the checksum variant that validates, or None."""
    check = polymod(hrp_expand(hrp) + list(data))
    for encoding in Encoding:
        if check == encoding.value:
            return encoding
    return None


def bech32_encode(hrp: str, data: Sequence[int], encoding: Encoding = Encoding.BECH32M) -> str:
    """
    Encode 5-bit data with a human-readable prefix.

    Args:
        hrp: Lowercase human-readable part
        data: 5-bit values
        encoding: Checksum variant

    Returns:
        Lowercase bech32/bech32m string
    """
    combined = list(data) + create_checksum(hrp, data, encoding)
    return hrp + SEPARATOR + "".join(CHARSET[d] for d in combined)


def bech32_decode(bech: str) -> Tuple[str, List[int], Encoding]:
    """
    Decode a bech32/bech32m string.

    Args:
        bech: Address string

    Returns:
        Tuple of (hrp, 5-bit data without checksum, encoding)
    """
    if any(ord(x) < 33 or ord(x) > 126 for x in bech):
        raise InvalidAddressError("Address contains invalid characters")
    if bech.lower() != bech and bech.upper() != bech:
        raise InvalidAddressError("Address uses mixed case")
    if len(bech) > MAX_LENGTH:
        raise InvalidAddressError(f"Address exceeds {MAX_LENGTH} characters")

    bech = bech.lower()
    pos = bech.rfind(SEPARATOR)
    if pos < 1 or pos + CHECKSUM_LENGTH + 1 > len(bech):
        raise InvalidAddressError("Address separator is missing or misplaced")

    hrp = bech[:pos]
    try:
        data = [CHARSET.index(x) for x in bech[pos + 1:]]
    except ValueError:
        raise InvalidAddressError("Address data contains non-bech32 characters")

    encoding = verify_checksum(hrp, data)
    if encoding is None:
        raise InvalidAddressError("Address checksum mismatch")

    return hrp, data[:-CHECKSUM_LENGTH], encoding


def convertbits(data: Sequence[int], frombits: int, tobits: int, pad: bool = True) -> Optional[List[int]]:
    """Regroup a sequence of frombits-wide values into tobits-wide values."""
    acc = 0
    bits = 0
    ret = []
    maxv = (1 << tobits) - 1
    max_acc = (1 << (frombits + tobits - 1)) - 1
    for value in data:
        if value < 0 or (value >> frombits):
            return None
        acc = ((acc << frombits) | value) & max_acc
        bits += frombits
        while bits >= tobits:
            bits -= tobits
            ret.append((acc >> bits) & maxv)
    if pad:
        if bits:
            ret.append((acc << (tobits - bits)) & maxv)
    elif bits >= frombits or ((acc << (tobits - bits)) & maxv):
        return None
    return ret
