"""
TapHeir - Taproot Address Codec

Encodes a Taproot output key as a bech32m witness-version-1 address for a
given network, decodes addresses back to their witness program, and
validates Taproot addresses.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from network.params import Network, DEFAULT_NETWORK
from .bech32m import Encoding, bech32_decode, bech32_encode, convertbits
from .exceptions import InvalidAddressError, ScriptError
from .taproot import WITNESS_VERSION_TAPROOT, taproot_output_script


logger = logging.getLogger(__name__)


TAPROOT_PROGRAM_SIZE = 32


@dataclass(frozen=True)
class DecodedAddress:
    """Witness program carried by a segwit address."""
    network: Network
    version: int
    program: bytes

    @property
    def output_script(self) -> bytes:
        return taproot_output_script(self.program)


def encode_taproot_address(output_key: bytes, network: Network = DEFAULT_NETWORK) -> str:
    """
    Encode a Taproot output key as a bech32m address.

    Args:
        output_key: 32-byte x-only output key (the witness program)
        network: Network whose prefix is used

    Returns:
        Lowercase bech32m address
    """
    if len(output_key) != TAPROOT_PROGRAM_SIZE:
        raise InvalidAddressError("Taproot witness program must be 32 bytes")

    data = [WITNESS_VERSION_TAPROOT] + convertbits(output_key, 8, 5)
    address = bech32_encode(network.hrp, data, Encoding.BECH32M)
    logger.debug(f"Encoded {network.label} Taproot address {address}")
    return address


def decode_address(address: str, network: Optional[Network] = None) -> DecodedAddress:
    """
    Decode and validate a Taproot address.

    Args:
        address: bech32m address
        network: If given, the address prefix must belong to this network

    Returns:
        DecodedAddress with network, witness version and program
    """
    if not isinstance(address, str):
        raise InvalidAddressError("Address must be a string")

    hrp, data, encoding = bech32_decode(address)

    try:
        decoded_network = Network.from_hrp(hrp)
    except ValueError:
        raise InvalidAddressError(f"Unknown address prefix: {hrp}")
    if network is not None and decoded_network is not network:
        raise InvalidAddressError(
            f"Address prefix {hrp} does not match network {network.label}"
        )

    if not data:
        raise InvalidAddressError("Address carries no witness version")
    version = data[0]
    if version != WITNESS_VERSION_TAPROOT:
        raise InvalidAddressError(f"Not a Taproot address: witness version {version}")
    if encoding is not Encoding.BECH32M:
        raise InvalidAddressError("Taproot addresses must use the bech32m checksum")

    program = convertbits(data[1:], 5, 8, False)
    if program is None:
        raise InvalidAddressError("Invalid witness program padding")
    if len(program) != TAPROOT_PROGRAM_SIZE:
        raise InvalidAddressError(f"Taproot witness program must be 32 bytes, got {len(program)}")

    return DecodedAddress(network=decoded_network, version=version, program=bytes(program))


def address_to_output_script(address: str, network: Optional[Network] = None) -> bytes:
    """Decode an address to its OP_1 <program> output script."""
    return decode_address(address, network).output_script


def is_valid_taproot_address(address: str, network: Network = DEFAULT_NETWORK) -> bool:
    """
    Verify if an address is a valid Taproot address on a network.

    Args:
        address: Bitcoin address to verify
        network: Network whose lowercase Taproot prefix is required

    Returns:
        True if valid Taproot address
    """
    try:
        if not address.startswith(network.taproot_prefix):
            return False
        decoded = decode_address(address, network)
        return decoded.version == WITNESS_VERSION_TAPROOT
    except (ScriptError, AttributeError, TypeError):
        return False
