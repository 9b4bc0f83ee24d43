"""
TapHeir - Network Parameters

Explicit network selection for address encoding and key import. Every
address or WIF operation takes a Network value instead of reading a
module-level constant.
"""

from enum import Enum
from typing import Union


class Network(Enum):
    """Bitcoin networks recognized by TapHeir."""

    MAIN = ("mainnet", "bc", 0x80)
    TEST = ("testnet", "tb", 0xEF)

    def __init__(self, label: str, hrp: str, wif_version: int):
        self.label = label
        self.hrp = hrp
        self.wif_version = wif_version

    @property
    def taproot_prefix(self) -> str:
        """Lowercase prefix every Taproot address on this network starts with."""
        return f"{self.hrp}1p"

    @classmethod
    def from_name(cls, name: Union[str, 'Network']) -> 'Network':
        """
        Resolve a network from a user-facing name.

        Accepts the enum member itself, its name (``main``/``test``), its
        label (``mainnet``/``testnet``) or its bech32 prefix (``bc``/``tb``).
        """
        if isinstance(name, cls):
            return name

        normalized = str(name).strip().lower()
        for network in cls:
            if normalized in (network.name.lower(), network.label, network.hrp):
                return network
        raise ValueError(f"Unknown network: {name}")

    @classmethod
    def from_hrp(cls, hrp: str) -> 'Network':
        for network in cls:
            if network.hrp == hrp:
                return network
        raise ValueError(f"Unknown human-readable prefix: {hrp}")

    @classmethod
    def from_wif_version(cls, version: int) -> 'Network':
        for network in cls:
            if network.wif_version == version:
                return network
        raise ValueError(f"Unknown WIF version byte: {version:#04x}")


DEFAULT_NETWORK = Network.TEST
