"""
Key Material Provider for TapHeir

Generates and imports key pairs in the form the rest of the system
consumes: raw 32-byte private keys, 33-byte compressed public keys,
32-byte x-only public keys and WIF strings.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from network.params import Network, DEFAULT_NETWORK
from .keys import PrivateKey
from .wif import encode_wif, decode_wif


@dataclass(frozen=True)
class KeyMaterial:
    """A key pair together with its network encoding."""
    private_key: bytes
    public_key: bytes
    network: Network

    def __repr__(self) -> str:
        return f"KeyMaterial(x_only={self.x_only.hex()}, network={self.network.label})"

    @property
    def x_only(self) -> bytes:
        return self.public_key[1:]

    @property
    def wif(self) -> str:
        return encode_wif(self.private_key, self.network)

    def to_dict(self) -> Dict[str, str]:
        """Hex/WIF form for display. Contains the secret key."""
        return {
            "private_key": self.private_key.hex(),
            "public_key": self.public_key.hex(),
            "x_only_public_key": self.x_only.hex(),
            "wif": self.wif,
            "network": self.network.label,
        }


def generate_key_pair(network: Network = DEFAULT_NETWORK,
                      private_key: Optional[bytes] = None) -> KeyMaterial:
    """
    Generate a key pair, randomly unless a private key is given.

    Args:
        network: Network the WIF encoding targets
        private_key: Optional 32-byte private key to derive from

    Returns:
        KeyMaterial
    """
    key = PrivateKey(private_key)
    return KeyMaterial(
        private_key=key.bytes,
        public_key=key.public_key().bytes,
        network=network,
    )


def key_material_from_wif(wif: str) -> KeyMaterial:
    """Import a key pair from its WIF encoding."""
    private_key, network, _ = decode_wif(wif)
    return generate_key_pair(network, private_key)
