"""
TapHeir - Network Module

Network parameters (bech32m prefix, WIF version byte) for the supported
Bitcoin networks.
"""

from .params import Network, DEFAULT_NETWORK

__all__ = [
    "Network",
    "DEFAULT_NETWORK",
]
