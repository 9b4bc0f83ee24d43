"""
TapHeir - Taproot Inheritance Trust Construction

Builds a Taproot (P2TR) output with two script-path spending options:

1. Timelock path: the heir can spend after the locktime expires
2. Oracle path: oracle + heir signatures are required

The owner's key is the internal key, so the owner can always spend through
the key path.
"""

import logging
import math
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from crypto.keys import require_valid_x_only
from network.params import Network, DEFAULT_NETWORK
from scripts.address import decode_address, encode_taproot_address
from scripts.assembler import (
    build_oracle_script,
    build_timelock_script,
    script_to_asm,
    validate_locktime,
)
from scripts.exceptions import InvalidAddressError, InvalidLocktimeError
from scripts.taproot import commit, taproot_output_script
from scripts.taptree import TapTree


logger = logging.getLogger(__name__)


SECONDS_PER_HOUR = 60 * 60
DEFAULT_TIMELOCK_HOURS = 1

KeyInput = Union[bytes, str]


@dataclass(frozen=True)
class TaprootTrust:
    """Complete, immutable description of an inheritance trust output."""
    internal_pubkey: bytes
    heir_pubkey: bytes
    oracle_pubkey: bytes
    locktime: int
    merkle_root: bytes
    output_key: bytes
    parity: int
    address: str
    output_script: bytes
    network: Network
    timelock_script: bytes
    oracle_script: bytes

    @property
    def locktime_date(self) -> str:
        return datetime.fromtimestamp(self.locktime, tz=timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation with hex-encoded byte fields."""
        return {
            "address": self.address,
            "network": self.network.label,
            "internal_pubkey": self.internal_pubkey.hex(),
            "heir_pubkey": self.heir_pubkey.hex(),
            "oracle_pubkey": self.oracle_pubkey.hex(),
            "locktime": self.locktime,
            "locktime_date": self.locktime_date,
            "merkle_root": self.merkle_root.hex(),
            "output_key": self.output_key.hex(),
            "parity": self.parity,
            "output_script": self.output_script.hex(),
            "scripts": {
                "timelock": self.timelock_script.hex(),
                "timelock_asm": script_to_asm(self.timelock_script),
                "oracle": self.oracle_script.hex(),
                "oracle_asm": script_to_asm(self.oracle_script),
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TaprootTrust':
        """Rebuild a trust from its dict form, re-deriving every commitment."""
        trust = create_taproot_trust(
            data["internal_pubkey"],
            data["heir_pubkey"],
            data["oracle_pubkey"],
            locktime=int(data["locktime"]),
            network=Network.from_name(data.get("network", DEFAULT_NETWORK.label)),
        )
        if data.get("address") and data["address"] != trust.address:
            raise InvalidAddressError(
                f"Stored address {data['address']} does not match derived address {trust.address}"
            )
        return trust


def compute_locktime(timelock_hours: float = DEFAULT_TIMELOCK_HOURS,
                     now: Optional[int] = None) -> int:
    """
    Compute an absolute locktime ``timelock_hours`` from now.

    Args:
        timelock_hours: Hours until the heir's timelock path opens
        now: Current Unix time (defaults to the wall clock)

    Returns:
        Unix timestamp locktime
    """
    if not math.isfinite(timelock_hours) or timelock_hours < 0:
        raise InvalidLocktimeError(
            timelock_hours, f"Timelock hours must be a finite non-negative number: {timelock_hours}"
        )
    if now is None:
        now = int(time.time())
    return validate_locktime(int(now + timelock_hours * SECONDS_PER_HOUR))


def create_taproot_trust(owner_pubkey: KeyInput,
                         heir_pubkey: KeyInput,
                         oracle_pubkey: KeyInput,
                         timelock_hours: float = DEFAULT_TIMELOCK_HOURS,
                         locktime: Optional[int] = None,
                         network: Network = DEFAULT_NETWORK,
                         now: Optional[int] = None) -> TaprootTrust:
    """
    Create a Taproot trust with a two-leaf script tree.

    Args:
        owner_pubkey: Owner's public key (internal key)
        heir_pubkey: Heir's public key
        oracle_pubkey: Oracle's public key
        timelock_hours: Hours until the timelock path opens (ignored if locktime given)
        locktime: Explicit absolute Unix timestamp locktime
        network: Network to encode the address for
        now: Current Unix time used with timelock_hours

    Returns:
        TaprootTrust
    """
    internal_x_only = require_valid_x_only(owner_pubkey)
    heir_x_only = require_valid_x_only(heir_pubkey)
    oracle_x_only = require_valid_x_only(oracle_pubkey)

    if locktime is None:
        locktime = compute_locktime(timelock_hours, now)
    validate_locktime(locktime)

    timelock_script = build_timelock_script(locktime, heir_x_only)
    oracle_script = build_oracle_script(oracle_x_only, heir_x_only)

    tree = TapTree.from_scripts([timelock_script, oracle_script])
    merkle_root = tree.merkle_root()

    commitment = commit(internal_x_only, merkle_root)
    output_script = taproot_output_script(commitment.output_key)
    address = encode_taproot_address(commitment.output_key, network)

    # The address must decode back to the same output script
    if decode_address(address, network).output_script != output_script:
        raise InvalidAddressError(f"Address {address} does not round-trip to its output script")

    logger.info(f"Created {network.label} Taproot trust {address} (locktime {locktime})")

    return TaprootTrust(
        internal_pubkey=internal_x_only,
        heir_pubkey=heir_x_only,
        oracle_pubkey=oracle_x_only,
        locktime=locktime,
        merkle_root=merkle_root,
        output_key=commitment.output_key,
        parity=commitment.parity,
        address=address,
        output_script=output_script,
        network=network,
        timelock_script=timelock_script,
        oracle_script=oracle_script,
    )


def create_simple_taproot_address(pubkey: KeyInput,
                                  network: Network = DEFAULT_NETWORK) -> Dict[str, str]:
    """
    Create a key-path-only Taproot address (no script tree).

    Args:
        pubkey: Public key in x-only, compressed or uncompressed form
        network: Network to encode the address for

    Returns:
        Dict with address, x-only public key and output script (hex)
    """
    x_only = require_valid_x_only(pubkey)
    commitment = commit(x_only)
    return {
        "address": encode_taproot_address(commitment.output_key, network),
        "public_key": x_only.hex(),
        "output_key": commitment.output_key.hex(),
        "output": commitment.output_script.hex(),
    }


def explain_taproot_trust(trust: TaprootTrust, now: Optional[int] = None) -> Dict[str, Any]:
    """
    Describe the spending paths of a trust.

    Args:
        trust: Trust from create_taproot_trust
        now: Current Unix time (defaults to the wall clock)

    Returns:
        Human-readable trust information
    """
    if now is None:
        now = int(time.time())

    time_until_unlock = trust.locktime - now
    remaining = max(time_until_unlock, 0)
    hours_until_unlock = remaining // SECONDS_PER_HOUR
    minutes_until_unlock = (remaining % SECONDS_PER_HOUR) // 60

    return {
        "address": trust.address,
        "network": f"Bitcoin {trust.network.label.capitalize()}",
        "type": "Taproot (P2TR) Inheritance Trust",
        "spending_paths": {
            "key_path": {
                "description": "Owner can spend immediately using internal key",
                "pubkey": trust.internal_pubkey.hex(),
            },
            "timelock_path": {
                "description": f"Heir can spend after {hours_until_unlock}h {minutes_until_unlock}m",
                "pubkey": trust.heir_pubkey.hex(),
                "unlock_time": trust.locktime_date,
                "is_unlocked": time_until_unlock <= 0,
            },
            "oracle_path": {
                "description": "Oracle + Heir signatures required",
                "oracle_pubkey": trust.oracle_pubkey.hex(),
                "heir_pubkey": trust.heir_pubkey.hex(),
            },
        },
    }
