"""
TapHeir - TapLeaf/TapTree Engine

Tagged leaf hashes and the BIP341 Merkle root over a set of script leaves.
Branch hashes sort their two children lexicographically, so the root does
not depend on leaf insertion order for a two-leaf tree.
"""

import logging
import struct
from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union

from crypto.keys import tagged_hash
from .exceptions import EmptyTreeError, EncodingError


logger = logging.getLogger(__name__)


TAPSCRIPT_LEAF_VERSION = 0xc0
TAPROOT_LEAF_MASK = 0xfe
MAX_LEAF_SCRIPT_SIZE = 10000


def serialize_compact_size(n: int) -> bytes:
    """
    Serialize integer as Bitcoin compact size.

    Args:
        n: Integer to serialize

    Returns:
        Compact size encoded bytes
    """
    if n < 0xfd:
        return struct.pack('<B', n)
    elif n <= 0xffff:
        return b'\xfd' + struct.pack('<H', n)
    elif n <= 0xffffffff:
        return b'\xfe' + struct.pack('<I', n)
    else:
        return b'\xff' + struct.pack('<Q', n)


@dataclass(frozen=True)
class TapLeaf:
    """Represents a single leaf in the Taproot script tree."""
    script: bytes
    leaf_version: int = TAPSCRIPT_LEAF_VERSION

    def __post_init__(self):
        """Validate leaf parameters."""
        if not self.script:
            raise EncodingError("Tap leaf script cannot be empty")
        if len(self.script) > MAX_LEAF_SCRIPT_SIZE:
            raise EncodingError("Tap leaf script too large")
        if self.leaf_version & TAPROOT_LEAF_MASK != self.leaf_version:
            raise EncodingError(f"Invalid leaf version: {self.leaf_version:#x}")

    def leaf_hash(self) -> bytes:
        """Compute TapLeaf hash for this leaf."""
        return compute_leaf_hash(self)


@dataclass(frozen=True)
class TapBranch:
    """Represents an internal node in the Taproot script tree."""
    left: Union['TapBranch', TapLeaf]
    right: Union['TapBranch', TapLeaf]

    def branch_hash(self) -> bytes:
        """Compute TapBranch hash for this internal node."""
        return tap_branch_hash(_node_hash(self.left), _node_hash(self.right))


def _node_hash(node: Union[TapBranch, TapLeaf]) -> bytes:
    if isinstance(node, TapLeaf):
        return node.leaf_hash()
    return node.branch_hash()


def compute_leaf_hash(leaf: TapLeaf) -> bytes:
    """
    Compute the BIP341 leaf hash.

    tagged_hash("TapLeaf", leaf_version || compact_size(len(script)) || script)
    """
    return tagged_hash(
        "TapLeaf",
        bytes([leaf.leaf_version]) + serialize_compact_size(len(leaf.script)) + leaf.script
    )


def tap_branch_hash(left: bytes, right: bytes) -> bytes:
    """Combine two child hashes, smaller one first."""
    if right < left:
        left, right = right, left
    return tagged_hash("TapBranch", left + right)


def build_script_tree(leaves: Sequence[TapLeaf]) -> Union[TapBranch, TapLeaf]:
    """
    Build balanced script tree from leaves.

    Args:
        leaves: List of tap leaves

    Returns:
        Root of the script tree
    """
    if not leaves:
        raise EmptyTreeError("Script tree requires at least one leaf")

    current_level: List[Union[TapBranch, TapLeaf]] = list(leaves)

    while len(current_level) > 1:
        next_level = []

        # Pair up nodes
        for i in range(0, len(current_level), 2):
            if i + 1 < len(current_level):
                next_level.append(TapBranch(current_level[i], current_level[i + 1]))
            else:
                # Odd node carries forward
                next_level.append(current_level[i])

        current_level = next_level

    return current_level[0]


def compute_merkle_root(leaves: Sequence[TapLeaf]) -> bytes:
    """
    Compute the Merkle root of a set of leaves.

    Args:
        leaves: One or more tap leaves

    Returns:
        32-byte Merkle root
    """
    root = _node_hash(build_script_tree(leaves))
    logger.debug(f"Merkle root over {len(leaves)} leaves: {root.hex()}")
    return root


@dataclass(frozen=True)
class TapTree:
    """Ordered, immutable set of leaves committed to by a Taproot output."""
    leaves: Tuple[TapLeaf, ...]

    def __post_init__(self):
        if not self.leaves:
            raise EmptyTreeError("Script tree requires at least one leaf")
        object.__setattr__(self, 'leaves', tuple(self.leaves))

    @classmethod
    def from_scripts(cls, scripts: Sequence[bytes],
                     leaf_version: int = TAPSCRIPT_LEAF_VERSION) -> 'TapTree':
        return cls(tuple(TapLeaf(script, leaf_version) for script in scripts))

    def leaf_hashes(self) -> List[bytes]:
        return [leaf.leaf_hash() for leaf in self.leaves]

    def merkle_root(self) -> bytes:
        return compute_merkle_root(self.leaves)
