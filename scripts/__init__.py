"""
TapHeir - Script and Taproot Commitment Module

- assembler: tapscript compilation and the trust leaf scripts
- taptree: TapLeaf hashes and Merkle roots
- taproot: internal key tweaking and output scripts
- bech32m / address: Taproot address encoding and validation
"""

from .exceptions import (
    ScriptError,
    EncodingError,
    EmptyTreeError,
    InvalidLocktimeError,
    InvalidAddressError,
)
from .assembler import (
    LOCKTIME_THRESHOLD,
    ScriptOpcode,
    PushBytes,
    PushInt,
    Opcode,
    compile_script,
    script_to_asm,
    build_timelock_script,
    build_oracle_script,
)
from .taptree import TapLeaf, TapBranch, TapTree, compute_leaf_hash, compute_merkle_root
from .taproot import TaprootCommitment, commit, taproot_output_script
from .address import (
    DecodedAddress,
    encode_taproot_address,
    decode_address,
    address_to_output_script,
    is_valid_taproot_address,
)

__all__ = [
    "ScriptError",
    "EncodingError",
    "EmptyTreeError",
    "InvalidLocktimeError",
    "InvalidAddressError",
    "LOCKTIME_THRESHOLD",
    "ScriptOpcode",
    "PushBytes",
    "PushInt",
    "Opcode",
    "compile_script",
    "script_to_asm",
    "build_timelock_script",
    "build_oracle_script",
    "TapLeaf",
    "TapBranch",
    "TapTree",
    "compute_leaf_hash",
    "compute_merkle_root",
    "TaprootCommitment",
    "commit",
    "taproot_output_script",
    "DecodedAddress",
    "encode_taproot_address",
    "decode_address",
    "address_to_output_script",
    "is_valid_taproot_address",
]
