"""
TapHeir - Script Assembler

Compiles an ordered list of primitive operations (push-bytes, push-int,
opcode) into canonical tapscript bytes, and builds the two leaf scripts of
an inheritance trust:

- Timelock leaf: <locktime> OP_CHECKLOCKTIMEVERIFY OP_DROP <heir> OP_CHECKSIG
- Oracle leaf:   <oracle> OP_CHECKSIGVERIFY <heir> OP_CHECKSIG
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Union

from .exceptions import EncodingError, InvalidLocktimeError


logger = logging.getLogger(__name__)


# BIP65: nLockTime values below this are block heights, at or above are Unix times
LOCKTIME_THRESHOLD = 500_000_000
MAX_LOCKTIME = 0xFFFFFFFF

MAX_DIRECT_PUSH = 75


class ScriptOpcode:
    """Bitcoin Script opcodes used in trust leaf construction."""

    # Constants
    OP_0 = 0x00
    OP_FALSE = OP_0
    OP_PUSHDATA1 = 0x4c
    OP_PUSHDATA2 = 0x4d
    OP_PUSHDATA4 = 0x4e
    OP_1NEGATE = 0x4f
    OP_1 = 0x51
    OP_TRUE = OP_1
    OP_2 = 0x52
    OP_3 = 0x53
    OP_4 = 0x54
    OP_5 = 0x55
    OP_6 = 0x56
    OP_7 = 0x57
    OP_8 = 0x58
    OP_9 = 0x59
    OP_10 = 0x5a
    OP_11 = 0x5b
    OP_12 = 0x5c
    OP_13 = 0x5d
    OP_14 = 0x5e
    OP_15 = 0x5f
    OP_16 = 0x60

    # Flow control
    OP_NOP = 0x61
    OP_IF = 0x63
    OP_NOTIF = 0x64
    OP_ELSE = 0x67
    OP_ENDIF = 0x68
    OP_VERIFY = 0x69
    OP_RETURN = 0x6a

    # Stack operations
    OP_TOALTSTACK = 0x6b
    OP_FROMALTSTACK = 0x6c
    OP_2DROP = 0x6d
    OP_2DUP = 0x6e
    OP_IFDUP = 0x73
    OP_DEPTH = 0x74
    OP_DROP = 0x75
    OP_DUP = 0x76
    OP_NIP = 0x77
    OP_OVER = 0x78
    OP_SWAP = 0x7c
    OP_SIZE = 0x82

    # Comparison and arithmetic
    OP_EQUAL = 0x87
    OP_EQUALVERIFY = 0x88
    OP_1ADD = 0x8b
    OP_1SUB = 0x8c
    OP_NOT = 0x91
    OP_ADD = 0x93
    OP_SUB = 0x94
    OP_BOOLAND = 0x9a
    OP_BOOLOR = 0x9b
    OP_NUMEQUAL = 0x9c
    OP_NUMEQUALVERIFY = 0x9d
    OP_LESSTHAN = 0x9f
    OP_GREATERTHAN = 0xa0
    OP_LESSTHANOREQUAL = 0xa1
    OP_GREATERTHANOREQUAL = 0xa2
    OP_WITHIN = 0xa5

    # Crypto
    OP_RIPEMD160 = 0xa6
    OP_SHA256 = 0xa8
    OP_HASH160 = 0xa9
    OP_HASH256 = 0xaa
    OP_CHECKSIG = 0xac
    OP_CHECKSIGVERIFY = 0xad

    # Locktime
    OP_CHECKLOCKTIMEVERIFY = 0xb1
    OP_CHECKSEQUENCEVERIFY = 0xb2

    # Tapscript
    OP_CHECKSIGADD = 0xba


def _build_opcode_names() -> Dict[int, str]:
    names: Dict[int, str] = {}
    for attr, value in vars(ScriptOpcode).items():
        if attr.startswith('OP_') and value not in names:
            names[value] = attr
    # Canonical spellings for aliased values
    names[ScriptOpcode.OP_0] = 'OP_0'
    names[ScriptOpcode.OP_1] = 'OP_1'
    return names


OPCODE_NAMES = _build_opcode_names()
PUSH_OPCODES = {ScriptOpcode.OP_PUSHDATA1, ScriptOpcode.OP_PUSHDATA2, ScriptOpcode.OP_PUSHDATA4}


@dataclass(frozen=True)
class PushBytes:
    """Push raw bytes onto the stack."""
    data: bytes


@dataclass(frozen=True)
class PushInt:
    """Push a non-negative script number onto the stack."""
    value: int


@dataclass(frozen=True)
class Opcode:
    """Emit a single non-push opcode."""
    code: int


Op = Union[PushBytes, PushInt, Opcode]


def encode_script_num(value: int) -> bytes:
    """
    Encode an integer as a minimal Bitcoin script number.

    Little-endian magnitude with the sign carried in the top bit of the last
    byte. Zero encodes to the empty byte string.

    Args:
        value: Non-negative integer

    Returns:
        Minimal script number encoding
    """
    if value < 0:
        raise EncodingError(f"Negative script numbers are not supported: {value}")
    if value == 0:
        return b''

    result = []
    while value > 0:
        result.append(value & 0xff)
        value >>= 8

    # A set high bit would be read back as the sign flag
    if result[-1] & 0x80:
        result.append(0x00)

    return bytes(result)


def _encode_push_bytes(data: bytes) -> bytes:
    if not isinstance(data, (bytes, bytearray)):
        raise EncodingError(f"PushBytes requires bytes, got {type(data).__name__}")
    if len(data) == 0:
        return bytes([ScriptOpcode.OP_0])
    if len(data) > MAX_DIRECT_PUSH:
        raise EncodingError(f"Push of {len(data)} bytes exceeds the single-byte length limit")
    return bytes([len(data)]) + bytes(data)


def _encode_push_int(value: int) -> bytes:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"PushInt requires an integer, got {value!r}")
    if value < 0:
        raise EncodingError(f"Negative integers cannot be pushed: {value}")
    if value == 0:
        return bytes([ScriptOpcode.OP_0])
    if value <= 16:
        return bytes([ScriptOpcode.OP_1 + value - 1])
    return _encode_push_bytes(encode_script_num(value))


def _encode_opcode(code: int) -> bytes:
    if isinstance(code, bool) or not isinstance(code, int):
        raise EncodingError(f"Opcode requires an integer, got {code!r}")
    if code in PUSH_OPCODES or 0x01 <= code <= MAX_DIRECT_PUSH:
        raise EncodingError(f"Data push opcode {code:#04x} must be emitted with PushBytes")
    if code not in OPCODE_NAMES:
        raise EncodingError(f"Unknown opcode: {code:#04x}")
    return bytes([code])


def compile_script(ops: Iterable[Op]) -> bytes:
    """
    Compile primitive operations into script bytes.

    Args:
        ops: Sequence of PushBytes, PushInt and Opcode operations

    Returns:
        Serialized script
    """
    parts: List[bytes] = []
    for op in ops:
        if isinstance(op, PushBytes):
            parts.append(_encode_push_bytes(op.data))
        elif isinstance(op, PushInt):
            parts.append(_encode_push_int(op.value))
        elif isinstance(op, Opcode):
            parts.append(_encode_opcode(op.code))
        else:
            raise EncodingError(f"Unsupported script operation: {op!r}")

    script = b''.join(parts)
    if not script:
        raise EncodingError("Script is empty")
    return script


def script_to_asm(script: bytes) -> str:
    """
    Disassemble script bytes to a human-readable assembly string.

    Args:
        script: Script bytes

    Returns:
        Space-separated opcodes and hex data pushes
    """
    tokens: List[str] = []
    i = 0
    while i < len(script):
        opcode = script[i]
        i += 1

        if 0x01 <= opcode <= MAX_DIRECT_PUSH or opcode in PUSH_OPCODES:
            if opcode <= MAX_DIRECT_PUSH:
                length = opcode
            else:
                size = {ScriptOpcode.OP_PUSHDATA1: 1,
                        ScriptOpcode.OP_PUSHDATA2: 2,
                        ScriptOpcode.OP_PUSHDATA4: 4}[opcode]
                if i + size > len(script):
                    raise EncodingError("Truncated push length")
                length = int.from_bytes(script[i:i + size], 'little')
                i += size
            if i + length > len(script):
                raise EncodingError(f"Push of {length} bytes runs past end of script")
            tokens.append(script[i:i + length].hex())
            i += length
        else:
            tokens.append(OPCODE_NAMES.get(opcode, f"OP_UNKNOWN[{opcode:#04x}]"))

    return " ".join(tokens)


def validate_locktime(locktime: int) -> int:
    """Check an absolute timestamp locktime and return it unchanged."""
    if isinstance(locktime, bool) or not isinstance(locktime, int):
        raise InvalidLocktimeError(locktime, f"Locktime must be an integer, got {locktime!r}")
    if locktime < LOCKTIME_THRESHOLD:
        raise InvalidLocktimeError(locktime)
    if locktime > MAX_LOCKTIME:
        raise InvalidLocktimeError(locktime, f"Locktime {locktime} does not fit in 32 bits")
    return locktime


def _require_x_only(name: str, key: bytes) -> bytes:
    if not isinstance(key, (bytes, bytearray)) or len(key) != 32:
        raise EncodingError(f"{name} must be a 32-byte x-only public key")
    return bytes(key)


def build_timelock_script(locktime: int, heir_pubkey: bytes) -> bytes:
    """
    Build the timelock leaf: the heir may spend once ``locktime`` has passed.

    Args:
        locktime: Absolute Unix timestamp (>= 500000000)
        heir_pubkey: Heir's 32-byte x-only public key

    Returns:
        Tapscript bytes
    """
    validate_locktime(locktime)
    heir_pubkey = _require_x_only("Heir pubkey", heir_pubkey)

    script = compile_script([
        PushInt(locktime),
        Opcode(ScriptOpcode.OP_CHECKLOCKTIMEVERIFY),
        Opcode(ScriptOpcode.OP_DROP),
        PushBytes(heir_pubkey),
        Opcode(ScriptOpcode.OP_CHECKSIG),
    ])
    logger.debug(f"Built timelock script for locktime {locktime}: {script.hex()}")
    return script


def build_oracle_script(oracle_pubkey: bytes, heir_pubkey: bytes) -> bytes:
    """
    Build the oracle leaf: oracle and heir signatures are both required.

    Args:
        oracle_pubkey: Oracle's 32-byte x-only public key
        heir_pubkey: Heir's 32-byte x-only public key

    Returns:
        Tapscript bytes
    """
    oracle_pubkey = _require_x_only("Oracle pubkey", oracle_pubkey)
    heir_pubkey = _require_x_only("Heir pubkey", heir_pubkey)

    script = compile_script([
        PushBytes(oracle_pubkey),
        Opcode(ScriptOpcode.OP_CHECKSIGVERIFY),
        PushBytes(heir_pubkey),
        Opcode(ScriptOpcode.OP_CHECKSIG),
    ])
    logger.debug(f"Built oracle script: {script.hex()}")
    return script
