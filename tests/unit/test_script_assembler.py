"""
Tests for tapscript assembly and the trust leaf scripts.
"""

import pytest

from scripts.assembler import (
    LOCKTIME_THRESHOLD,
    ScriptOpcode,
    PushBytes,
    PushInt,
    Opcode,
    encode_script_num,
    compile_script,
    script_to_asm,
    validate_locktime,
    build_timelock_script,
    build_oracle_script,
)
from scripts.exceptions import EncodingError, InvalidLocktimeError


HEIR = bytes.fromhex("c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5")
ORACLE = bytes.fromhex("f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9")


class TestScriptNumbers:

    @pytest.mark.parametrize("value,expected", [
        (0, ""),
        (1, "01"),
        (0x7f, "7f"),
        (0x80, "8000"),
        (0xff, "ff00"),
        (0x100, "0001"),
        (500_000_000, "0065cd1d"),
        (0xffffffff, "ffffffff00"),
    ])
    def test_minimal_encoding(self, value, expected):
        assert encode_script_num(value).hex() == expected

    def test_negative_rejected(self):
        with pytest.raises(EncodingError):
            encode_script_num(-1)


class TestCompileScript:

    def test_small_integers_use_opcodes(self):
        assert compile_script([PushInt(0)]) == bytes([ScriptOpcode.OP_0])
        assert compile_script([PushInt(1)]) == bytes([ScriptOpcode.OP_1])
        assert compile_script([PushInt(16)]) == bytes([ScriptOpcode.OP_16])

    def test_larger_integers_are_pushed(self):
        assert compile_script([PushInt(17)]).hex() == "0111"
        assert compile_script([PushInt(0x80)]).hex() == "028000"
        assert compile_script([PushInt(500_000_000)]).hex() == "040065cd1d"

    def test_push_bytes(self):
        assert compile_script([PushBytes(b'')]) == b'\x00'
        assert compile_script([PushBytes(b'\xab' * 75)]) == b'\x4b' + b'\xab' * 75

    def test_push_too_large(self):
        with pytest.raises(EncodingError):
            compile_script([PushBytes(b'\x00' * 76)])

    def test_negative_int_rejected(self):
        with pytest.raises(EncodingError):
            compile_script([PushInt(-1)])

    def test_opcode_validation(self):
        assert compile_script([Opcode(ScriptOpcode.OP_CHECKSIG)]) == b'\xac'
        with pytest.raises(EncodingError):
            compile_script([Opcode(0x20)])
        with pytest.raises(EncodingError):
            compile_script([Opcode(ScriptOpcode.OP_PUSHDATA1)])
        with pytest.raises(EncodingError):
            compile_script([Opcode(0xff)])

    def test_empty_script(self):
        with pytest.raises(EncodingError):
            compile_script([])

    def test_unknown_operation(self):
        with pytest.raises(EncodingError):
            compile_script(["OP_CHECKSIG"])


class TestDisassembly:

    def test_script_to_asm(self):
        script = compile_script([
            PushInt(500_000_000),
            Opcode(ScriptOpcode.OP_CHECKLOCKTIMEVERIFY),
            Opcode(ScriptOpcode.OP_DROP),
        ])
        assert script_to_asm(script) == "0065cd1d OP_CHECKLOCKTIMEVERIFY OP_DROP"

    def test_truncated_push(self):
        with pytest.raises(EncodingError):
            script_to_asm(b'\x05\x01\x02')


class TestLocktime:

    def test_threshold_boundary(self):
        assert validate_locktime(LOCKTIME_THRESHOLD) == LOCKTIME_THRESHOLD
        with pytest.raises(InvalidLocktimeError) as exc_info:
            validate_locktime(LOCKTIME_THRESHOLD - 1)
        assert exc_info.value.locktime == 499_999_999

    def test_rejects_non_integers_and_overflow(self):
        with pytest.raises(InvalidLocktimeError):
            validate_locktime(True)
        with pytest.raises(InvalidLocktimeError):
            validate_locktime(5.0e8)
        with pytest.raises(InvalidLocktimeError):
            validate_locktime(0x1_0000_0000)


class TestTrustScripts:

    def test_timelock_script_layout(self):
        script = build_timelock_script(500_000_000, HEIR)
        assert script.hex() == "040065cd1db17520" + HEIR.hex() + "ac"
        assert script_to_asm(script) == (
            f"0065cd1d OP_CHECKLOCKTIMEVERIFY OP_DROP {HEIR.hex()} OP_CHECKSIG"
        )

    def test_timelock_script_rejects_block_height(self):
        with pytest.raises(InvalidLocktimeError):
            build_timelock_script(499_999_999, HEIR)

    def test_oracle_script_layout(self):
        script = build_oracle_script(ORACLE, HEIR)
        assert script.hex() == "20" + ORACLE.hex() + "ad20" + HEIR.hex() + "ac"
        assert script_to_asm(script) == f"{ORACLE.hex()} OP_CHECKSIGVERIFY {HEIR.hex()} OP_CHECKSIG"

    def test_keys_must_be_x_only(self):
        with pytest.raises(EncodingError):
            build_oracle_script(b'\x02' + ORACLE, HEIR)
        with pytest.raises(EncodingError):
            build_timelock_script(500_000_000, HEIR[:31])
