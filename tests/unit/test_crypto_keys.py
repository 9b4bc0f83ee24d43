"""
Tests for Crypto Keys Module

Tests private/public key operations, tagged hashing and x-only key
normalization.
"""

import hashlib

import pytest

from crypto.keys import (
    CURVE_ORDER,
    PrivateKey,
    PublicKey,
    tagged_hash,
    lift_x,
    has_even_y,
    to_x_only,
    require_valid_x_only,
)
from crypto.exceptions import InvalidKeyError


G_X = bytes.fromhex("79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")
TWO_G_X = bytes.fromhex("c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5")
# x-coordinate with no point on secp256k1
OFF_CURVE_X = bytes.fromhex("eefdea4cdb677750a420fee807eacf21eb9898ae79b9768766e4faa04a2d4a34")


class TestPrivateKey:
    """Test PrivateKey class functionality."""

    def test_random_key_generation(self):
        key1 = PrivateKey()
        key2 = PrivateKey()

        assert key1.bytes != key2.bytes
        assert len(key1.bytes) == 32

    def test_key_from_bytes(self):
        key_bytes = b'\x01' * 32
        key = PrivateKey(key_bytes)
        assert key.bytes == key_bytes

    def test_key_from_bytearray(self):
        key = PrivateKey(bytearray(b'\x01' * 32))
        assert key.bytes == b'\x01' * 32

    def test_invalid_key_bytes(self):
        """Test invalid key bytes handling."""
        with pytest.raises(InvalidKeyError):
            PrivateKey(b'\x01' * 31)

        with pytest.raises(InvalidKeyError):
            PrivateKey(b'\x01' * 33)

        with pytest.raises(InvalidKeyError):
            PrivateKey(b'\x00' * 32)

        with pytest.raises(InvalidKeyError):
            PrivateKey(CURVE_ORDER.to_bytes(32, 'big'))

    def test_from_hex(self):
        key = PrivateKey.from_hex("01" * 32)
        assert key.hex == "01" * 32

        with pytest.raises(InvalidKeyError):
            PrivateKey.from_hex("not hex")

    def test_repr_hides_secret(self):
        key = PrivateKey(b'\x07' * 32)
        assert "07" * 32 not in repr(key)

    def test_generator_public_key(self):
        """Private key 1 yields the generator point."""
        key = PrivateKey((1).to_bytes(32, 'big'))
        public_key = key.public_key()

        assert isinstance(public_key, PublicKey)
        assert public_key.bytes == b'\x02' + G_X
        assert len(public_key.uncompressed_bytes) == 65
        assert key.x_only == G_X


class TestPublicKey:
    """Test PublicKey class functionality."""

    def test_invalid_lengths(self):
        with pytest.raises(InvalidKeyError):
            PublicKey(b'\x02' * 32)

        with pytest.raises(InvalidKeyError):
            PublicKey("02" * 33)

    def test_not_on_curve(self):
        with pytest.raises(InvalidKeyError):
            PublicKey(b'\x02' + OFF_CURVE_X)

    def test_from_x_only_has_even_y(self):
        public_key = PublicKey.from_x_only(G_X)
        assert public_key.has_even_y
        assert public_key.x_only == G_X

    def test_equality(self):
        a = PublicKey.from_x_only(G_X)
        b = PrivateKey((1).to_bytes(32, 'big')).public_key()
        assert a == b
        assert hash(a) == hash(b)
        assert a != PublicKey.from_x_only(TWO_G_X)

    def test_add_generator_multiple(self):
        """G + 1*G == 2G."""
        g = PublicKey.from_x_only(G_X)
        assert g.add_generator_multiple(1).x_only == TWO_G_X
        assert g.add_generator_multiple(0) is g

    def test_add_generator_multiple_infinity(self):
        """G + (n-1)*G is the point at infinity."""
        g = PublicKey.from_x_only(G_X)
        with pytest.raises(ValueError):
            g.add_generator_multiple(CURVE_ORDER - 1)


class TestTaggedHash:

    def test_matches_definition(self):
        tag = hashlib.sha256(b"TapLeaf").digest()
        expected = hashlib.sha256(tag + tag + b"data").digest()
        assert tagged_hash("TapLeaf", b"data") == expected

    def test_tags_are_domain_separated(self):
        assert tagged_hash("TapLeaf", b"x") != tagged_hash("TapBranch", b"x")


class TestXOnlyKeys:

    def test_lift_x_on_curve(self):
        assert lift_x(G_X) == b'\x02' + G_X

    def test_lift_x_off_curve(self):
        assert lift_x(OFF_CURVE_X) is None
        assert lift_x(b'\xff' * 32) is None
        assert lift_x(G_X[:31]) is None

    def test_has_even_y(self):
        assert has_even_y(b'\x02' + G_X)
        assert not has_even_y(b'\x03' + G_X)
        assert not has_even_y(G_X)

    def test_to_x_only_formats(self):
        public_key = PublicKey.from_x_only(G_X)

        assert to_x_only(G_X) == G_X
        assert to_x_only(public_key.bytes) == G_X
        assert to_x_only(public_key.uncompressed_bytes) == G_X
        assert to_x_only(public_key.hex) == G_X
        assert to_x_only(b'\x03' + G_X) == G_X

    def test_to_x_only_rejects_bad_input(self):
        with pytest.raises(InvalidKeyError):
            to_x_only(b'\x05' + G_X)
        with pytest.raises(InvalidKeyError):
            to_x_only(b'\x01' * 20)
        with pytest.raises(InvalidKeyError):
            to_x_only("zz")
        with pytest.raises(InvalidKeyError):
            to_x_only(12345)

    def test_require_valid_x_only(self):
        assert require_valid_x_only(G_X.hex()) == G_X
        with pytest.raises(InvalidKeyError):
            require_valid_x_only(OFF_CURVE_X)
