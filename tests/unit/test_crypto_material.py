"""
Tests for WIF encoding and key material generation.
"""

import pytest

from crypto.exceptions import KeyMaterialError
from crypto.material import KeyMaterial, generate_key_pair, key_material_from_wif
from crypto.wif import encode_wif, decode_wif
from network.params import Network


KEY_ONE = (1).to_bytes(32, 'big')


class TestWIF:
    """Known encodings of private key 1."""

    def test_mainnet_compressed(self):
        assert encode_wif(KEY_ONE, Network.MAIN) == "KwDiBf89QgGbjEhKnhXJuH7LrciVrZi3qYjgd9M7rFU73sVHnoWn"

    def test_mainnet_uncompressed(self):
        wif = encode_wif(KEY_ONE, Network.MAIN, compressed=False)
        assert wif == "5HpHagT65TZzG1PH3CSu63k8DbpvD8s5ip4nEB3kEsreAnchuDf"

    def test_testnet_compressed(self):
        assert encode_wif(KEY_ONE, Network.TEST) == "cMahea7zqjxrtgAbB7LSGbcQUr1uX1ojuat9jZodMN87JcbXMTcA"

    def test_decode(self):
        key, network, compressed = decode_wif("cMahea7zqjxrtgAbB7LSGbcQUr1uX1ojuat9jZodMN87JcbXMTcA")
        assert key == KEY_ONE
        assert network is Network.TEST
        assert compressed

        key, network, compressed = decode_wif("5HpHagT65TZzG1PH3CSu63k8DbpvD8s5ip4nEB3kEsreAnchuDf")
        assert key == KEY_ONE
        assert network is Network.MAIN
        assert not compressed

    def test_decode_bad_checksum(self):
        with pytest.raises(KeyMaterialError):
            decode_wif("KwDiBf89QgGbjEhKnhXJuH7LrciVrZi3qYjgd9M7rFU73sVHnoWo")

    def test_encode_wrong_length(self):
        with pytest.raises(KeyMaterialError):
            encode_wif(b'\x01' * 31, Network.MAIN)


class TestKeyMaterial:

    def test_generate_random(self):
        material = generate_key_pair()
        assert isinstance(material, KeyMaterial)
        assert len(material.private_key) == 32
        assert len(material.public_key) == 33
        assert material.x_only == material.public_key[1:]
        assert material.network is Network.TEST

    def test_generate_from_private_key(self):
        material = generate_key_pair(Network.MAIN, KEY_ONE)
        assert material.x_only.hex() == "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
        assert material.wif == "KwDiBf89QgGbjEhKnhXJuH7LrciVrZi3qYjgd9M7rFU73sVHnoWn"

    def test_from_wif(self):
        material = key_material_from_wif("cMahea7zqjxrtgAbB7LSGbcQUr1uX1ojuat9jZodMN87JcbXMTcA")
        assert material.private_key == KEY_ONE
        assert material.network is Network.TEST

    def test_to_dict_and_repr(self):
        material = generate_key_pair(Network.TEST, KEY_ONE)
        data = material.to_dict()
        assert data["private_key"] == KEY_ONE.hex()
        assert data["network"] == "testnet"
        assert KEY_ONE.hex() not in repr(material)
