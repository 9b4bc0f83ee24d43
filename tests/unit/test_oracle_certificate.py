"""
Tests for oracle certificate issuance and verification.
"""

import hashlib
from dataclasses import replace

import pytest

from oracle.certificate import (
    Certificate,
    build_certificate_message,
    describe_oracle,
    explain_oracle_role,
    generate_certificate_id,
    issue_certificate,
    oracle_signing_key,
    verify_certificate,
)
from oracle.exceptions import CertificateError, InvalidIdentifierError


TRUST_ID = "tb1ptest"
TIMESTAMP = 1_700_000_000


@pytest.fixture
def certificate(oracle_key):
    return issue_certificate(oracle_key, TRUST_ID, "Alice", timestamp=TIMESTAMP)


class TestMessage:

    def test_layout(self):
        assert build_certificate_message("trust-1", "Alice", 1700000000) == "DEATH_CERT:trust-1:Alice:1700000000"

    def test_delimiter_rejected(self):
        with pytest.raises(InvalidIdentifierError):
            build_certificate_message("a:b", "Alice", TIMESTAMP)
        with pytest.raises(InvalidIdentifierError):
            build_certificate_message("trust", "Alice:Bob", TIMESTAMP)

    def test_empty_trust_id_rejected(self):
        with pytest.raises(InvalidIdentifierError):
            build_certificate_message("", "Alice", TIMESTAMP)

    def test_certificate_id(self):
        assert generate_certificate_id("tb1ptest", 0x6553F100) == "CERT-74623170-6553F100"
        assert generate_certificate_id("ab", 255) == "CERT-6162-FF"


class TestIssue:

    def test_fields(self, certificate, oracle_key):
        message = f"DEATH_CERT:{TRUST_ID}:Alice:{TIMESTAMP}"
        assert certificate.message == message
        assert certificate.message_hash == hashlib.sha256(message.encode()).digest()
        assert len(certificate.signature) == 64
        assert certificate.oracle_public_key == oracle_key.x_only
        assert certificate.certificate_id == generate_certificate_id(TRUST_ID, TIMESTAMP)
        assert certificate.issued_at == "2023-11-14T22:13:20+00:00"

    def test_verifies(self, certificate):
        assert verify_certificate(certificate)

    def test_accepts_raw_key_bytes(self, oracle_key):
        cert = issue_certificate(bytearray(oracle_key.bytes), TRUST_ID, "Alice", timestamp=TIMESTAMP)
        assert verify_certificate(cert)

    def test_deterministic_with_aux_rand(self, oracle_key):
        aux = b'\x07' * 32
        a = issue_certificate(oracle_key, TRUST_ID, "Alice", TIMESTAMP, aux_rand=aux)
        b = issue_certificate(oracle_key, TRUST_ID, "Alice", TIMESTAMP, aux_rand=aux)
        assert a == b

    def test_default_timestamp(self, oracle_key):
        cert = issue_certificate(oracle_key, TRUST_ID, "Alice")
        assert cert.timestamp > TIMESTAMP

    def test_invalid_timestamp(self, oracle_key):
        with pytest.raises(InvalidIdentifierError):
            issue_certificate(oracle_key, TRUST_ID, "Alice", timestamp=-1)
        with pytest.raises(InvalidIdentifierError):
            issue_certificate(oracle_key, TRUST_ID, "Alice", timestamp="now")


class TestVerify:

    def test_tampered_name(self, certificate):
        forged = replace(certificate, person_name="Bob", message=certificate.message.replace("Alice", "Bob"))
        assert not verify_certificate(forged)

    def test_message_hash_mismatch(self, certificate):
        assert not verify_certificate(replace(certificate, message=certificate.message + "0"))

    def test_wrong_oracle_key(self, certificate, heir_key):
        assert not verify_certificate(replace(certificate, oracle_public_key=heir_key.x_only))

    def test_flipped_signature_bit(self, certificate):
        sig = bytearray(certificate.signature)
        sig[0] ^= 0x80
        assert not verify_certificate(replace(certificate, signature=bytes(sig)))

    def test_truncated_signature(self, certificate):
        assert not verify_certificate(replace(certificate, signature=certificate.signature[:63]))

    def test_dict_form(self, certificate):
        data = certificate.to_dict()
        assert verify_certificate(data)
        assert Certificate.from_dict(data) == certificate

        data["signature"] = "00" * 64
        assert not verify_certificate(data)

    def test_malformed_dict(self):
        assert not verify_certificate({"trust_id": TRUST_ID})
        with pytest.raises(CertificateError):
            Certificate.from_dict({"trust_id": TRUST_ID})

    def test_compressed_oracle_key(self, certificate, oracle_key):
        cert = replace(certificate, oracle_public_key=oracle_key.public_key().bytes)
        assert verify_certificate(cert)


class TestSigningKey:

    def test_buffer_zeroed_on_exit(self, oracle_key):
        with oracle_signing_key(oracle_key.bytes) as key:
            assert bytes(key) == oracle_key.bytes
            held = key
        assert held == bytearray(32)

    def test_buffer_zeroed_on_error(self, oracle_key):
        with pytest.raises(RuntimeError):
            with oracle_signing_key(oracle_key.bytes) as key:
                held = key
                raise RuntimeError("boom")
        assert held == bytearray(32)

    def test_issue_from_buffer(self, oracle_key):
        with oracle_signing_key(oracle_key.bytes) as key:
            cert = issue_certificate(key, TRUST_ID, "Alice", TIMESTAMP)
            held = key
        assert held == bytearray(32)
        assert cert.oracle_public_key == oracle_key.x_only
        assert verify_certificate(cert)


class TestDescribe:

    def test_describe_oracle(self, oracle_key):
        info = describe_oracle(oracle_key.public_key().hex)
        assert info["public_key"] == oracle_key.x_only.hex()
        assert info["service_name"] == "TapHeir Oracle Service"
        assert "Death Certificate Issuance" in info["capabilities"]

    def test_explain_oracle_role(self):
        role = explain_oracle_role()
        assert "death" in role["purpose"]
        assert len(role["workflow"]) == 4
        assert role["workflow"][0].startswith("1.")
        assert role["advantages"]
        assert any("HSM" in item for item in role["production_requirements"])
