"""
TapHeir - Oracle Certificate Service

A designated oracle attests that the owner of a trust has died, which
authorizes the trust's oracle spending path. Issuance is a pure function of
the oracle's private key and the certificate fields:

    message      = "DEATH_CERT:" || trust_id || ":" || person_name || ":" || timestamp
    message_hash = SHA256(message)
    signature    = BIP340 Schnorr signature over message_hash

A certificate is verifiable with nothing but its own fields.
"""

import hashlib
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, Union

from crypto.keys import PrivateKey, to_x_only
from crypto.signatures import SCHNORR_SIGNATURE_SIZE, sign_schnorr, verify_schnorr
from .exceptions import CertificateError, InvalidIdentifierError


logger = logging.getLogger(__name__)


MESSAGE_PREFIX = "DEATH_CERT"
FIELD_DELIMITER = ":"
CERTIFICATE_ID_PREFIX = "CERT"

SERVICE_NAME = "TapHeir Oracle Service"
SERVICE_VERSION = "1.0.0"


@dataclass(frozen=True)
class Certificate:
    """Signed oracle attestation for a trust."""
    trust_id: str
    person_name: str
    timestamp: int
    message: str
    message_hash: bytes
    signature: bytes
    oracle_public_key: bytes
    certificate_id: str

    @property
    def issued_at(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "certificate_id": self.certificate_id,
            "trust_id": self.trust_id,
            "person_name": self.person_name,
            "timestamp": self.timestamp,
            "issued_at": self.issued_at,
            "message": self.message,
            "message_hash": self.message_hash.hex(),
            "signature": self.signature.hex(),
            "oracle_public_key": self.oracle_public_key.hex(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Certificate':
        try:
            return cls(
                trust_id=str(data["trust_id"]),
                person_name=str(data["person_name"]),
                timestamp=int(data["timestamp"]),
                message=str(data["message"]),
                message_hash=bytes.fromhex(data["message_hash"]),
                signature=bytes.fromhex(data["signature"]),
                oracle_public_key=bytes.fromhex(data["oracle_public_key"]),
                certificate_id=str(data["certificate_id"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise CertificateError(f"Malformed certificate: {e}")


def _check_field(name: str, value: str) -> str:
    if not isinstance(value, str):
        raise InvalidIdentifierError(f"{name} must be a string")
    if FIELD_DELIMITER in value:
        raise InvalidIdentifierError(f"{name} must not contain '{FIELD_DELIMITER}': {value!r}")
    return value


def build_certificate_message(trust_id: str, person_name: str, timestamp: int) -> str:
    """Build the colon-delimited message an oracle signs."""
    _check_field("trust_id", trust_id)
    _check_field("person_name", person_name)
    if not trust_id:
        raise InvalidIdentifierError("trust_id must not be empty")
    return FIELD_DELIMITER.join([MESSAGE_PREFIX, trust_id, person_name, str(timestamp)])


def hash_certificate_message(message: str) -> bytes:
    return hashlib.sha256(message.encode('utf-8')).digest()


def generate_certificate_id(trust_id: str, timestamp: int) -> str:
    """
    Derive a certificate id from the first four bytes of the trust id and
    the issuance time, e.g. ``CERT-74623170-65A1B2C3``.
    """
    short_id = trust_id.encode('utf-8')[:4].hex().upper()
    return f"{CERTIFICATE_ID_PREFIX}-{short_id}-{timestamp:X}"


def issue_certificate(oracle_private_key: Union[PrivateKey, bytes, bytearray],
                      trust_id: str,
                      person_name: str,
                      timestamp: Optional[int] = None,
                      aux_rand: Optional[bytes] = None) -> Certificate:
    """
    Issue a signed death certificate for a trust.

    Args:
        oracle_private_key: Oracle's 32-byte private key
        trust_id: Trust identifier (address or custom id)
        person_name: Name of the deceased
        timestamp: Issuance Unix time (defaults to the wall clock)
        aux_rand: Optional 32-byte Schnorr auxiliary randomness

    Returns:
        Certificate
    """
    if timestamp is None:
        timestamp = int(time.time())
    if isinstance(timestamp, bool) or not isinstance(timestamp, int) or timestamp < 0:
        raise InvalidIdentifierError(f"Timestamp must be a non-negative integer: {timestamp!r}")

    message = build_certificate_message(trust_id, person_name, timestamp)
    message_hash = hash_certificate_message(message)

    if not isinstance(oracle_private_key, PrivateKey):
        oracle_private_key = PrivateKey(oracle_private_key)

    signature = sign_schnorr(oracle_private_key, message_hash, aux_rand)
    certificate = Certificate(
        trust_id=trust_id,
        person_name=person_name,
        timestamp=timestamp,
        message=message,
        message_hash=message_hash,
        signature=signature.to_bytes(),
        oracle_public_key=oracle_private_key.x_only,
        certificate_id=generate_certificate_id(trust_id, timestamp),
    )
    logger.info(f"Issued certificate {certificate.certificate_id} for trust {trust_id}")
    return certificate


def verify_certificate(certificate: Union[Certificate, Dict[str, Any]]) -> bool:
    """
    Verify a certificate's hash and oracle signature.

    Args:
        certificate: Certificate or its dict form

    Returns:
        True if the message hash matches the message and the signature is
        valid for the oracle key; False for anything else
    """
    try:
        if isinstance(certificate, dict):
            certificate = Certificate.from_dict(certificate)

        if len(certificate.message_hash) != 32:
            return False
        if len(certificate.signature) != SCHNORR_SIGNATURE_SIZE:
            return False
        if hash_certificate_message(certificate.message) != certificate.message_hash:
            logger.warning(f"Certificate {certificate.certificate_id} hash does not match its message")
            return False

        return verify_schnorr(
            to_x_only(certificate.oracle_public_key),
            certificate.signature,
            certificate.message_hash,
        )
    except Exception as e:
        logger.warning(f"Certificate verification failed: {e}")
        return False


@contextmanager
def oracle_signing_key(private_key: Union[bytes, bytearray]) -> Iterator[bytearray]:
    """
    Hold an oracle private key for the duration of a signing operation.

    The key is copied into a mutable buffer that is overwritten with zeros
    when the block exits. This is best-effort: the caller's own copy and the
    secp256k1 context built for signing are not wiped.
    """
    buffer = bytearray(private_key)
    try:
        yield buffer
    finally:
        for i in range(len(buffer)):
            buffer[i] = 0


def describe_oracle(public_key: Union[bytes, str]) -> Dict[str, Any]:
    """
    Get oracle service information.

    Args:
        public_key: Oracle's public key

    Returns:
        Oracle service info
    """
    return {
        "public_key": to_x_only(public_key).hex(),
        "service_name": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "signature_scheme": "BIP340 Schnorr over SHA-256",
        "capabilities": [
            "Death Certificate Issuance",
            "Signature Verification",
            "Trust Authorization",
        ],
    }


def explain_oracle_role() -> Dict[str, Any]:
    """Describe what the oracle does in the inheritance flow."""
    return {
        "purpose": "The oracle is a trusted third party that verifies the owner's "
                   "death and authorizes the inheritance",
        "workflow": [
            "1. The heir submits proof of death",
            "2. The oracle checks that the documents are genuine",
            "3. The oracle issues a signed death certificate",
            "4. The heir spends the funds with the oracle signature and their own",
        ],
        "advantages": [
            "No need to wait for the timelock to expire",
            "Provides legal evidence and an audit trail",
            "Prevents early theft, since the oracle must authorize",
            "Flexible inheritance timing",
        ],
        "production_requirements": [
            "Real identity verification (KYC)",
            "Lawful death certificate verification",
            "Multi-party authorization process",
            "Secure key management (HSM)",
            "Complete audit logging",
        ],
    }
