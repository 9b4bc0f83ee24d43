"""
TapHeir - Oracle Module

Issuance and verification of oracle-signed certificates that authorize a
trust's oracle spending path.
"""

from .exceptions import OracleError, InvalidIdentifierError, CertificateError
from .certificate import (
    Certificate,
    build_certificate_message,
    generate_certificate_id,
    issue_certificate,
    verify_certificate,
    oracle_signing_key,
    describe_oracle,
)

__all__ = [
    "OracleError",
    "InvalidIdentifierError",
    "CertificateError",
    "Certificate",
    "build_certificate_message",
    "generate_certificate_id",
    "issue_certificate",
    "verify_certificate",
    "oracle_signing_key",
    "describe_oracle",
]
