"""
TapHeir - Oracle Exceptions
"""


class OracleError(Exception):
    """Base exception for oracle certificate errors."""
    pass


class InvalidIdentifierError(OracleError):
    """Raised when a certificate field would make the message ambiguous."""
    pass


class CertificateError(OracleError):
    """Raised when a serialized certificate cannot be parsed."""
    pass
