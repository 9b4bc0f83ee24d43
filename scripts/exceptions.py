"""
TapHeir - Script Exceptions

This module defines custom exceptions for script assembly, tap tree
construction and address encoding.
"""


class ScriptError(Exception):
    """Base exception for script and address errors."""
    pass


class EncodingError(ScriptError):
    """Raised for a malformed script operand or script bytes."""
    pass


class EmptyTreeError(ScriptError):
    """Raised when a tap tree is built from no leaves."""
    pass


class InvalidLocktimeError(ScriptError):
    """Raised when an absolute locktime is not a valid Unix timestamp lock."""

    def __init__(self, locktime: int, message: str = None):
        self.locktime = locktime
        if message is None:
            message = f"Invalid locktime {locktime}: must be a Unix timestamp >= 500000000"
        super().__init__(message)


class InvalidAddressError(ScriptError):
    """Raised when an address fails to decode or validate."""
    pass
