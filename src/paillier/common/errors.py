"""
Exception taxonomy shared by every part of the Paillier package.

All errors derive from `PaillierError`, so callers can catch the whole family
at once. Each concrete error also inherits from the closest built-in
exception, which lets generic code (``except ValueError``) keep working.
"""


class PaillierError(Exception):
    """Base exception for Paillier-related errors."""

    pass


class InvertibilityError(PaillierError, ArithmeticError):
    """Raised when a required modular inverse does not exist."""

    pass


class InvalidParameterError(PaillierError, ValueError):
    """Raised when a caller-supplied parameter is out of its valid domain."""

    pass


class MalformedInputError(PaillierError, ValueError):
    """Raised when a ciphertext or serialized value cannot be interpreted."""

    pass
