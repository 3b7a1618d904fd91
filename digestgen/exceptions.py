"""Exception classes for digestgen.

This module defines custom exception types used throughout the digestgen library.
"""


class DigestGenError(Exception):
    """Base exception class for all digestgen errors."""

    pass


class GenerationError(DigestGenError):
    """Exception raised when a function family cannot be generated."""

    pass


class UnsupportedInputError(DigestGenError, TypeError):
    """Exception raised when a value is not a byte source the library understands."""

    pass


class ConfigurationError(DigestGenError, ValueError):
    """Exception raised for invalid configuration values."""

    pass
