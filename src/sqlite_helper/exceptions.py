"""Exceptions raised by the SQLite helper.

Hierarchy:
- HelperError: base for everything the package raises
- ConfigurationError: invalid construction arguments or settings
- ArgumentError: empty or malformed call arguments
- StoreError: failures surfaced by the database during connect/execute/read
"""

from typing import Optional


class HelperError(Exception):
    """Base exception for SQLite helper errors."""
    pass


class ConfigurationError(HelperError):
    """Raised when the store cannot be configured from the given arguments."""
    pass


class ArgumentError(HelperError, ValueError):
    """Raised when a required call argument is empty or invalid.

    Args:
        message: Error description
        argument: Name of the offending argument
    """

    def __init__(self, message: str, argument: Optional[str] = None):
        self.argument = argument
        if argument:
            message = f"{message} (argument: {argument})"
        super().__init__(message)


class StoreError(HelperError):
    """Raised when the underlying database reports a failure.

    The original driver exception is chained as ``__cause__``.

    Args:
        message: Error description
        operation: Name of the helper operation that failed
    """

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(message)
