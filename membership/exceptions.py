"""Custom exceptions for the collection membership service.

This module provides exception classes used throughout the package.
Empty query results are never errors; these cover store failures,
unresolvable entity ids and malformed arguments.
"""


class MembershipError(Exception):
    """Base exception for all membership errors."""

    def __init__(self, message: str, details: dict | None = None):
        """Initialize exception with message and optional details.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(MembershipError):
    """Exception raised when an entity id does not resolve."""

    pass


class InvalidArgumentError(MembershipError):
    """Exception raised when an identifier or paging argument is malformed."""

    pass


class StoreError(MembershipError):
    """Exception raised when the backing relationship store fails.

    Wraps connectivity and query failures from the store backend. The
    original exception is chained as ``__cause__``. Never retried by the
    membership or query operations.

    Attributes:
        backend: Name of the store backend that failed ('sqlite' | 'rdf')
        operation: Store operation that was running when it failed
    """

    backend: str
    operation: str

    def __init__(self, message: str, backend: str, operation: str):
        """Initialize store error.

        Args:
            message: Human-readable error message
            backend: Name of the store backend that failed
            operation: Store operation that was running when it failed
        """
        super().__init__(
            message,
            details={
                "backend": backend,
                "operation": operation,
            },
        )
        self.backend = backend
        self.operation = operation
