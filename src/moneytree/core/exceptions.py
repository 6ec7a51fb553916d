"""Custom exception classes for category and transaction operations.

Domain errors carry an error_code that maps to the catalog in errors.py and
a kind that tells the API boundary how to report them. Integrity faults in
stored data are a separate hierarchy: they are not recoverable by the caller
and surface as internal errors.
"""

from enum import Enum
from typing import Any

from moneytree.core.errors import get_error


class ErrorKind(str, Enum):
    """Kinds of domain failure reported to API clients."""

    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    INVALID_STATE = "invalid_state"
    CONFLICT = "conflict"


class MoneytreeError(Exception):
    """Base exception for all domain errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "CAT_006")
        details: Additional context about the error (for logging)
        kind: Failure kind, set by each subclass
        http_status: HTTP status code to return
    """

    kind: ErrorKind
    http_status: int = 500

    def __init__(self, error_code: str, details: dict[str, Any] | None = None):
        """Initialize the exception.

        Args:
            error_code: Error code from errors.py
            details: Additional error context (not shown to users)
        """
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    @property
    def message(self) -> str:
        """Technical message from the catalog."""
        return get_error(self.error_code)["message"]


class NotFoundError(MoneytreeError):
    """Raised when a referenced category, parent or transaction does not exist
    or is not visible to the caller."""

    kind = ErrorKind.NOT_FOUND
    http_status = 404


class ForbiddenError(MoneytreeError):
    """Raised when an entity exists but belongs to another user, or is a
    protected system root."""

    kind = ErrorKind.FORBIDDEN
    http_status = 403


class InvalidStateError(MoneytreeError):
    """Raised when a structural rule would be violated.

    Examples:
    - Deleting a category that still has children (CAT_006)
    - Filing a transaction under a non-leaf category (CAT_009)
    """

    kind = ErrorKind.INVALID_STATE
    http_status = 400


class ConflictError(MoneytreeError):
    """Raised on a duplicate unique identity (e.g. an email already registered)."""

    kind = ErrorKind.CONFLICT
    http_status = 409


class DataIntegrityError(Exception):
    """Raised when stored category data breaks a structural invariant.

    This is never caused by a client request; it indicates a corrupted store
    and is reported as an internal error.
    """

    pass


class CategoryCycleError(DataIntegrityError):
    """Raised when following parent links revisits a category."""

    def __init__(self, category_id: Any):
        self.category_id = category_id
        super().__init__(f"Category parent links form a cycle at {category_id}")
