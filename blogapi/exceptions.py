"""
Custom Exception Classes for the Blog API

This module defines custom exceptions for better error handling and
consistent error responses across the application. Storage failures are
translated into these types at the data access boundary and surface to
the transport layer unchanged.
"""

import enum
from typing import Any

from fastapi import status


class ErrorCode(str, enum.Enum):
    """Machine-readable error codes shared by REST and GraphQL responses."""

    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"
    INVALID_QUERY = "INVALID_QUERY"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class BlogAPIError(Exception):
    """Base exception class for all Blog API exceptions"""

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
        error_code: ErrorCode | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


# ============================================================================
# Storage Exceptions
# ============================================================================


class ConstraintViolationError(BlogAPIError):
    """Raised when a unique or foreign-key constraint is breached on write"""

    error_code = ErrorCode.CONSTRAINT_VIOLATION

    def __init__(self, message: str = "A database constraint was violated", constraint: str | None = None):
        details = {"constraint": constraint} if constraint else {}
        super().__init__(message=message, status_code=status.HTTP_409_CONFLICT, details=details)

    @classmethod
    def from_integrity_error(cls, error: Exception) -> "ConstraintViolationError":
        """Build from a SQLAlchemy ``IntegrityError``, keeping the driver message."""
        orig = getattr(error, "orig", None) or error
        message = str(orig).strip().splitlines()[0] if str(orig).strip() else "A database constraint was violated"
        constraint = getattr(getattr(orig, "diag", None), "constraint_name", None) or getattr(
            orig, "constraint_name", None
        )
        return cls(message=message, constraint=constraint)


class DatabaseConnectionError(BlogAPIError):
    """Raised when the database is unreachable or the connection is lost"""

    error_code = ErrorCode.DATABASE_UNAVAILABLE

    def __init__(self, message: str = "The database is unavailable"):
        super().__init__(message=message, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


# ============================================================================
# Query Exceptions
# ============================================================================


class InvalidQueryError(BlogAPIError):
    """Raised when a repository call names an unknown relation or lookup column"""

    error_code = ErrorCode.INVALID_QUERY

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details or {})

