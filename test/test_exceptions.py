"""
Tests for custom exception classes

Tests exception initialization, messages, status codes, error codes and details.
"""

from fastapi import status

from blogapi.exceptions import (
    BlogAPIError,
    ConstraintViolationError,
    DatabaseConnectionError,
    ErrorCode,
    InvalidQueryError,
)


class FakeDiag:
    constraint_name = "tags_name_key"


class FakeDriverError(Exception):
    diag = FakeDiag()


class FakeIntegrityError(Exception):
    def __init__(self, orig):
        super().__init__(str(orig))
        self.orig = orig


class TestBlogAPIError:
    """Test base BlogAPIError class"""

    def test_default(self):
        exc = BlogAPIError("Test error")
        assert str(exc) == "Test error"
        assert exc.message == "Test error"
        assert exc.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert exc.error_code == ErrorCode.UNKNOWN_ERROR
        assert exc.details == {}

    def test_custom_status_and_code(self):
        exc = BlogAPIError("Test error", status_code=status.HTTP_400_BAD_REQUEST, error_code=ErrorCode.INVALID_QUERY)
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.error_code == ErrorCode.INVALID_QUERY

    def test_with_details(self):
        exc = BlogAPIError("Test error", details={"key": "value"})
        assert exc.details["key"] == "value"


class TestStorageExceptions:
    def test_constraint_violation(self):
        exc = ConstraintViolationError(constraint="authors_email_key")
        assert exc.status_code == status.HTTP_409_CONFLICT
        assert exc.error_code == ErrorCode.CONSTRAINT_VIOLATION
        assert exc.details == {"constraint": "authors_email_key"}
        assert isinstance(exc, BlogAPIError)

    def test_constraint_violation_without_constraint_name(self):
        exc = ConstraintViolationError("UNIQUE constraint failed: tags.name")
        assert exc.details == {}

    def test_from_integrity_error_uses_driver_details(self):
        error = FakeIntegrityError(FakeDriverError('duplicate key value violates unique constraint "tags_name_key"\nDETAIL: ...'))
        exc = ConstraintViolationError.from_integrity_error(error)
        assert exc.message == 'duplicate key value violates unique constraint "tags_name_key"'
        assert exc.details == {"constraint": "tags_name_key"}

    def test_from_integrity_error_without_diag(self):
        exc = ConstraintViolationError.from_integrity_error(FakeIntegrityError(Exception("UNIQUE constraint failed: tags.name")))
        assert exc.message == "UNIQUE constraint failed: tags.name"
        assert exc.details == {}

    def test_database_connection_error(self):
        exc = DatabaseConnectionError()
        assert exc.message == "The database is unavailable"
        assert exc.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert exc.error_code == ErrorCode.DATABASE_UNAVAILABLE


class TestQueryExceptions:
    def test_invalid_query(self):
        exc = InvalidQueryError("Unknown relation", details={"relations": ["comments"]})
        assert exc.status_code == status.HTTP_400_BAD_REQUEST
        assert exc.error_code == ErrorCode.INVALID_QUERY
        assert exc.details == {"relations": ["comments"]}
