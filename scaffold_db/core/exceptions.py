# ==============================================================================
# CUSTOM EXCEPTIONS - Storage Error Hierarchy
# ==============================================================================
# Structured exception classes for consistent error handling
# Every adapter failure is normalized into the DatabaseError family
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Provides a consistent interface for error handling with:
    - Error code for programmatic identification
    - HTTP status code mapping
    - Detailed message and optional context

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code a caller may surface
        details: Additional context dictionary
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format for JSON response.

        Returns:
            Dictionary containing error details
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"status_code={self.status_code})"
        )


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Base exception for storage-related errors.

    Carries the backend's original message. Raised directly for failures
    that fit none of the more specific kinds below.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=status_code,
            details=details,
        )


class DatabaseConnectionError(DatabaseError):
    """Raised when the backend cannot be reached."""

    def __init__(
        self,
        message: str = "Database connection failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details, status_code=503)
        self.error_code = "DATABASE_CONNECTION_ERROR"


class DatabaseQueryError(DatabaseError):
    """Raised for a malformed filter, column or operation."""

    def __init__(
        self,
        message: str = "Database query failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details, status_code=400)
        self.error_code = "DATABASE_QUERY_ERROR"


class DatabaseConstraintError(DatabaseError):
    """
    Raised on uniqueness or foreign-key violations.

    Maps to HTTP 409 Conflict.
    """

    def __init__(
        self,
        message: str = "Database constraint violation",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details, status_code=409)
        self.error_code = "DATABASE_CONSTRAINT_ERROR"


class DatabaseNotFoundError(DatabaseError):
    """
    Raised when a mutation expected exactly one live row and found none.

    Read paths never raise this; they return None instead.

    Attributes:
        resource_type: Table the lookup ran against
        resource_id: Identifier of the missing record
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = str(resource_id)

        super().__init__(message=message, details=details, status_code=404)
        self.error_code = "DATABASE_NOT_FOUND"
        self.resource_type = resource_type
        self.resource_id = resource_id


class DatabaseValidationError(DatabaseError):
    """Raised when the backend rejects a value's shape or type."""

    def __init__(
        self,
        message: str = "Database validation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, details=details, status_code=422)
        self.error_code = "DATABASE_VALIDATION_ERROR"
