# backend/app/core/exceptions.py
"""
Domain-specific exceptions for the Cadence platform.

The availability core never raises for rejected block sets; it returns
`Violation` values. These exceptions are how the service layer hands those
outcomes (and authorization / persistence failures) to the API layer.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

from fastapi import HTTPException, status

if TYPE_CHECKING:
    from ..domain.violations import Violation

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Convert to an HTTPException carrying the structured detail payload."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when business validation fails."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    status_code = HTTP_422_UNPROCESSABLE


class UnauthorizedException(DomainException):
    """Raised when the caller is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenException(DomainException):
    """Raised when the caller lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": self.message or "An error occurred processing your request",
                "code": self.code,
                "details": self.details if self.details else {},
            },
        )


# Specific availability exceptions


class AvailabilityValidationException(ValidationException):
    """Raised at the service boundary when a block set is rejected by the core."""

    def __init__(self, violation: "Violation", *, day_of_week: Optional[int] = None):
        details: Dict[str, Any] = violation.to_details()
        if day_of_week is not None:
            details["day_of_week"] = day_of_week
        super().__init__(message=violation.message, code=violation.code, details=details)
        self.violation = violation


class AvailabilityPersistenceException(ServiceException):
    """Raised when the availability store could not apply a write."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message or "Changes not saved, please retry",
            code="PERSISTENCE_FAILURE",
            details=details or {},
        )

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail={"message": self.message, "code": self.code, "details": self.details},
            headers={"Retry-After": "2"},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
