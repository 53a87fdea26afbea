# appointly/core/exceptions.py
"""
Domain exceptions for the booking engine.

Services raise these; the API layer converts them to HTTP responses
through a single exception handler registered in main.py.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


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


class PermissionDeniedError(DomainException):
    """Raised when the caller may not perform the requested change."""

    status_code = status.HTTP_403_FORBIDDEN


class ConflictException(DomainException):
    """Raised when there's a conflict with existing data."""

    status_code = status.HTTP_409_CONFLICT


class InvalidStatusTransitionError(ValidationException):
    """Raised when an appointment status change is not allowed."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            message=f"Cannot change appointment status from {current} to {requested}",
            code="INVALID_STATUS_TRANSITION",
            details={"current_status": current, "requested_status": requested},
        )


class TimeSlotUnavailableError(ConflictException):
    """Raised by the booking guard when the requested interval is taken."""

    def __init__(self, message: str = "Time slot not available", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message=message, code="TIME_SLOT_UNAVAILABLE", details=details)
