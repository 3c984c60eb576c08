"""
Domain exceptions for the academy backend.

Services raise these instead of building HTTP responses themselves; the
handler registered in ``academy.app.main`` turns them into JSON errors of the
form ``{"detail": message, "code": code}``.
"""

from typing import Any, Dict, Optional

from fastapi import status


class AcademyError(Exception):
    """Base exception for all academy errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


class InvalidInputError(AcademyError):
    """Required input missing or malformed"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid input", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="INVALID_INPUT", details=details)


class ConflictError(AcademyError):
    """Request clashes with existing data"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Conflict"):
        super().__init__(message, code="CONFLICT")


class UnauthorizedError(AcademyError):
    """Identity could not be confirmed"""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication failed", code: str = "UNAUTHORIZED"):
        super().__init__(message, code=code)


class ForbiddenError(AcademyError):
    """Authenticated, but not allowed"""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, code="FORBIDDEN")


class NotFoundError(AcademyError):
    """Requested record does not exist"""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found", resource: Optional[str] = None):
        details = {"resource": resource} if resource else None
        super().__init__(message, code="NOT_FOUND", details=details)


class NameMismatchError(UnauthorizedError):
    """Typed student name does not match the stored record"""

    def __init__(self, message: str = "Student name does not match"):
        super().__init__(message, code="NAME_MISMATCH")
