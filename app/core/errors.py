"""
Exception classes shared by the services and the HTTP layer.

Services raise these; the handlers registered in ``app.main`` turn them into
JSON responses with the matching status code.
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class SavorSyncError(Exception):
    """Base exception class for SavorSync errors"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the error body sent to clients"""
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidInputError(SavorSyncError):
    """Raised when one or more fields violate their constraints"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, details: List[Dict[str, str]], message: str = "Validation failed"):
        super().__init__(message, details=details)


class BadRequestError(SavorSyncError):
    """Raised when a request is well-formed but cannot be served as asked"""
    status_code = status.HTTP_400_BAD_REQUEST


class BadIdError(BadRequestError):
    """Raised when an identifier does not match the identifier encoding"""

    def __init__(self, resource: str):
        super().__init__(f"Invalid {resource} ID format")


class UnauthenticatedError(SavorSyncError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(SavorSyncError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(SavorSyncError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str):
        super().__init__(f"{resource} not found")


class MediaUploadError(SavorSyncError):
    """Raised when the media store rejects or fails to store a payload"""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(message)
        self.status_code = status_code


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error entries into ``{field, message}`` pairs"""
    details = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({
            "field": ".".join(location) or "request",
            "message": error.get("msg", "Invalid value"),
        })
    return details
