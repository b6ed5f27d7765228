"""
Shared error handling for the SUDS access layer.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    suds_error: bool = False
    details: Dict[str, Any] = {}


class SudsAccessException(Exception):
    """Base exception for the SUDS access layer."""

    suds_error = False

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            suds_error=self.suds_error,
            details=self.details
        )


class ValidationError(SudsAccessException):
    """Missing or malformed request fields."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class TransportError(SudsAccessException):
    """The request/response exchange with SUDS itself failed."""

    def __init__(self, message: str = "Transport error", details: Optional[Dict[str, Any]] = None):
        super().__init__("TRANSPORT_ERROR", message, details)

    @property
    def status_code(self) -> Optional[int]:
        return self.details.get("status_code")


class NoDataReceivedError(SudsAccessException):
    """SUDS answered, but without the field the operation needs."""

    def __init__(self, message: str = "No data received from SUDS.", details: Optional[Dict[str, Any]] = None):
        super().__init__("NO_DATA_RECEIVED", message, details)


class SudsError(SudsAccessException):
    """Business-rule rejection, raised by SUDS or enforced locally.

    Callers can tell these apart from transport and protocol failures by
    checking ``suds_error``; ``error`` carries the reason as reported.
    """

    suds_error = True

    def __init__(self, error: Any, details: Optional[Dict[str, Any]] = None):
        self.error = error
        super().__init__("SUDS_ERROR", str(error), details)


class ServiceError(SudsAccessException):
    """Generic non-ok response."""

    def __init__(self, message: str = "An error occured.", details: Optional[Dict[str, Any]] = None):
        super().__init__("SERVICE_ERROR", message, details)
