"""
Shared error handling for the document submission client.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class DocumentsClientError(Exception):
    """Base exception for the document submission client."""

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
            details=self.details
        )


class InvalidConfiguration(DocumentsClientError):
    """Construction-time configuration errors."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_CONFIGURATION", message, details)


class AdmissionCancelled(DocumentsClientError):
    """A caller stopped waiting for a rate gate slot."""

    def __init__(self, message: str = "Admission cancelled", details: Optional[Dict[str, Any]] = None):
        super().__init__("ADMISSION_CANCELLED", message, details)


class AuthenticationFailed(DocumentsClientError):
    """A credential refresh round-trip failed."""

    def __init__(self, step: str, status: Optional[int], body: str, message: Optional[str] = None):
        self.step = step
        self.status = status
        self.body = body
        super().__init__(
            "AUTHENTICATION_FAILED",
            message or f"Authentication failed at {step} step: {status}",
            {"step": step, "status": status, "body": body}
        )


class TransportFailure(DocumentsClientError):
    """Connection-level errors talking to the remote API."""

    def __init__(self, step: str, message: str = "Transport failure", details: Optional[Dict[str, Any]] = None):
        self.step = step
        super().__init__("TRANSPORT_FAILURE", f"{step}: {message}", {"step": step, **(details or {})})
