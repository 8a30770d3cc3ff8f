"""
Domain Exceptions

Custom exceptions for the medicine label scanning domain.
All exceptions are organized by pipeline stage for clear error handling.
"""

from typing import Optional, Dict, Any, List


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details
        is_recoverable: Whether the operation can continue with another backend
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        is_recoverable: bool = True
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.is_recoverable = is_recoverable

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "is_recoverable": self.is_recoverable,
        }


# =============================================================================
# Recognition Backend Exceptions
# =============================================================================

class RecognitionError(DomainException):
    """Base exception for a failed recognition backend attempt."""

    def __init__(
        self,
        message: str,
        backend_id: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.backend_id = backend_id
        if backend_id:
            self.details["backend"] = backend_id


class BackendUnavailable(RecognitionError):
    """
    The backend could not be reached or rejected the request as unsupported.

    Covers network failures, timeouts, authentication, quota, unknown models
    and aborted attempts.
    """

    def __init__(
        self,
        message: str = "Recognition backend unavailable",
        reason: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        self.reason = reason
        if reason:
            self.details["reason"] = reason


class BackendError(RecognitionError):
    """The backend was reached but returned an application-level failure."""

    def __init__(self, message: str = "Recognition backend failed", **kwargs):
        super().__init__(message, **kwargs)


# =============================================================================
# Decoding Exceptions
# =============================================================================

class DecodingError(DomainException):
    """Base exception for reply decoding errors."""
    pass


class MalformedResponse(DecodingError):
    """A backend reply could not be decoded into medicine candidates."""

    def __init__(
        self,
        message: str = "Backend reply is not a valid recognition payload",
        raw_reply: Optional[str] = None,
        **kwargs
    ):
        super().__init__(message, **kwargs)
        if raw_reply is not None:
            self.details["raw_reply_preview"] = raw_reply[:200]


# =============================================================================
# Pipeline Exceptions
# =============================================================================

class PipelineError(DomainException):
    """Base exception for pipeline-level errors."""
    pass


class AllBackendsExhausted(PipelineError):
    """Every configured recognition backend failed for this scan."""

    def __init__(
        self,
        last_failure: Optional[DomainException] = None,
        attempted: Optional[List[str]] = None,
        attempts: Optional[list] = None,
        message: Optional[str] = None,
        **kwargs
    ):
        attempted = attempted or []
        message = message or f"All {len(attempted)} recognition backends failed"
        super().__init__(message, is_recoverable=False, **kwargs)
        self.last_failure = last_failure
        self.attempted = attempted
        self.attempts = attempts or []
        self.details["attempted"] = attempted
        if last_failure is not None:
            self.details["last_failure"] = last_failure.to_dict()


class PipelineConfigurationError(PipelineError):
    """Pipeline is not properly configured."""

    def __init__(
        self,
        message: str = "Pipeline is not properly configured",
        missing_components: Optional[list] = None,
        **kwargs
    ):
        super().__init__(message, is_recoverable=False, **kwargs)
        if missing_components:
            self.details["missing_components"] = missing_components


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationError(DomainException):
    """Base exception for validation errors."""
    pass


class InvalidImageError(ValidationError):
    """Input image is invalid or corrupted."""

    def __init__(
        self,
        message: str = "Invalid or corrupted image",
        **kwargs
    ):
        super().__init__(message, is_recoverable=False, **kwargs)


class InvalidInputError(ValidationError):
    """Invalid input provided to a function or method."""

    def __init__(
        self,
        field: str,
        reason: str,
        **kwargs
    ):
        message = f"Invalid input for '{field}': {reason}"
        super().__init__(message, is_recoverable=False, **kwargs)
        self.details["field"] = field
        self.details["reason"] = reason
