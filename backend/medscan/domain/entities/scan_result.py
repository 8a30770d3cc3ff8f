"""
Scan Result Entities

Outcome of one pipeline invocation, including the fallback bookkeeping.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any

from .detection import DetectionSet


class AttemptOutcome(Enum):
    """Result of one backend attempt."""

    SUCCESS = "success"
    UNAVAILABLE = "unavailable"
    ERROR = "error"
    MALFORMED = "malformed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class FallbackAttempt:
    """
    One backend attempt made by the fallback orchestrator.

    Attributes:
        backend_id: Backend that was invoked
        outcome: What happened
        error_type: Exception class name for failed attempts
        error_message: Exception message for failed attempts
        duration_ms: Wall time of the attempt
    """

    backend_id: str
    outcome: AttemptOutcome
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    duration_ms: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.outcome is AttemptOutcome.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend_id,
            "outcome": self.outcome.value,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "duration_ms": round(self.duration_ms, 2),
        }


@dataclass
class ScanResult:
    """
    Result of scanning one image.

    An empty detection set is a normal outcome: every backend may have failed
    or the label may simply carry no recognizable medicine name.

    Attributes:
        request_id: Unique identifier of the scan
        detections: Final ordered, duplicate-free detections
        backend_used: Backend whose reply was used, if any
        attempts: Fallback attempts in the order they were made
        processing_time_ms: Total wall time of the scan
    """

    request_id: str
    detections: DetectionSet = field(default_factory=DetectionSet.empty)
    backend_used: Optional[str] = None
    attempts: List[FallbackAttempt] = field(default_factory=list)
    processing_time_ms: float = 0.0

    @property
    def exhausted(self) -> bool:
        """True when no backend produced a usable reply."""
        return self.backend_used is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_id": self.request_id,
            "detections": self.detections.to_list(),
            "backend_used": self.backend_used,
            "attempts": [a.to_dict() for a in self.attempts],
            "processing_time_ms": round(self.processing_time_ms, 2),
        }
