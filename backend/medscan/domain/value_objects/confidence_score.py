"""
Confidence Score Value Object

Represents how sure a source is about a detected medicine name.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ConfidenceScore:
    """
    Immutable value object representing a confidence score.

    Attributes:
        value: Float between 0.0 and 1.0 representing confidence
        source: Optional identifier for what produced this score
    """

    value: float
    source: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate confidence score is within valid range."""
        if not 0.0 <= self.value <= 1.0:
            raise ValueError(f"Confidence score must be between 0.0 and 1.0, got {self.value}")

    def __str__(self) -> str:
        return f"{self.value:.2%}"

    @classmethod
    def clamped(cls, value: float, source: Optional[str] = None) -> "ConfidenceScore":
        """Create a score, forcing out-of-range values into [0, 1]."""
        return cls(value=min(1.0, max(0.0, value)), source=source)

    @classmethod
    def from_percentage(cls, percentage: float, source: Optional[str] = None) -> "ConfidenceScore":
        """Create from a percentage value (0-100), clamping stray OCR values."""
        return cls.clamped(percentage / 100.0, source=source)
