"""
Candidate Entities

Medicine name candidates produced by decoding a backend reply or by the
supplementary keyword sources, before they are merged into detections.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..value_objects.bounding_box import BoundingBox


class CandidateOrigin(Enum):
    """Where a candidate came from; also selects its default confidence."""

    AI = "ai"                  # medicineCandidates of a recognition backend
    OCR = "ocr"                # keyword match in local Tesseract output
    EXTRACT = "extract"        # keyword match in the backend's extractedText


@dataclass(frozen=True)
class MedicineCandidate:
    """
    A possible medicine name found in the image.

    Several candidates of one reply may name the same medicine with different
    casing or spacing; the merge engine reconciles them.

    Attributes:
        name: Non-empty medicine name as reported by the source
        bounding_box: Optional location of the name, percent units
        source_confidence: Optional confidence reported by the source
        origin: Which source produced the candidate
    """

    name: str
    bounding_box: Optional[BoundingBox] = None
    source_confidence: Optional[float] = None
    origin: CandidateOrigin = CandidateOrigin.AI

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("MedicineCandidate name cannot be empty")
        if self.source_confidence is not None and not 0.0 <= self.source_confidence <= 1.0:
            raise ValueError(
                f"source_confidence must be between 0.0 and 1.0, got {self.source_confidence}"
            )

    @property
    def normalized_name(self) -> str:
        """Deduplication key: trimmed, lower-cased name."""
        return self.name.strip().lower()

    def __str__(self) -> str:
        return f"{self.name} [{self.origin.value}]"


@dataclass
class DecodedReply:
    """
    Structured content of one backend reply.

    Attributes:
        candidates: Medicine candidates in reply order
        extracted_text: Visible text lines the backend read from the label
    """

    candidates: List[MedicineCandidate] = field(default_factory=list)
    extracted_text: List[str] = field(default_factory=list)

    @property
    def has_candidates(self) -> bool:
        return len(self.candidates) > 0
