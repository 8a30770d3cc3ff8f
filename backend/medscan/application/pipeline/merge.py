"""
Candidate Merge Engine

Reconciles candidate lists into the final ordered, duplicate-free
DetectionSet, assigning each entry a position and a confidence.
"""

from typing import Dict, List, Optional, Sequence
import logging
import uuid

from ...config.settings import MergeConfig
from ...domain.entities.candidate import CandidateOrigin, MedicineCandidate
from ...domain.entities.detection import Detection, DetectionSet
from ...domain.value_objects.confidence_score import ConfidenceScore
from ...domain.value_objects.position import Position


logger = logging.getLogger(__name__)


def display_name(name: str) -> str:
    """Trimmed name with an upper-cased first letter and the rest lower-cased."""
    trimmed = name.strip()
    return trimmed[:1].upper() + trimmed[1:].lower()


class CandidateMergeEngine:
    """
    Merge engine for medicine candidates.

    Algorithm:
    - Walk candidates in input order, keyed by trimmed lower-case name
    - Silently skip names already seen and names of 2 characters or fewer
    - Confidence: the candidate's own score, else the default of its origin
    - Position: center of the bounding box clamped to the image, else a
      deterministic scatter derived from the candidate index

    Apart from the generated ids, merging the same input twice yields equal
    detection sets.
    """

    def __init__(self, config: Optional[MergeConfig] = None):
        self.config = config or MergeConfig()
        self._default_confidence: Dict[CandidateOrigin, float] = {
            CandidateOrigin.AI: self.config.ai_confidence,
            CandidateOrigin.EXTRACT: self.config.extract_confidence,
            CandidateOrigin.OCR: self.config.ocr_confidence,
        }

    def merge(self, *candidate_lists: Sequence[MedicineCandidate]) -> DetectionSet:
        """
        Merge one or more candidate lists.

        Args:
            *candidate_lists: Lists in source-priority order; they are
                concatenated before merging

        Returns:
            DetectionSet in first-seen order
        """
        seen = set()
        detections: List[Detection] = []
        index = 0

        for candidates in candidate_lists:
            for candidate in candidates:
                key = candidate.normalized_name

                if len(key) < self.config.min_name_length or key in seen:
                    logger.debug(f"Skipping candidate {candidate.name!r} at index {index}")
                    index += 1
                    continue

                seen.add(key)
                detections.append(Detection(
                    id=f"{candidate.origin.value}-{uuid.uuid4().hex}",
                    name=display_name(candidate.name),
                    position=self._position_for(candidate, index),
                    confidence=self._confidence_for(candidate),
                ))
                index += 1

        return DetectionSet(detections)

    def _confidence_for(self, candidate: MedicineCandidate) -> float:
        if candidate.source_confidence is not None:
            value = candidate.source_confidence
        else:
            value = self._default_confidence[candidate.origin]
        return ConfidenceScore.clamped(value, source=candidate.origin.value).value

    def _position_for(self, candidate: MedicineCandidate, index: int) -> Position:
        if candidate.bounding_box is not None:
            return candidate.bounding_box.center_position()
        return self.scatter_position(index)

    def scatter_position(self, index: int) -> Position:
        """
        Fallback position for candidates without geometry.

        Spreads markers across a band of the image so that they do not stack
        at one point. Has no spatial meaning.
        """
        cfg = self.config
        x = cfg.scatter_origin + (index * cfg.scatter_step_x) % cfg.scatter_span
        y = cfg.scatter_origin + (index * cfg.scatter_step_y) % cfg.scatter_span
        return Position(x=min(100.0, max(0.0, x)), y=min(100.0, max(0.0, y)))
