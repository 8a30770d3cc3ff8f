"""
Domain Entities

Core business entities of the medicine label scanning domain.
"""

from .candidate import CandidateOrigin, MedicineCandidate, DecodedReply
from .detection import Detection, DetectionSet
from .medicine_info import MedicineInfo, SideEffects
from .scan_result import AttemptOutcome, FallbackAttempt, ScanResult

__all__ = [
    "CandidateOrigin",
    "MedicineCandidate",
    "DecodedReply",
    "Detection",
    "DetectionSet",
    "MedicineInfo",
    "SideEffects",
    "AttemptOutcome",
    "FallbackAttempt",
    "ScanResult",
]
