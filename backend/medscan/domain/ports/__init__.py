"""
Ports (Interfaces)

Abstract interfaces defining the contracts for infrastructure adapters.
Following Hexagonal Architecture / Ports & Adapters pattern.
"""

from .recognition_backend import RecognitionBackendPort
from .candidate_source import CandidateSourcePort
from .medicine_lookup import MedicineLookupPort

__all__ = [
    "RecognitionBackendPort",
    "CandidateSourcePort",
    "MedicineLookupPort",
]
