"""
Candidate Source Port

Abstract interface for supplementary candidate lists merged after the
recognition backend's own candidates.
"""

from abc import ABC, abstractmethod
from typing import List

from ..value_objects.image_frame import ImageFrame
from ..entities.candidate import DecodedReply, MedicineCandidate


class CandidateSourcePort(ABC):
    """
    Port (interface) for additional medicine candidate sources.

    Sources run only after a backend reply was decoded successfully. Their
    lists are concatenated after the reply's candidates, in source order.
    """

    @abstractmethod
    def collect(self, frame: ImageFrame, reply: DecodedReply) -> List[MedicineCandidate]:
        """
        Produce candidates for the frame.

        Args:
            frame: Image being scanned
            reply: The decoded reply of the successful backend

        Returns:
            Candidates in source order (may be empty)
        """
        pass

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Get a short name used in logs."""
        pass
