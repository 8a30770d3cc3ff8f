"""
Extracted-Text Keyword Source

Finds known medicine names in the visible text lines a backend reported.
"""

from typing import Iterable, List
import logging

from .keywords import MEDICINE_KEYWORDS, find_keywords
from ...domain.ports.candidate_source import CandidateSourcePort
from ...domain.entities.candidate import CandidateOrigin, DecodedReply, MedicineCandidate
from ...domain.value_objects.image_frame import ImageFrame


logger = logging.getLogger(__name__)


class ExtractedTextKeywordSource(CandidateSourcePort):
    """
    Keyword matcher over the ``extractedText`` of the successful reply.

    Catches generic names the model read off the label but did not list as
    candidates. Candidates carry no geometry and no confidence of their own.
    """

    def __init__(self, keywords: Iterable[str] = MEDICINE_KEYWORDS):
        self._keywords = tuple(k.lower() for k in keywords)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def source_name(self) -> str:
        return "extracted_text"

    def collect(self, frame: ImageFrame, reply: DecodedReply) -> List[MedicineCandidate]:
        found: List[str] = []
        for line in reply.extracted_text:
            for keyword in find_keywords(line, self._keywords):
                if keyword not in found:
                    found.append(keyword)

        if found:
            self.logger.debug(f"Keywords in extracted text: {found}")

        return [MedicineCandidate(name=k, origin=CandidateOrigin.EXTRACT) for k in found]
