"""
Tesseract OCR Keyword Source

Runs local Tesseract OCR on the frame and reports known medicine names
together with the box and confidence of the word they were read from.
"""

from typing import Any, Dict, Iterable, List, Optional
import logging
import time

import pytesseract

from .keywords import MEDICINE_KEYWORDS, find_keywords
from ..utils.image_processing import prepare_for_ocr
from ...domain.ports.candidate_source import CandidateSourcePort
from ...domain.entities.candidate import CandidateOrigin, DecodedReply, MedicineCandidate
from ...domain.value_objects.bounding_box import BoundingBox
from ...domain.value_objects.confidence_score import ConfidenceScore
from ...domain.value_objects.image_frame import ImageFrame


logger = logging.getLogger(__name__)


class TesseractKeywordSource(CandidateSourcePort):
    """
    Keyword matcher over local Tesseract OCR output.

    Requires the tesseract binary to be installed. Any OCR failure is logged
    and yields no candidates; the scan continues with the backend's result.

    Attributes:
        lang: Tesseract language code(s), e.g. "eng" or "tur+eng"
        max_dimension: Longer image side after downscaling
    """

    def __init__(
        self,
        lang: str = "eng",
        max_dimension: int = 1800,
        psm: int = 3,
        keywords: Iterable[str] = MEDICINE_KEYWORDS
    ):
        """
        Initialize Tesseract source.

        Args:
            lang: Tesseract language(s)
            max_dimension: Downscale bound applied before OCR
            psm: Page Segmentation Mode (3 = auto)
            keywords: Medicine names to look for
        """
        self._lang = lang
        self._max_dimension = max_dimension
        self._psm = psm
        self._keywords = tuple(k.lower() for k in keywords)

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def source_name(self) -> str:
        return "tesseract_ocr"

    def collect(self, frame: ImageFrame, reply: DecodedReply) -> List[MedicineCandidate]:
        start_time = time.time()

        try:
            image = prepare_for_ocr(frame.data, max_dimension=self._max_dimension)
            data = pytesseract.image_to_data(
                image,
                lang=self._lang,
                config=f"--oem 3 --psm {self._psm}",
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, ValueError, RuntimeError) as e:
            self.logger.warning(f"Tesseract OCR failed, no OCR candidates: {e}")
            return []

        img_height, img_width = image.shape[:2]
        words = self._read_words(data)
        full_text = " ".join(w["text"] for w in words)

        candidates = []
        for keyword in find_keywords(full_text, self._keywords):
            word = next((w for w in words if keyword in w["text"].lower()), None)
            candidates.append(self._to_candidate(keyword, word, img_width, img_height))

        self.logger.info(
            f"OCR read {len(words)} words, {len(candidates)} keyword matches "
            f"in {(time.time() - start_time) * 1000:.0f}ms"
        )
        return candidates

    @staticmethod
    def _read_words(data: Dict[str, List[Any]]) -> List[Dict[str, Any]]:
        """Flatten Tesseract's column-wise output into recognized words."""
        words = []
        for i in range(len(data["text"])):
            text = str(data["text"][i]).strip()
            if not text:
                continue
            words.append({
                "text": text,
                "conf": float(data["conf"][i]),
                "left": data["left"][i],
                "top": data["top"][i],
                "width": data["width"][i],
                "height": data["height"][i],
            })
        return words

    @staticmethod
    def _to_candidate(
        keyword: str,
        word: Optional[Dict[str, Any]],
        img_width: int,
        img_height: int
    ) -> MedicineCandidate:
        if word is None:
            return MedicineCandidate(name=keyword, origin=CandidateOrigin.OCR)

        box = BoundingBox.from_pixels(
            word["left"], word["top"], word["width"], word["height"], img_width, img_height
        )
        # Tesseract reports -1 for non-word rows; fall back to the origin default
        confidence = (
            ConfidenceScore.from_percentage(word["conf"]).value if word["conf"] >= 0 else None
        )
        return MedicineCandidate(
            name=keyword,
            bounding_box=box,
            source_confidence=confidence,
            origin=CandidateOrigin.OCR,
        )
