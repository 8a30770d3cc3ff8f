"""
Tests for the supplementary keyword sources.
"""

import pytesseract
import pytest

from medscan.domain.entities.candidate import CandidateOrigin, DecodedReply
from medscan.infrastructure.sources import tesseract_source
from medscan.infrastructure.sources.extracted_text_source import ExtractedTextKeywordSource
from medscan.infrastructure.sources.keywords import MEDICINE_KEYWORDS, find_keywords
from medscan.infrastructure.sources.tesseract_source import TesseractKeywordSource


def test_keywords_are_lower_case_and_unique():
    assert all(k == k.lower() for k in MEDICINE_KEYWORDS)
    assert len(set(MEDICINE_KEYWORDS)) == len(MEDICINE_KEYWORDS)


def test_find_keywords_matches_substrings_case_insensitively():
    assert find_keywords("AMOXICILLIN500mg + Clavulanate") == ["amoxicillin"]


def test_find_keywords_uses_keyword_order():
    assert find_keywords("cetirizine and ibuprofen") == ["ibuprofen", "cetirizine"]


class TestExtractedTextKeywordSource:
    """Tests for keyword matching over the backend's extracted text."""

    def test_finds_keywords_once(self, frame):
        reply = DecodedReply(extracted_text=["Paracetamol 500mg", "PARACETAMOL IP", "Cetirizine"])

        candidates = ExtractedTextKeywordSource().collect(frame, reply)

        assert [c.name for c in candidates] == ["paracetamol", "cetirizine"]
        assert all(c.origin == CandidateOrigin.EXTRACT for c in candidates)
        assert all(c.bounding_box is None for c in candidates)

    def test_no_text_no_candidates(self, frame):
        assert ExtractedTextKeywordSource().collect(frame, DecodedReply()) == []

    def test_custom_keywords(self, frame):
        source = ExtractedTextKeywordSource(keywords=["Dolo"])

        candidates = source.collect(frame, DecodedReply(extracted_text=["DOLO 650"]))

        assert [c.name for c in candidates] == ["dolo"]


def ocr_data(words):
    """Build pytesseract image_to_data DICT output from (text, conf, box) tuples."""
    data = {"text": [], "conf": [], "left": [], "top": [], "width": [], "height": []}
    for text, conf, (left, top, width, height) in words:
        data["text"].append(text)
        data["conf"].append(conf)
        data["left"].append(left)
        data["top"].append(top)
        data["width"].append(width)
        data["height"].append(height)
    return data


class TestTesseractKeywordSource:
    """Tests for the local OCR source with Tesseract mocked out."""

    def test_match_carries_word_box_and_confidence(self, frame, monkeypatch):
        data = ocr_data([
            ("", -1, (0, 0, 64, 48)),
            ("Ibuprofen", 91.0, (16, 12, 32, 12)),
            ("400mg", 88.0, (16, 30, 20, 8)),
        ])
        monkeypatch.setattr(tesseract_source.pytesseract, "image_to_data", lambda *a, **kw: data)

        candidates = TesseractKeywordSource().collect(frame, DecodedReply())

        assert len(candidates) == 1
        candidate = candidates[0]
        assert candidate.name == "ibuprofen"
        assert candidate.origin == CandidateOrigin.OCR
        assert candidate.source_confidence == pytest.approx(0.91)
        center = candidate.bounding_box.center_position()
        assert (center.x, center.y) == (50.0, 37.5)

    def test_negative_confidence_falls_back_to_default(self, frame, monkeypatch):
        data = ocr_data([("aspirin", -1, (0, 0, 10, 10))])
        monkeypatch.setattr(tesseract_source.pytesseract, "image_to_data", lambda *a, **kw: data)

        candidate = TesseractKeywordSource().collect(frame, DecodedReply())[0]

        assert candidate.source_confidence is None

    def test_ocr_failure_yields_no_candidates(self, frame, monkeypatch):
        def fail(*args, **kwargs):
            raise pytesseract.TesseractNotFoundError()

        monkeypatch.setattr(tesseract_source.pytesseract, "image_to_data", fail)

        assert TesseractKeywordSource().collect(frame, DecodedReply()) == []

    def test_passes_language_to_tesseract(self, frame, monkeypatch):
        seen = {}

        def capture(image, lang, config, output_type):
            seen["lang"] = lang
            return ocr_data([])

        monkeypatch.setattr(tesseract_source.pytesseract, "image_to_data", capture)

        TesseractKeywordSource(lang="tur+eng").collect(frame, DecodedReply())

        assert seen["lang"] == "tur+eng"
