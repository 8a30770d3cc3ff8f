"""
Supplementary Candidate Sources

Keyword sources whose candidates are merged after the recognition
backend's own candidates.
"""

from .keywords import MEDICINE_KEYWORDS, find_keywords
from .extracted_text_source import ExtractedTextKeywordSource
from .tesseract_source import TesseractKeywordSource

__all__ = [
    "MEDICINE_KEYWORDS",
    "find_keywords",
    "ExtractedTextKeywordSource",
    "TesseractKeywordSource",
]
