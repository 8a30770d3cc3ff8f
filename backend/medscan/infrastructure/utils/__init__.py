"""
Infrastructure Utilities

Image preprocessing shared by local recognition sources.
"""

from .image_processing import bytes_to_cv2, resize_image, enhance_for_ocr, prepare_for_ocr

__all__ = [
    "bytes_to_cv2",
    "resize_image",
    "enhance_for_ocr",
    "prepare_for_ocr",
]
