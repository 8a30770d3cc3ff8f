"""
OpenCV Image Processing Utilities

Preprocessing applied to a captured label before local OCR.
"""

from typing import Tuple
import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)


def bytes_to_cv2(image_bytes: bytes) -> np.ndarray:
    """
    Decode compressed image bytes to an OpenCV BGR array.

    Raises:
        ValueError: If OpenCV cannot decode the bytes
    """
    buffer = np.frombuffer(image_bytes, np.uint8)
    img = cv2.imdecode(buffer, cv2.IMREAD_COLOR)

    if img is None:
        raise ValueError("Failed to decode image from bytes")

    return img


def resize_image(img: np.ndarray, max_dimension: int = 1800) -> Tuple[np.ndarray, float]:
    """
    Shrink an image so its longer side is at most ``max_dimension``.

    Returns:
        Tuple of (image, scale_factor); the input is returned untouched when
        it already fits
    """
    height, width = img.shape[:2]

    if max(height, width) <= max_dimension:
        return img, 1.0

    scale = max_dimension / max(height, width)
    new_size = (int(width * scale), int(height * scale))
    resized = cv2.resize(img, new_size, interpolation=cv2.INTER_AREA)

    logger.debug(f"Resized image from {width}x{height} to {new_size[0]}x{new_size[1]}")

    return resized, scale


def enhance_for_ocr(img: np.ndarray) -> np.ndarray:
    """
    Enhance a label photo for Tesseract.

    Grayscale, CLAHE contrast equalization, edge-preserving bilateral
    denoise, then unsharp masking to crisp up printed text.
    """
    gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY) if img.ndim == 3 else img.copy()

    clahe = cv2.createCLAHE(clipLimit=3.0, tileGridSize=(8, 8))
    equalized = clahe.apply(gray)

    denoised = cv2.bilateralFilter(equalized, d=9, sigmaColor=75, sigmaSpace=75)

    blurred = cv2.GaussianBlur(denoised, (0, 0), 3)
    return cv2.addWeighted(denoised, 1.5, blurred, -0.5, 0)


def prepare_for_ocr(image_bytes: bytes, max_dimension: int = 1800) -> np.ndarray:
    """Decode, bound the size of, and enhance an image for OCR."""
    img = bytes_to_cv2(image_bytes)
    img, _ = resize_image(img, max_dimension=max_dimension)
    return enhance_for_ocr(img)
