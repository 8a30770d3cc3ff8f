"""
Input Validation

Validation utilities for pipeline inputs.
"""

from typing import Optional, Tuple
from pathlib import Path
from io import BytesIO

from PIL import Image as PILImage, UnidentifiedImageError

from ..domain.exceptions import InvalidImageError, InvalidInputError


# Supported image formats
SUPPORTED_FORMATS = {"jpeg", "jpg", "png", "bmp", "webp", "gif"}

# Maximum image dimensions
MAX_IMAGE_DIMENSION = 8192

# Maximum file size (10 MB)
MAX_FILE_SIZE = 10 * 1024 * 1024


def inspect_image(image_bytes: bytes) -> Tuple[int, int, str]:
    """
    Validate compressed image bytes and read their dimensions.

    Args:
        image_bytes: Compressed image payload

    Returns:
        Tuple of (width, height, format)

    Raises:
        InvalidImageError: If the payload is empty, too large, not an image
            or in an unsupported format
    """
    if not image_bytes:
        raise InvalidImageError("Image bytes cannot be empty")

    if len(image_bytes) > MAX_FILE_SIZE:
        raise InvalidImageError(
            f"Image size exceeds maximum ({MAX_FILE_SIZE / 1024 / 1024:.1f} MB)"
        )

    try:
        pil_image = PILImage.open(BytesIO(image_bytes))
        pil_image.verify()

        # Reopen because verify() can only be called once
        pil_image = PILImage.open(BytesIO(image_bytes))
        width, height = pil_image.size
        img_format = pil_image.format.lower() if pil_image.format else "unknown"
    except (
        UnidentifiedImageError,
        PILImage.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        raise InvalidImageError(f"Invalid image data: {e}")

    if width > MAX_IMAGE_DIMENSION or height > MAX_IMAGE_DIMENSION:
        raise InvalidImageError(
            f"Image dimensions exceed maximum ({MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION})"
        )

    if img_format not in SUPPORTED_FORMATS:
        raise InvalidImageError(f"Unsupported image format: {img_format}")

    return width, height, img_format


def validate_image_file(file_path: str) -> Tuple[bool, Optional[str]]:
    """
    Validate an image file path.

    Args:
        file_path: Path to image file

    Returns:
        Tuple of (is_valid, error_message)
    """
    path = Path(file_path)

    if not path.exists():
        return False, f"File not found: {file_path}"

    if not path.is_file():
        return False, f"Not a file: {file_path}"

    suffix = path.suffix.lower().lstrip(".")
    if suffix not in SUPPORTED_FORMATS:
        return False, f"Unsupported file format: {suffix}"

    if path.stat().st_size > MAX_FILE_SIZE:
        return False, f"File size exceeds maximum ({MAX_FILE_SIZE / 1024 / 1024:.1f} MB)"

    return True, None


def validate_medicine_name(name: Optional[str], max_length: int = 200) -> str:
    """
    Validate a medicine name coming from a selection event.

    Args:
        name: Name to validate
        max_length: Maximum name length

    Returns:
        The trimmed name

    Raises:
        InvalidInputError: If the name is empty or too long
    """
    if name is None or not name.strip():
        raise InvalidInputError("medicine_name", "cannot be empty")

    cleaned = name.strip()
    if len(cleaned) > max_length:
        raise InvalidInputError("medicine_name", f"too long (maximum {max_length} characters)")

    return cleaned
