"""
Image Frame Value Object

Represents one captured still image passed through the pipeline.
"""

from dataclasses import dataclass, field
from typing import Tuple
import base64


FORMAT_MIME_TYPES = {
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "gif": "image/gif",
    "bmp": "image/bmp",
}


@dataclass(frozen=True)
class ImageFrame:
    """
    Immutable value object representing a compressed still image.

    Created by the capture boundary, consumed once by the pipeline.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        mime_type: Encoding of the payload (e.g., "image/jpeg")
        data: Compressed image bytes
    """

    width: int
    height: int
    mime_type: str = "image/jpeg"
    data: bytes = field(default=b"", repr=False)

    def __post_init__(self) -> None:
        """Validate the frame carries a payload and sane dimensions."""
        if not self.data:
            raise ValueError("ImageFrame requires non-empty image bytes")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"ImageFrame dimensions must be positive, got {self.width}x{self.height}"
            )

    @property
    def base64_string(self) -> str:
        """Get base64 encoded image string."""
        return base64.b64encode(self.data).decode("utf-8")

    @property
    def data_url(self) -> str:
        """Get the image as a data URL, as expected by chat vision APIs."""
        return f"data:{self.mime_type};base64,{self.base64_string}"

    def __len__(self) -> int:
        """Return size of image data in bytes."""
        return len(self.data)

    def __str__(self) -> str:
        return f"ImageFrame({self.width}x{self.height}, {self.mime_type}, {len(self.data)} bytes)"

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        width: int,
        height: int,
        format: str = "jpeg"
    ) -> "ImageFrame":
        """
        Create an ImageFrame from raw bytes.

        Args:
            data: Compressed image bytes
            width: Image width in pixels
            height: Image height in pixels
            format: Image format (e.g., "jpeg", "png")

        Returns:
            ImageFrame instance
        """
        mime_type = FORMAT_MIME_TYPES.get(format.lower(), f"image/{format.lower()}")
        return cls(width=width, height=height, mime_type=mime_type, data=data)

    @staticmethod
    def decode_base64(base64_string: str) -> Tuple[bytes, str]:
        """
        Decode a base64 string or data URL.

        Args:
            base64_string: Base64 encoded image, optionally a "data:" URL

        Returns:
            Tuple of (raw bytes, format hint); the hint is empty when unknown
        """
        format_hint = ""
        # Handle data URL format
        if base64_string.startswith("data:"):
            header, base64_string = base64_string.split(",", 1)
            if "image/" in header:
                format_hint = header.split("image/")[1].split(";")[0]

        return base64.b64decode(base64_string, validate=True), format_hint
