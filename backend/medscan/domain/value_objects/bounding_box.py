"""
Bounding Box Value Object

Represents a rectangular region of an image in percentage units.
"""

from dataclasses import dataclass
from typing import Tuple, Dict, Any
import math

from .position import Position


PERCENT_MIN = 0.0
PERCENT_MAX = 100.0


def clamp_percent(value: float) -> float:
    """Clamp a coordinate into the [0, 100] percentage range."""
    return min(PERCENT_MAX, max(PERCENT_MIN, value))


@dataclass(frozen=True)
class BoundingBox:
    """
    Immutable value object representing a box on the image.

    Coordinates are percentages of the image dimensions: (x, y) is the top-left
    corner, width and height extend right and down. Backends are not trusted
    to stay inside the image, so coordinates themselves are not range checked;
    only the derived center is clamped.

    Attributes:
        x: Left edge, percent of image width
        y: Top edge, percent of image height
        width: Box width, percent of image width
        height: Box height, percent of image height
    """

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate box geometry."""
        for coord_name, coord_value in [
            ("x", self.x), ("y", self.y),
            ("width", self.width), ("height", self.height)
        ]:
            if not math.isfinite(coord_value):
                raise ValueError(f"{coord_name} must be a finite number, got {coord_value}")
        if self.width < 0:
            raise ValueError(f"width must be >= 0, got {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0, got {self.height}")

    @property
    def center(self) -> Tuple[float, float]:
        """Get raw center point coordinates (may lie outside the image)."""
        return (
            self.x + self.width / 2,
            self.y + self.height / 2
        )

    def center_position(self) -> Position:
        """Get the center as a Position clamped into the image."""
        cx, cy = self.center
        return Position(x=clamp_percent(cx), y=clamp_percent(cy))

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    def __str__(self) -> str:
        return f"BoundingBox([{self.x:.1f}, {self.y:.1f}, {self.width:.1f}x{self.height:.1f}])"

    @classmethod
    def from_pixels(
        cls,
        left: float,
        top: float,
        width: float,
        height: float,
        image_width: int,
        image_height: int
    ) -> "BoundingBox":
        """
        Create from absolute pixel coordinates.

        Args:
            left: Left edge in pixels
            top: Top edge in pixels
            width: Box width in pixels
            height: Box height in pixels
            image_width: Width of the image in pixels
            image_height: Height of the image in pixels

        Returns:
            New BoundingBox in percentage units
        """
        if image_width <= 0 or image_height <= 0:
            raise ValueError("Image dimensions must be positive")

        return cls(
            x=left / image_width * 100.0,
            y=top / image_height * 100.0,
            width=width / image_width * 100.0,
            height=height / image_height * 100.0,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoundingBox":
        """Create from a {x, y, width, height} mapping."""
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )
