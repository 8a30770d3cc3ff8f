"""
Position Value Object

The point on the image where a detection marker is drawn.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Position:
    """
    Immutable marker position in percentage-of-image units.

    Attributes:
        x: Horizontal position, 0 (left edge) to 100 (right edge)
        y: Vertical position, 0 (top edge) to 100 (bottom edge)
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        """Validate the position lies on the image."""
        if not 0.0 <= self.x <= 100.0:
            raise ValueError(f"Position x must be between 0 and 100, got {self.x}")
        if not 0.0 <= self.y <= 100.0:
            raise ValueError(f"Position y must be between 0 and 100, got {self.y}")

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    def __str__(self) -> str:
        return f"({self.x:.1f}%, {self.y:.1f}%)"
