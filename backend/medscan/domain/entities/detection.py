"""
Detection Entities

The pipeline's output: named, positioned detections ready for overlay.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Dict, Any, Tuple

from ..value_objects.position import Position


@dataclass(frozen=True)
class Detection:
    """
    One medicine detected on the image.

    Attributes:
        id: Unique token for this detection
        name: Display-cased, trimmed medicine name
        position: Marker position on the image
        confidence: Confidence between 0.0 and 1.0
    """

    id: str
    name: str
    position: Position
    confidence: float

    def __post_init__(self) -> None:
        if not self.name or self.name != self.name.strip():
            raise ValueError(f"Detection name must be non-empty and trimmed, got {self.name!r}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Detection confidence must be between 0.0 and 1.0, got {self.confidence}")

    @property
    def key(self) -> str:
        """Case-insensitive identity of the detected name."""
        return self.name.strip().lower()

    def content(self) -> Tuple[str, float, float, float]:
        """Everything except the generated id, for comparing scans."""
        return (self.name, self.position.x, self.position.y, self.confidence)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "position": self.position.to_dict(),
            "confidence": self.confidence,
        }

    def __str__(self) -> str:
        return f"{self.name} @ {self.position} ({self.confidence:.0%})"


class DetectionSet:
    """
    Ordered, duplicate-free sequence of detections.

    Order is first-seen order among candidates. No two detections share a name
    ignoring case and surrounding whitespace; constructing a set that breaks
    this raises ValueError.
    """

    def __init__(self, detections: Iterable[Detection] = ()):
        items = tuple(detections)
        seen = set()
        for detection in items:
            if detection.key in seen:
                raise ValueError(f"Duplicate detection name: {detection.name}")
            seen.add(detection.key)
        self._detections = items

    @classmethod
    def empty(cls) -> "DetectionSet":
        return cls(())

    def __iter__(self) -> Iterator[Detection]:
        return iter(self._detections)

    def __len__(self) -> int:
        return len(self._detections)

    def __getitem__(self, index: int) -> Detection:
        return self._detections[index]

    def __bool__(self) -> bool:
        return bool(self._detections)

    def __repr__(self) -> str:
        return f"DetectionSet({[d.name for d in self._detections]})"

    @property
    def is_empty(self) -> bool:
        return not self._detections

    @property
    def names(self) -> List[str]:
        return [d.name for d in self._detections]

    def find(self, name: str) -> Optional[Detection]:
        """Look up a detection by name, ignoring case and surrounding whitespace."""
        key = name.strip().lower()
        for detection in self._detections:
            if detection.key == key:
                return detection
        return None

    def contents(self) -> List[Tuple[str, float, float, float]]:
        """Detections without ids, in order."""
        return [d.content() for d in self._detections]

    def to_list(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self._detections]
