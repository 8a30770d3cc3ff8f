"""
Value Objects

Immutable objects that represent domain concepts with no identity.
"""

from .confidence_score import ConfidenceScore
from .position import Position
from .bounding_box import BoundingBox, clamp_percent
from .image_frame import ImageFrame
from .backend_id import BackendId

__all__ = [
    "ConfidenceScore",
    "Position",
    "BoundingBox",
    "clamp_percent",
    "ImageFrame",
    "BackendId",
]
