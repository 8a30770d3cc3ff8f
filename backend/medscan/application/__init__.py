"""
Application Layer

Pipeline orchestration and application services.
"""

from .pipeline import DetectionPipeline, PipelineBuilder
from .services import ScanService

__all__ = [
    "DetectionPipeline",
    "PipelineBuilder",
    "ScanService",
]
