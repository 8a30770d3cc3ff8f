"""
Pipeline Module

Contains the backend invoker, fallback orchestration, reply decoding,
candidate merging and the pipeline that ties them together.
"""

from .cancellation import CancellationToken
from .invoker import BackendInvoker
from .fallback import FallbackOrchestrator, FallbackOutcome, Pending, Success, Exhausted
from .decoder import ResponseDecoder
from .merge import CandidateMergeEngine, display_name
from .orchestrator import DetectionPipeline, PipelineBuilder

__all__ = [
    "CancellationToken",
    "BackendInvoker",
    "FallbackOrchestrator",
    "FallbackOutcome",
    "Pending",
    "Success",
    "Exhausted",
    "ResponseDecoder",
    "CandidateMergeEngine",
    "display_name",
    "DetectionPipeline",
    "PipelineBuilder",
]
