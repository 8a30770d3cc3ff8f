"""
Detection Pipeline

Main orchestration logic for scanning one medicine label image.
ImageFrame → fallback over backends → decode → supplementary sources → merge
"""

from typing import Dict, List, Optional, Sequence
import logging
import time
import uuid

from .cancellation import CancellationToken
from .decoder import ResponseDecoder
from .fallback import FallbackOrchestrator
from .invoker import BackendInvoker
from .merge import CandidateMergeEngine
from ...config.settings import MergeConfig
from ...cross_cutting.error_handling import ErrorHandler
from ...cross_cutting.logging import ScanLogger
from ...domain.entities.candidate import MedicineCandidate
from ...domain.entities.detection import DetectionSet
from ...domain.entities.scan_result import ScanResult
from ...domain.ports.candidate_source import CandidateSourcePort
from ...domain.ports.recognition_backend import RecognitionBackendPort
from ...domain.value_objects.backend_id import BackendId
from ...domain.value_objects.image_frame import ImageFrame
from ...domain.exceptions import AllBackendsExhausted, PipelineConfigurationError
from ...prompts import RECOGNITION_PROMPT


logger = logging.getLogger(__name__)


class DetectionPipeline:
    """
    Detection pipeline for medicine label images.

    Features:
    - Strictly sequential fallback over the configured backends
    - Malformed replies treated like failed backends
    - Supplementary candidate sources merged after the backend's candidates
    - Never raises past its boundary: exhaustion yields an empty DetectionSet

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_backend(BackendId.parse("openai:gpt-4o-mini"), openai_backend)
            .with_backend(BackendId.parse("ollama:llava"), ollama_backend)
            .build()
        )

        result = pipeline.run(frame)
    """

    def __init__(
        self,
        fallback: FallbackOrchestrator,
        decoder: Optional[ResponseDecoder] = None,
        merge_engine: Optional[CandidateMergeEngine] = None,
        sources: Sequence[CandidateSourcePort] = (),
        instruction: str = RECOGNITION_PROMPT
    ):
        """
        Initialize the pipeline.

        Args:
            fallback: Orchestrator over the backend priority list
            decoder: Reply decoder
            merge_engine: Candidate merge engine
            sources: Supplementary candidate sources, in priority order
            instruction: Prompt sent to every backend
        """
        self._fallback = fallback
        self._decoder = decoder or ResponseDecoder()
        self._merge_engine = merge_engine or CandidateMergeEngine()
        self._sources = tuple(sources)
        self._instruction = instruction

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.logger.info(
            f"Pipeline initialized with backends {self.backend_names} "
            f"and {len(self._sources)} supplementary sources"
        )

    def run(
        self,
        frame: ImageFrame,
        cancel_token: Optional[CancellationToken] = None
    ) -> ScanResult:
        """
        Scan one image.

        Args:
            frame: Image to scan
            cancel_token: Optional token to abandon the scan

        Returns:
            ScanResult; its detection set is empty when every backend failed
        """
        start_time = time.time()
        request_id = uuid.uuid4().hex
        slog = ScanLogger(request_id)
        self.logger.info(f"Starting scan (request_id={request_id}, {frame})")

        slog.stage_start("recognition")
        try:
            outcome = self._fallback.run(
                frame,
                self._instruction,
                validate=self._decoder.decode,
                cancel_token=cancel_token,
            )
        except AllBackendsExhausted as e:
            slog.stage_end("recognition", success=False)
            slog.attempts(e.attempts)
            slog.summary(0, None)
            return ScanResult(
                request_id=request_id,
                detections=DetectionSet.empty(),
                backend_used=None,
                attempts=list(e.attempts),
                processing_time_ms=(time.time() - start_time) * 1000,
            )
        slog.stage_end("recognition")
        slog.attempts(outcome.attempts)

        decoded = outcome.value
        candidate_lists: List[Sequence[MedicineCandidate]] = [decoded.candidates]

        for source in self._sources:
            slog.stage_start(source.source_name)
            with ErrorHandler(
                self.logger,
                context=f"source:{source.source_name}",
                suppress=True,
                log_level=logging.WARNING,
            ) as handler:
                candidate_lists.append(source.collect(frame, decoded))
            slog.stage_end(source.source_name, success=not handler.has_error)

        slog.stage_start("merge")
        detections = self._merge_engine.merge(*candidate_lists)
        slog.stage_end("merge")

        elapsed_total = (time.time() - start_time) * 1000
        slog.summary(len(detections), str(outcome.backend_id))

        return ScanResult(
            request_id=request_id,
            detections=detections,
            backend_used=str(outcome.backend_id),
            attempts=list(outcome.attempts),
            processing_time_ms=elapsed_total,
        )

    @property
    def backend_names(self) -> List[str]:
        """Backend ids in priority order."""
        return [str(b) for b in self._fallback.backend_order]

    @property
    def source_names(self) -> List[str]:
        return [s.source_name for s in self._sources]


class PipelineBuilder:
    """
    Builder for constructing detection pipelines.

    Backends are tried in the order they are added.

    Usage:
        pipeline = (
            PipelineBuilder()
            .with_backend(BackendId.parse("openai:gpt-4o-mini"), openai_backend)
            .with_source(extracted_text_source)
            .with_merge_config(MergeConfig())
            .build()
        )
    """

    def __init__(self):
        self._backends: Dict[BackendId, RecognitionBackendPort] = {}
        self._sources: List[CandidateSourcePort] = []
        self._merge_config: Optional[MergeConfig] = None
        self._instruction: str = RECOGNITION_PROMPT

    def with_backend(self, backend_id: BackendId, backend: RecognitionBackendPort) -> "PipelineBuilder":
        """Append a backend at the lowest priority so far."""
        if backend_id in self._backends:
            raise PipelineConfigurationError(f"Backend '{backend_id}' added twice")
        self._backends[backend_id] = backend
        return self

    def with_source(self, source: CandidateSourcePort) -> "PipelineBuilder":
        """Append a supplementary candidate source."""
        self._sources.append(source)
        return self

    def with_merge_config(self, config: MergeConfig) -> "PipelineBuilder":
        """Set the merge configuration."""
        self._merge_config = config
        return self

    def with_instruction(self, instruction: str) -> "PipelineBuilder":
        """Override the recognition prompt."""
        self._instruction = instruction
        return self

    def build(self) -> DetectionPipeline:
        """
        Build the pipeline.

        Returns:
            Configured DetectionPipeline

        Raises:
            PipelineConfigurationError: If no backend was added
        """
        if not self._backends:
            raise PipelineConfigurationError(
                message="Cannot build pipeline, no recognition backend configured",
                missing_components=["backends"],
            )

        invoker = BackendInvoker(self._backends)
        fallback = FallbackOrchestrator(invoker, tuple(self._backends.keys()))

        return DetectionPipeline(
            fallback=fallback,
            decoder=ResponseDecoder(),
            merge_engine=CandidateMergeEngine(self._merge_config),
            sources=self._sources,
            instruction=self._instruction,
        )
