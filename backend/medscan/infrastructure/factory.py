"""
Service Wiring

Builds the detection pipeline and the scan service from AppConfig.
"""

from typing import List, Optional
import logging

from .backends.factory import BackendFactory
from .lookup.link_lookup import LinkMedicineLookup
from .sources.extracted_text_source import ExtractedTextKeywordSource
from .sources.tesseract_source import TesseractKeywordSource
from ..application.pipeline.orchestrator import DetectionPipeline, PipelineBuilder
from ..application.services.scan_service import ScanService
from ..config.settings import AppConfig, SourceConfig
from ..domain.ports.candidate_source import CandidateSourcePort
from ..domain.ports.medicine_lookup import MedicineLookupPort


logger = logging.getLogger(__name__)


def build_sources(config: SourceConfig) -> List[CandidateSourcePort]:
    """Create the enabled supplementary sources in priority order (OCR first)."""
    sources: List[CandidateSourcePort] = []
    if config.ocr_enabled:
        sources.append(
            TesseractKeywordSource(lang=config.ocr_language, max_dimension=config.ocr_max_dimension)
        )
    if config.extracted_text_enabled:
        sources.append(ExtractedTextKeywordSource())
    return sources


def build_pipeline(config: AppConfig) -> DetectionPipeline:
    """
    Build a detection pipeline from configuration.

    Raises:
        PipelineConfigurationError: If the backend order is empty or has an
            entry that is malformed, duplicated or of an unknown provider
    """
    builder = PipelineBuilder().with_merge_config(config.merge)

    for backend_id, backend in BackendFactory.create_all(config.backends).items():
        builder.with_backend(backend_id, backend)

    for source in build_sources(config.sources):
        builder.with_source(source)

    return builder.build()


def build_scan_service(
    config: Optional[AppConfig] = None,
    lookup: Optional[MedicineLookupPort] = None
) -> ScanService:
    """Build the scan service; defaults to configuration from the environment."""
    config = config or AppConfig.from_env()
    pipeline = build_pipeline(config)
    logger.info(f"Scan service ready, backend order: {pipeline.backend_names}")
    return ScanService(pipeline, lookup or LinkMedicineLookup())
