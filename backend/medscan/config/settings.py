"""
Application Configuration

Settings and configuration management for the medicine scan pipeline.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Tuple
import os


DEFAULT_BACKEND_ORDER: Tuple[str, ...] = (
    "openai:gpt-4o-mini",
    "groq:meta-llama/llama-4-scout-17b-16e-instruct",
    "ollama:llava",
)


@dataclass
class BackendConfig:
    """Recognition backend configuration."""

    # Fallback priority: first entry is tried first
    order: Tuple[str, ...] = DEFAULT_BACKEND_ORDER
    openai_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None
    ollama_base_url: str = "http://localhost:11434"
    temperature: float = 0.0
    max_tokens: int = 1000
    timeout: float = 60.0  # Per attempt, enforced by the HTTP client


@dataclass
class MergeConfig:
    """Candidate merge configuration."""

    min_name_length: int = 3
    ai_confidence: float = 0.95
    extract_confidence: float = 0.85
    ocr_confidence: float = 0.80
    # Scatter band for detections without geometry
    scatter_origin: float = 30.0
    scatter_span: float = 40.0
    scatter_step_x: float = 15.0
    scatter_step_y: float = 10.0


@dataclass
class SourceConfig:
    """Supplementary candidate source configuration."""

    extracted_text_enabled: bool = True
    ocr_enabled: bool = False
    ocr_language: str = "eng"
    ocr_max_dimension: int = 1800


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_file: Optional[str] = None
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_order(raw: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass
class AppConfig:
    """
    Main application configuration.

    Aggregates all component configurations.
    """

    backends: BackendConfig = field(default_factory=BackendConfig)
    merge: MergeConfig = field(default_factory=MergeConfig)
    sources: SourceConfig = field(default_factory=SourceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            MEDSCAN_BACKENDS: Comma separated backend ids in priority order
            MEDSCAN_OPENAI_API_KEY / OPENAI_API_KEY: OpenAI API key
            MEDSCAN_GROQ_API_KEY / GROQ_API_KEY: Groq API key
            MEDSCAN_OLLAMA_BASE_URL: Ollama API URL
            MEDSCAN_BACKEND_TIMEOUT: Per-attempt timeout in seconds
            MEDSCAN_OCR_ENABLED: Enable the local Tesseract keyword source
            MEDSCAN_OCR_LANGUAGE: Tesseract language codes
            MEDSCAN_EXTRACTED_TEXT_ENABLED: Enable the extracted-text keyword source
            MEDSCAN_LOG_LEVEL: Logging level
            MEDSCAN_LOG_FILE: Optional log file path
        """
        config = cls()

        # Backends
        if order := os.getenv("MEDSCAN_BACKENDS"):
            config.backends.order = _parse_order(order)
        if api_key := os.getenv("MEDSCAN_OPENAI_API_KEY"):
            config.backends.openai_api_key = api_key
        elif api_key := os.getenv("OPENAI_API_KEY"):
            config.backends.openai_api_key = api_key
        if api_key := os.getenv("MEDSCAN_GROQ_API_KEY"):
            config.backends.groq_api_key = api_key
        elif api_key := os.getenv("GROQ_API_KEY"):
            config.backends.groq_api_key = api_key
        if base_url := os.getenv("MEDSCAN_OLLAMA_BASE_URL"):
            config.backends.ollama_base_url = base_url
        if timeout := os.getenv("MEDSCAN_BACKEND_TIMEOUT"):
            config.backends.timeout = float(timeout)

        # Sources
        if ocr_enabled := os.getenv("MEDSCAN_OCR_ENABLED"):
            config.sources.ocr_enabled = _env_flag(ocr_enabled)
        if ocr_lang := os.getenv("MEDSCAN_OCR_LANGUAGE"):
            config.sources.ocr_language = ocr_lang
        if extracted := os.getenv("MEDSCAN_EXTRACTED_TEXT_ENABLED"):
            config.sources.extracted_text_enabled = _env_flag(extracted)

        # Logging
        if log_level := os.getenv("MEDSCAN_LOG_LEVEL"):
            config.logging.level = log_level
        if log_file := os.getenv("MEDSCAN_LOG_FILE"):
            config.logging.log_file = log_file

        return config

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from dictionary."""
        config = cls()

        if "backends" in data:
            for key, value in data["backends"].items():
                if key == "order":
                    value = _parse_order(value) if isinstance(value, str) else tuple(value)
                if hasattr(config.backends, key):
                    setattr(config.backends, key, value)

        if "merge" in data:
            for key, value in data["merge"].items():
                if hasattr(config.merge, key):
                    setattr(config.merge, key, value)

        if "sources" in data:
            for key, value in data["sources"].items():
                if hasattr(config.sources, key):
                    setattr(config.sources, key, value)

        if "logging" in data:
            for key, value in data["logging"].items():
                if hasattr(config.logging, key):
                    setattr(config.logging, key, value)

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary. API keys are never included."""
        return {
            "backends": {
                "order": list(self.backends.order),
                "ollama_base_url": self.backends.ollama_base_url,
                "temperature": self.backends.temperature,
                "max_tokens": self.backends.max_tokens,
                "timeout": self.backends.timeout,
            },
            "merge": {
                "min_name_length": self.merge.min_name_length,
                "ai_confidence": self.merge.ai_confidence,
                "extract_confidence": self.merge.extract_confidence,
                "ocr_confidence": self.merge.ocr_confidence,
            },
            "sources": {
                "extracted_text_enabled": self.sources.extracted_text_enabled,
                "ocr_enabled": self.sources.ocr_enabled,
                "ocr_language": self.sources.ocr_language,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
            },
        }


def get_default_config() -> AppConfig:
    """Get default application configuration."""
    return AppConfig.from_env()
