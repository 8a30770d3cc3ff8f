"""
Backend Factory

Factory for creating recognition backend instances from configuration.
Supports cloud (OpenAI, Groq), local (Ollama) and static backends.
"""

from typing import Dict
from enum import Enum

from ...config.settings import BackendConfig
from ...domain.ports.recognition_backend import RecognitionBackendPort
from ...domain.value_objects.backend_id import BackendId
from ...domain.exceptions import PipelineConfigurationError
from .static_backend import StaticRecognitionBackend


class BackendType(Enum):
    """Available recognition backend providers."""

    OPENAI = "openai"
    GROQ = "groq"
    OLLAMA = "ollama"
    STATIC = "static"


class BackendFactory:
    """
    Factory for creating recognition backends.

    Usage:
        # One backend
        backend = BackendFactory.create(BackendId.parse("openai:gpt-4o-mini"), config)

        # Every backend of the configured order, keyed by id
        backends = BackendFactory.create_all(config)
    """

    @staticmethod
    def create(backend_id: BackendId, config: BackendConfig) -> RecognitionBackendPort:
        """
        Create the adapter for one backend id.

        Args:
            backend_id: Provider and model to bind
            config: Shared backend settings (keys, URLs, timeouts)

        Returns:
            RecognitionBackendPort implementation

        Raises:
            PipelineConfigurationError: If the provider is unknown
        """
        try:
            backend_type = BackendType(backend_id.provider)
        except ValueError:
            raise PipelineConfigurationError(
                f"Unknown backend provider '{backend_id.provider}' in '{backend_id}'. "
                f"Supported: {', '.join(t.value for t in BackendType)}"
            )

        if backend_type == BackendType.OPENAI:
            # Import here so an unused SDK is never loaded
            from .openai_backend import OpenAIRecognitionBackend

            return OpenAIRecognitionBackend(
                model=backend_id.model,
                api_key=config.openai_api_key,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout=config.timeout,
            )

        elif backend_type == BackendType.GROQ:
            from .groq_backend import GroqRecognitionBackend

            return GroqRecognitionBackend(
                model=backend_id.model,
                api_key=config.groq_api_key,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout=config.timeout,
            )

        elif backend_type == BackendType.OLLAMA:
            from .ollama_backend import OllamaRecognitionBackend

            return OllamaRecognitionBackend(
                model=backend_id.model,
                base_url=config.ollama_base_url,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout=config.timeout,
            )

        return StaticRecognitionBackend(model=backend_id.model)

    @staticmethod
    def create_all(config: BackendConfig) -> Dict[BackendId, RecognitionBackendPort]:
        """
        Create adapters for the configured order.

        Returns:
            Adapters keyed by backend id, in priority order

        Raises:
            PipelineConfigurationError: If an entry is not "provider:model",
                is listed twice or names an unknown provider
        """
        backends: Dict[BackendId, RecognitionBackendPort] = {}
        for raw_id in config.order:
            try:
                backend_id = BackendId.parse(raw_id)
            except ValueError as e:
                raise PipelineConfigurationError(
                    f"Invalid backend id '{raw_id}': {e}",
                    missing_components=["backend_order"],
                ) from e
            if backend_id in backends:
                raise PipelineConfigurationError(f"Backend '{backend_id}' listed twice")
            backends[backend_id] = BackendFactory.create(backend_id, config)
        return backends
