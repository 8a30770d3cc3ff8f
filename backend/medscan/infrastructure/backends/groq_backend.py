"""
Groq Recognition Backend

Medicine name recognition using Groq-hosted vision models.
"""

from typing import Any, Optional
import logging

import groq

from .chat_format import build_vision_messages, extract_message_content
from ...domain.ports.recognition_backend import RecognitionBackendPort
from ...domain.value_objects.image_frame import ImageFrame
from ...domain.exceptions import BackendUnavailable, BackendError


logger = logging.getLogger(__name__)


class GroqRecognitionBackend(RecognitionBackendPort):
    """
    Recognition backend using the Groq chat completions API.

    Groq accepts the same message shape as OpenAI, including data URL image
    parts. SDK retries are disabled.
    """

    def __init__(
        self,
        model: str = "meta-llama/llama-4-scout-17b-16e-instruct",
        api_key: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 1000,
        timeout: float = 60.0,
        client: Optional[Any] = None
    ):
        self._model = model
        self._api_key = api_key
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._client = client

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def provider_name(self) -> str:
        return "groq"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def backend_id(self) -> str:
        return f"{self.provider_name}:{self._model}"

    def _initialize(self) -> None:
        """Lazy initialization of Groq client."""
        if self._client is not None:
            return

        if not self._api_key:
            raise BackendUnavailable(
                "Groq API key not provided. Set GROQ_API_KEY or MEDSCAN_GROQ_API_KEY.",
                backend_id=self.backend_id,
                reason="missing-api-key",
            )

        self._client = groq.Groq(
            api_key=self._api_key,
            timeout=self._timeout,
            max_retries=0,
        )
        self.logger.info(f"Groq client initialized with model={self._model}")

    def recognize(self, frame: ImageFrame, instruction: str) -> str:
        """Send one recognition request to Groq."""
        self._initialize()

        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=build_vision_messages(frame, instruction),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except groq.APIConnectionError as e:
            raise BackendUnavailable(
                f"Could not reach Groq: {e}", backend_id=self.backend_id, reason="connection"
            ) from e
        except (groq.AuthenticationError, groq.PermissionDeniedError) as e:
            raise BackendUnavailable(
                f"Groq rejected the credentials: {e}", backend_id=self.backend_id, reason="auth"
            ) from e
        except groq.RateLimitError as e:
            raise BackendUnavailable(
                f"Groq rate limit exceeded: {e}", backend_id=self.backend_id, reason="quota"
            ) from e
        except groq.NotFoundError as e:
            raise BackendUnavailable(
                f"Groq model '{self._model}' not found: {e}",
                backend_id=self.backend_id,
                reason="model-not-found",
            ) from e
        except groq.GroqError as e:
            raise BackendError(f"Groq API error: {e}", backend_id=self.backend_id) from e

        return extract_message_content(response, self.backend_id)
