"""
OpenAI Recognition Backend

Medicine name recognition using OpenAI vision-capable chat models.
"""

from typing import Any, Optional
import logging

import openai

from .chat_format import build_vision_messages, extract_message_content
from ...domain.ports.recognition_backend import RecognitionBackendPort
from ...domain.value_objects.image_frame import ImageFrame
from ...domain.exceptions import BackendUnavailable, BackendError


logger = logging.getLogger(__name__)


class OpenAIRecognitionBackend(RecognitionBackendPort):
    """
    Recognition backend using the OpenAI chat completions API.

    The image is sent inline as a data URL. The SDK's own retries are
    disabled: one call is one round trip.

    Attributes:
        api_key: OpenAI API key
        model: Vision-capable model name
        temperature: Sampling temperature
        max_tokens: Maximum reply length
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 1000,
        timeout: float = 60.0,
        client: Optional[Any] = None
    ):
        """
        Initialize OpenAI backend.

        Args:
            model: Model name
            api_key: OpenAI API key
            temperature: Sampling temperature
            max_tokens: Maximum reply tokens
            timeout: Request timeout in seconds
            client: Pre-built client (tests inject a stand-in here)
        """
        self._model = model
        self._api_key = api_key
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._client = client

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def backend_id(self) -> str:
        return f"{self.provider_name}:{self._model}"

    def _initialize(self) -> None:
        """Lazy initialization of OpenAI client."""
        if self._client is not None:
            return

        if not self._api_key:
            raise BackendUnavailable(
                "OpenAI API key not provided. Set OPENAI_API_KEY or MEDSCAN_OPENAI_API_KEY.",
                backend_id=self.backend_id,
                reason="missing-api-key",
            )

        self._client = openai.OpenAI(
            api_key=self._api_key,
            timeout=self._timeout,
            max_retries=0,
        )
        self.logger.info(f"OpenAI client initialized with model={self._model}")

    def recognize(self, frame: ImageFrame, instruction: str) -> str:
        """Send one recognition request to OpenAI."""
        self._initialize()

        try:
            response = self._client.chat.completions.create(
                model=self._model,
                messages=build_vision_messages(frame, instruction),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except openai.APIConnectionError as e:
            # APITimeoutError is a subclass
            raise BackendUnavailable(
                f"Could not reach OpenAI: {e}", backend_id=self.backend_id, reason="connection"
            ) from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise BackendUnavailable(
                f"OpenAI rejected the credentials: {e}", backend_id=self.backend_id, reason="auth"
            ) from e
        except openai.RateLimitError as e:
            raise BackendUnavailable(
                f"OpenAI rate limit or quota exceeded: {e}", backend_id=self.backend_id, reason="quota"
            ) from e
        except openai.NotFoundError as e:
            raise BackendUnavailable(
                f"OpenAI model '{self._model}' not found: {e}",
                backend_id=self.backend_id,
                reason="model-not-found",
            ) from e
        except openai.OpenAIError as e:
            raise BackendError(f"OpenAI API error: {e}", backend_id=self.backend_id) from e

        return extract_message_content(response, self.backend_id)
