"""
Ollama Recognition Backend

Local multimodal inference through an Ollama server (e.g., llava, qwen2.5vl).
"""

from typing import Optional
import logging

import requests

from ...domain.ports.recognition_backend import RecognitionBackendPort
from ...domain.value_objects.image_frame import ImageFrame
from ...domain.exceptions import BackendUnavailable, BackendError


logger = logging.getLogger(__name__)

# HTTP statuses that mean "try another backend", not "this backend is broken"
UNAVAILABLE_STATUSES = {
    401: "auth",
    403: "auth",
    404: "model-not-found",
    429: "quota",
}


class OllamaRecognitionBackend(RecognitionBackendPort):
    """
    Recognition backend using Ollama's /api/generate endpoint.

    The image travels base64 encoded in the ``images`` field. Streaming is
    disabled so one POST returns the full reply.

    Attributes:
        base_url: Ollama API base URL (default: http://localhost:11434)
        model: Multimodal model name (e.g., "llava")
        temperature: Sampling temperature
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        model: str = "llava",
        base_url: str = "http://localhost:11434",
        temperature: float = 0.0,
        max_tokens: int = 1000,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize Ollama backend.

        Args:
            model: Model name
            base_url: Ollama API URL
            temperature: Sampling temperature
            max_tokens: Maximum reply tokens
            timeout: Request timeout in seconds
            session: Pre-built HTTP session
        """
        self._base_url = base_url.rstrip('/')
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._session = session

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def backend_id(self) -> str:
        return f"{self.provider_name}:{self._model}"

    def _init_session(self) -> None:
        """Initialize HTTP session."""
        self._session = requests.Session()
        self._session.headers.update({
            'Content-Type': 'application/json',
        })

    def recognize(self, frame: ImageFrame, instruction: str) -> str:
        """Send one recognition request to Ollama."""
        if not self._session:
            self._init_session()

        payload = {
            "model": self._model,
            "prompt": instruction,
            "images": [frame.base64_string],
            "stream": False,
            "options": {
                "temperature": self._temperature,
                "num_predict": self._max_tokens,
            }
        }

        try:
            self.logger.info(f"Calling Ollama with model {self._model}...")
            response = self._session.post(
                f"{self._base_url}/api/generate",
                json=payload,
                timeout=self._timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise BackendUnavailable(
                f"Could not reach Ollama at {self._base_url}: {e}",
                backend_id=self.backend_id,
                reason="connection",
            ) from e
        except requests.RequestException as e:
            raise BackendError(f"Ollama request failed: {e}", backend_id=self.backend_id) from e

        if response.status_code in UNAVAILABLE_STATUSES:
            raise BackendUnavailable(
                f"Ollama returned HTTP {response.status_code} for model '{self._model}'",
                backend_id=self.backend_id,
                reason=UNAVAILABLE_STATUSES[response.status_code],
            )
        if not response.ok:
            raise BackendError(
                f"Ollama returned HTTP {response.status_code}: {response.text[:200]}",
                backend_id=self.backend_id,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise BackendError(
                f"Ollama returned a non-JSON body: {e}", backend_id=self.backend_id
            ) from e

        text = result.get("response") if isinstance(result, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise BackendError("Ollama returned an empty reply", backend_id=self.backend_id)

        return text
