"""
Backend Invoker

Issues one recognition request to one named backend.
"""

from typing import Dict, List, Mapping
import logging

from ...domain.ports.recognition_backend import RecognitionBackendPort
from ...domain.value_objects.backend_id import BackendId
from ...domain.value_objects.image_frame import ImageFrame
from ...domain.exceptions import (
    RecognitionError,
    BackendUnavailable,
    BackendError,
)


logger = logging.getLogger(__name__)


class BackendInvoker:
    """
    Routes a recognition request to the adapter registered for a BackendId.

    Performs exactly one round trip per call, never retries and keeps no
    state between calls.
    """

    def __init__(self, backends: Mapping[BackendId, RecognitionBackendPort]):
        """
        Initialize the invoker.

        Args:
            backends: Adapter for every backend id that may be invoked
        """
        self._backends: Dict[BackendId, RecognitionBackendPort] = dict(backends)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def invoke(self, backend_id: BackendId, frame: ImageFrame, instruction: str) -> str:
        """
        Send one recognition request.

        Args:
            backend_id: Backend to ask
            frame: Image to analyze
            instruction: Prompt text

        Returns:
            The backend's raw text reply

        Raises:
            BackendUnavailable: Unknown backend, or the adapter could not reach it
            BackendError: Any other failure, including an empty reply
        """
        backend = self._backends.get(backend_id)
        if backend is None:
            raise BackendUnavailable(
                f"No adapter registered for backend '{backend_id}'",
                backend_id=str(backend_id),
                reason="model-not-found",
            )

        self.logger.info(f"Invoking backend {backend_id} with {frame}")

        try:
            reply = backend.recognize(frame, instruction)
        except RecognitionError as e:
            if e.backend_id is None:
                e.backend_id = str(backend_id)
                e.details["backend"] = str(backend_id)
            raise
        except Exception as e:
            raise BackendError(
                f"Unexpected failure in backend adapter: {e}",
                backend_id=str(backend_id),
            ) from e

        if not isinstance(reply, str) or not reply.strip():
            raise BackendError("Backend returned an empty reply", backend_id=str(backend_id))

        return reply

    @property
    def backend_ids(self) -> List[BackendId]:
        return list(self._backends.keys())
