"""
Recognition Backend Port

Abstract interface for external vision/text-generation backends.
"""

from abc import ABC, abstractmethod

from ..value_objects.image_frame import ImageFrame


class RecognitionBackendPort(ABC):
    """
    Port (interface) for one recognition backend bound to one model.

    Responsible for a single recognition request:
    - Send the instruction and the image to the backend
    - Return the backend's raw text reply unmodified

    Implementations must perform exactly one round trip and must not retry;
    retrying with another backend belongs to the fallback orchestrator.

    Implementations may use:
    - OpenAI chat completions with image parts
    - Groq vision models
    - Local Ollama multimodal models
    """

    @abstractmethod
    def recognize(self, frame: ImageFrame, instruction: str) -> str:
        """
        Ask the backend to identify medicine names in the frame.

        Args:
            frame: Image to analyze
            instruction: Prompt describing the expected JSON reply

        Returns:
            The raw text reply

        Raises:
            BackendUnavailable: Network, auth, quota or unknown model failures
            BackendError: Any other failure, including an empty reply
        """
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider family of this backend."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Get the model this backend is bound to."""
        pass
