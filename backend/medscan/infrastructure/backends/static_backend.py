"""
Static Recognition Backend

Canned replies for tests and offline demos. Makes no network calls.
"""

from collections import deque
from typing import Deque, List, Sequence, Union
import json
import logging

from ...domain.ports.recognition_backend import RecognitionBackendPort
from ...domain.value_objects.image_frame import ImageFrame


logger = logging.getLogger(__name__)

EMPTY_REPLY = json.dumps({"detectedObjects": [], "extractedText": [], "medicineCandidates": []})

Scripted = Union[str, Exception]

# Instructions kept for inspection; older ones are dropped
CALL_HISTORY_SIZE = 32


class StaticRecognitionBackend(RecognitionBackendPort):
    """
    Backend that replays a fixed script.

    Each call consumes the next scripted entry; the last entry repeats once
    the script runs out. An entry that is an exception is raised instead of
    returned.

    Usage:
        backend = StaticRecognitionBackend(['{"medicineCandidates": ["Dolo 650"]}'])
        backend = StaticRecognitionBackend([BackendUnavailable("offline")])
    """

    def __init__(
        self,
        replies: Union[Scripted, Sequence[Scripted]] = EMPTY_REPLY,
        model: str = "fixture",
        provider: str = "static",
        history_size: int = CALL_HISTORY_SIZE
    ):
        if isinstance(replies, (str, Exception)):
            replies = [replies]
        if not replies:
            raise ValueError("StaticRecognitionBackend needs at least one scripted reply")

        self._replies: List[Scripted] = list(replies)
        self._model = model
        self._provider = provider
        self._calls: Deque[str] = deque(maxlen=history_size)
        self._call_count = 0

    @property
    def provider_name(self) -> str:
        return self._provider

    @property
    def model_name(self) -> str:
        return self._model

    @property
    def call_count(self) -> int:
        return self._call_count

    @property
    def calls(self) -> List[str]:
        """Most recent instructions, oldest first."""
        return list(self._calls)

    def recognize(self, frame: ImageFrame, instruction: str) -> str:
        index = min(self._call_count, len(self._replies) - 1)
        self._call_count += 1
        self._calls.append(instruction)
        scripted = self._replies[index]

        if isinstance(scripted, Exception):
            raise scripted
        return scripted
