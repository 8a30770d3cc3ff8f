"""
Cancellation Token

Lets a caller abandon interest in an in-flight scan.
"""

from typing import Optional
import threading


class CancellationToken:
    """
    Thread-safe flag shared between the caller and one pipeline run.

    Cancelling does not interrupt a network call already in progress; the
    orchestrator checks the token before and after every backend attempt and
    treats a cancelled attempt as an unavailable backend.
    """

    def __init__(self):
        self._event = threading.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: str = "cancelled by caller") -> None:
        self._reason = reason
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason
