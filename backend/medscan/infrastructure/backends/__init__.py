"""
Recognition Backend Adapters

Implementations of RecognitionBackendPort for cloud, local and static backends.
"""

from .static_backend import StaticRecognitionBackend
from .factory import BackendFactory, BackendType

__all__ = [
    "StaticRecognitionBackend",
    "BackendFactory",
    "BackendType",
]
