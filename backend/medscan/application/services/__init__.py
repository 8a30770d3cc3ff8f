"""
Application Services

High-level services that coordinate domain operations.
"""

from .scan_service import ScanService

__all__ = [
    "ScanService",
]
