"""
Infrastructure Layer

Adapters for recognition backends, supplementary candidate sources and the
medicine lookup, plus the wiring that builds a service from configuration.
"""

from .factory import build_pipeline, build_scan_service

__all__ = [
    "build_pipeline",
    "build_scan_service",
]
