"""
Cross-Cutting Concerns

Utilities and services that span across multiple layers.
"""

from .logging import setup_logging, ScanLogger
from .validation import inspect_image, validate_image_file, validate_medicine_name
from .error_handling import ErrorHandler

__all__ = [
    "setup_logging",
    "ScanLogger",
    "inspect_image",
    "validate_image_file",
    "validate_medicine_name",
    "ErrorHandler",
]
