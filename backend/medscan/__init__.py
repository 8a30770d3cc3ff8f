"""
Medicine Label Scanner

Turns a photograph of a medicine package into positioned, named detections.
Pipeline: RECOGNITION BACKENDS (fallback) → DECODE → MERGE → DETECTION SET
"""

__version__ = "1.0.0"
__author__ = "Medicine Scanner Team"
