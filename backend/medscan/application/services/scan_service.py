"""
Scan Service

High-level application service for medicine label scans.
"""

from typing import Optional
from pathlib import Path
import binascii
import logging

from ..pipeline.cancellation import CancellationToken
from ..pipeline.orchestrator import DetectionPipeline
from ...cross_cutting.validation import inspect_image, validate_image_file, validate_medicine_name
from ...domain.entities.medicine_info import MedicineInfo
from ...domain.entities.scan_result import ScanResult
from ...domain.exceptions import InvalidImageError
from ...domain.ports.medicine_lookup import MedicineLookupPort
from ...domain.value_objects.image_frame import ImageFrame


logger = logging.getLogger(__name__)


class ScanService:
    """
    Application service for scanning medicine labels.

    This is the main entry point for external consumers.
    It provides a simplified interface to the pipeline and handles:
    - Input validation
    - Image loading from various sources
    - Selection of a detection by name

    Usage:
        service = ScanService(pipeline, lookup)

        # From file path
        result = service.scan_file("path/to/label.jpg")

        # From bytes
        result = service.scan_bytes(image_bytes)

        # From base64
        result = service.scan_base64(base64_string)

        # User tapped a marker
        info = service.select(result.detections[0].name)
    """

    def __init__(self, pipeline: DetectionPipeline, lookup: MedicineLookupPort):
        """
        Initialize the service.

        Args:
            pipeline: Configured detection pipeline
            lookup: Collaborator answering selection events
        """
        self.pipeline = pipeline
        self.lookup = lookup
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def scan(
        self,
        frame: ImageFrame,
        cancel_token: Optional[CancellationToken] = None
    ) -> ScanResult:
        """
        Scan an already captured frame.

        Args:
            frame: Image to scan
            cancel_token: Optional token to abandon the scan

        Returns:
            ScanResult; never raises for backend failures
        """
        result = self.pipeline.run(frame, cancel_token=cancel_token)

        if result.exhausted:
            self.logger.warning(
                f"Scan {result.request_id} found nothing, "
                f"{len(result.attempts)} backends failed"
            )
        else:
            self.logger.info(
                f"Scan {result.request_id}: {result.detections.names} via {result.backend_used}"
            )

        return result

    def scan_bytes(
        self,
        image_bytes: bytes,
        cancel_token: Optional[CancellationToken] = None
    ) -> ScanResult:
        """
        Scan an image from raw bytes.

        Raises:
            InvalidImageError: If the bytes are not a supported image
        """
        width, height, img_format = inspect_image(image_bytes)
        frame = ImageFrame.from_bytes(image_bytes, width=width, height=height, format=img_format)
        return self.scan(frame, cancel_token)

    def scan_base64(
        self,
        base64_string: str,
        cancel_token: Optional[CancellationToken] = None
    ) -> ScanResult:
        """
        Scan an image from a base64 string or data URL.

        Raises:
            InvalidImageError: If the string is not valid base64 image data
        """
        if not base64_string or not base64_string.strip():
            raise InvalidImageError("Base64 string cannot be empty")

        try:
            image_bytes, _ = ImageFrame.decode_base64(base64_string.strip())
        except (binascii.Error, ValueError) as e:
            raise InvalidImageError(f"Invalid base64 image data: {e}")

        return self.scan_bytes(image_bytes, cancel_token)

    def scan_file(
        self,
        file_path: str,
        cancel_token: Optional[CancellationToken] = None
    ) -> ScanResult:
        """
        Scan an image from a file path.

        Raises:
            InvalidImageError: If the file doesn't exist or is invalid
        """
        is_valid, error = validate_image_file(file_path)
        if not is_valid:
            raise InvalidImageError(error)

        return self.scan_bytes(Path(file_path).read_bytes(), cancel_token)

    def select(self, medicine_name: str) -> MedicineInfo:
        """
        Handle a selection event for one detection.

        Args:
            medicine_name: Name shown on the selected marker

        Returns:
            MedicineInfo from the lookup collaborator

        Raises:
            InvalidInputError: If the name is empty
        """
        name = validate_medicine_name(medicine_name)
        self.logger.info(f"Looking up selected medicine: {name}")
        return self.lookup.lookup(name)
