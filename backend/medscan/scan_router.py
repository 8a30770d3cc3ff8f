"""
Scan Router - Medicine Label Scan Endpoints

1. Upload (multipart or base64) a photo of a medicine label
2. Recognition backends are tried in priority order
3. Detections come back as positioned markers; an empty list is a normal answer
4. Selecting a marker asks the lookup for search links
"""

from functools import lru_cache
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel

from .application.services.scan_service import ScanService
from .domain.entities.scan_result import ScanResult
from .domain.exceptions import ValidationError
from .infrastructure.factory import build_scan_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scan"])


class PositionModel(BaseModel):
    """Marker position in percent of the image."""
    x: float
    y: float


class DetectionModel(BaseModel):
    id: str
    name: str
    position: PositionModel
    confidence: float


class AttemptModel(BaseModel):
    """One fallback attempt, for diagnostics."""
    backend: str
    outcome: str
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    duration_ms: float


class ScanResponse(BaseModel):
    """Response model for a scan."""
    request_id: str
    detections: List[DetectionModel] = []
    backend_used: Optional[str] = None
    attempts: List[AttemptModel] = []
    processing_time_ms: float


class Base64ScanRequest(BaseModel):
    """Request model for base64 image scans. Data URLs are accepted."""
    image_base64: str
    format: Optional[str] = None


class SideEffectsModel(BaseModel):
    common: List[str] = []
    serious: List[str] = []


class MedicineInfoResponse(BaseModel):
    """Response model for a selected medicine."""
    generic_name: str
    brand_names: List[str] = []
    drug_class: str = ""
    description: str = ""
    common_uses: str = ""
    dosage_info: str = ""
    side_effects: SideEffectsModel = SideEffectsModel()
    warnings: List[str] = []
    interactions: List[str] = []
    general_safety: str = ""
    verified: bool = False
    sources: List[str] = []


@lru_cache(maxsize=1)
def get_scan_service() -> ScanService:
    """Build the scan service once per process from the environment."""
    return build_scan_service()


def _to_response(result: ScanResult) -> ScanResponse:
    return ScanResponse.model_validate(result.to_dict())


@router.post("/scan", response_model=ScanResponse)
def scan_upload(
    file: UploadFile = File(...),
    service: ScanService = Depends(get_scan_service)
):
    """
    Scan an uploaded label photo.

    Always 200 once the image is valid; an empty detection list means
    nothing was recognized or every backend failed.
    """
    image_bytes = file.file.read()

    try:
        result = service.scan_bytes(image_bytes)
    except ValidationError as e:
        logger.info(f"Rejected upload {file.filename!r}: {e.message}")
        raise HTTPException(status_code=422, detail=e.to_dict())

    return _to_response(result)


@router.post("/scan/base64", response_model=ScanResponse)
def scan_base64(
    request: Base64ScanRequest,
    service: ScanService = Depends(get_scan_service)
):
    """Scan a base64 encoded label photo."""
    try:
        result = service.scan_base64(request.image_base64)
    except ValidationError as e:
        logger.info(f"Rejected base64 image: {e.message}")
        raise HTTPException(status_code=422, detail=e.to_dict())

    return _to_response(result)


@router.get("/medicines/{medicine_name}", response_model=MedicineInfoResponse)
def select_medicine(
    medicine_name: str,
    service: ScanService = Depends(get_scan_service)
):
    """Selection event: describe the medicine behind a tapped marker."""
    try:
        info = service.select(medicine_name)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())

    return MedicineInfoResponse.model_validate(info.to_dict())


@router.get("/health")
def health(service: ScanService = Depends(get_scan_service)):
    """Liveness check with the configured fallback order."""
    return {
        "status": "healthy",
        "backends": service.pipeline.backend_names,
        "sources": service.pipeline.source_names,
    }
