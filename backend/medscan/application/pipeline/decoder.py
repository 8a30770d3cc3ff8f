"""
Response Decoder

Turns the raw text reply of a recognition backend into medicine candidates.
Backend replies are untrusted: they are validated against a strict schema
and rejected as a whole when they do not match.
"""

from typing import Annotated, List, Optional
import json
import logging
import re

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as SchemaValidationError

from ...domain.entities.candidate import CandidateOrigin, DecodedReply, MedicineCandidate
from ...domain.value_objects.bounding_box import BoundingBox
from ...domain.exceptions import MalformedResponse


logger = logging.getLogger(__name__)


_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*")
_FENCE_CLOSE = re.compile(r"```$")

Coordinate = Annotated[float, Field(strict=True, allow_inf_nan=False)]
Extent = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]


class BoundingBoxPayload(BaseModel):
    """Box of a detected object, percent of the image size."""

    model_config = ConfigDict(extra="ignore")

    x: Coordinate
    y: Coordinate
    width: Extent
    height: Extent


class DetectedObjectPayload(BaseModel):
    """Entry of ``detectedObjects``; only the box is used."""

    model_config = ConfigDict(extra="ignore")

    boundingBox: Optional[BoundingBoxPayload] = None


class RecognitionPayload(BaseModel):
    """Expected JSON object of a recognition reply."""

    model_config = ConfigDict(extra="ignore")

    medicineCandidates: List[StrictStr]
    detectedObjects: Optional[List[DetectedObjectPayload]] = None
    extractedText: Optional[List[StrictStr]] = None


class ResponseDecoder:
    """
    Decoder for recognition backend replies.

    Decoding is pure: the same reply always yields the same candidates.

    Usage:
        decoder = ResponseDecoder()
        reply = decoder.decode(raw_text)
        for candidate in reply.candidates:
            ...
    """

    @staticmethod
    def strip_formatting(raw_reply: str) -> str:
        """
        Remove incidental formatting around the JSON payload.

        Strips surrounding whitespace and one leading/trailing code fence
        (```` ``` ```` or ```` ```json ````).
        """
        text = raw_reply.strip()
        text = _FENCE_OPEN.sub("", text, count=1).strip()
        text = _FENCE_CLOSE.sub("", text, count=1).strip()
        return text

    def decode(self, raw_reply: str) -> DecodedReply:
        """
        Decode one raw reply.

        Args:
            raw_reply: Text returned by a backend

        Returns:
            DecodedReply with candidates in reply order; whitespace-only names
            are dropped

        Raises:
            MalformedResponse: If the reply is not a valid recognition payload
        """
        if raw_reply is None:
            raise MalformedResponse("Backend reply is empty")

        text = self.strip_formatting(raw_reply)
        if not text:
            raise MalformedResponse("Backend reply is empty", raw_reply=raw_reply)

        # JSONDecodeError is a ValueError, as are oversized integer literals;
        # deeply nested arrays exhaust the parser's recursion limit
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponse(
                f"Backend reply is not JSON: {e.msg}", raw_reply=raw_reply
            ) from e
        except (ValueError, RecursionError) as e:
            raise MalformedResponse(
                f"Backend reply could not be parsed: {e.__class__.__name__}", raw_reply=raw_reply
            ) from e

        try:
            payload = RecognitionPayload.model_validate(document)
        except SchemaValidationError as e:
            raise MalformedResponse(
                f"Backend reply does not match the recognition schema ({e.error_count()} errors)",
                raw_reply=raw_reply,
                details={"errors": [err["msg"] for err in e.errors()[:5]]},
            ) from e

        objects = payload.detectedObjects or []
        candidates: List[MedicineCandidate] = []

        for index, name in enumerate(payload.medicineCandidates):
            if not name.strip():
                logger.debug(f"Dropping blank candidate at index {index}")
                continue

            box = None
            if index < len(objects) and objects[index].boundingBox is not None:
                box = BoundingBox.from_dict(objects[index].boundingBox.model_dump())

            candidates.append(MedicineCandidate(
                name=name,
                bounding_box=box,
                origin=CandidateOrigin.AI,
            ))

        extracted_text = [line for line in (payload.extractedText or []) if line.strip()]

        logger.debug(
            f"Decoded {len(candidates)} candidates and {len(extracted_text)} text lines"
        )
        return DecodedReply(candidates=candidates, extracted_text=extracted_text)
