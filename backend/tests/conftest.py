"""
Pytest configuration and shared fixtures.
"""

import io
import json

import pytest
from PIL import Image

from medscan.application.pipeline.orchestrator import PipelineBuilder
from medscan.domain.value_objects.backend_id import BackendId
from medscan.domain.value_objects.image_frame import ImageFrame
from medscan.infrastructure.backends.static_backend import StaticRecognitionBackend


def make_reply(candidates, boxes=None, extracted_text=None, fenced=False):
    """Build a recognition reply the way a vision model writes it."""
    document = {
        "detectedObjects": [
            {"name": "Box", "type": "container", "confidence": 0.9, "boundingBox": box}
            for box in (boxes or [])
        ],
        "extractedText": extracted_text or [],
        "medicineCandidates": candidates,
    }
    text = json.dumps(document)
    return f"```json\n{text}\n```" if fenced else text


@pytest.fixture
def png_bytes():
    """A tiny, valid PNG label photo."""
    buffer = io.BytesIO()
    Image.new("RGB", (64, 48), color=(255, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def frame(png_bytes):
    return ImageFrame.from_bytes(png_bytes, width=64, height=48, format="png")


@pytest.fixture
def static_pipeline():
    """
    Factory for pipelines over static backends.

    Usage:
        pipeline, backends = static_pipeline(["reply A"], [BackendError("boom")])
    """

    def _build(*scripts, sources=()):
        builder = PipelineBuilder()
        backends = []
        for i, script in enumerate(scripts):
            backend = StaticRecognitionBackend(script, model=f"fixture-{i}")
            builder.with_backend(BackendId("static", f"fixture-{i}"), backend)
            backends.append(backend)
        for source in sources:
            builder.with_source(source)
        return builder.build(), backends

    return _build


@pytest.fixture
def reply():
    """Reply builder, see make_reply."""
    return make_reply
