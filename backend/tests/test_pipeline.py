"""
Tests for the detection pipeline and its builder.
"""

import sys

import pytest

from medscan.application.pipeline.cancellation import CancellationToken
from medscan.application.pipeline.merge import CandidateMergeEngine
from medscan.application.pipeline.orchestrator import PipelineBuilder
from medscan.domain.entities.candidate import CandidateOrigin, MedicineCandidate
from medscan.domain.entities.scan_result import AttemptOutcome
from medscan.domain.exceptions import BackendError, BackendUnavailable, PipelineConfigurationError
from medscan.domain.ports.candidate_source import CandidateSourcePort
from medscan.domain.value_objects.backend_id import BackendId
from medscan.infrastructure.backends.static_backend import StaticRecognitionBackend
from medscan.infrastructure.sources.extracted_text_source import ExtractedTextKeywordSource


class FixedSource(CandidateSourcePort):
    """Source returning a fixed candidate list."""

    def __init__(self, names, origin=CandidateOrigin.OCR):
        self._candidates = [MedicineCandidate(n, origin=origin) for n in names]

    @property
    def source_name(self):
        return "fixed"

    def collect(self, frame, reply):
        return list(self._candidates)


class BrokenSource(CandidateSourcePort):
    """Source that always fails."""

    @property
    def source_name(self):
        return "broken"

    def collect(self, frame, reply):
        raise RuntimeError("tesseract crashed")


def test_successful_scan(frame, reply, static_pipeline):
    pipeline, _ = static_pipeline(reply(["Dolo 650", "dolo 650", "Augmentin 625"]))

    result = pipeline.run(frame)

    assert result.detections.names == ["Dolo 650", "Augmentin 625"]
    assert result.backend_used == "static:fixture-0"
    assert not result.exhausted
    assert result.request_id


def test_fallback_result_equals_merge_of_successful_backend(frame, reply, static_pipeline):
    pipeline, _ = static_pipeline(BackendUnavailable("no network"), reply(["Dolo 650"]))

    result = pipeline.run(frame)

    expected = CandidateMergeEngine().merge([MedicineCandidate("Dolo 650")])
    assert result.detections.contents() == expected.contents()
    assert result.backend_used == "static:fixture-1"
    assert [a.outcome for a in result.attempts] == [AttemptOutcome.UNAVAILABLE, AttemptOutcome.SUCCESS]


def test_all_backends_failing_gives_empty_set(frame, static_pipeline):
    pipeline, _ = static_pipeline(
        BackendUnavailable("timeout"),
        BackendError("HTTP 500"),
        "not json",
    )

    result = pipeline.run(frame)

    assert result.detections.is_empty
    assert result.backend_used is None
    assert result.exhausted
    assert len(result.attempts) == 3


def test_cancelled_scan_gives_empty_set(frame, reply, static_pipeline):
    pipeline, backends = static_pipeline(reply(["Dolo 650"]))
    token = CancellationToken()
    token.cancel()

    result = pipeline.run(frame, cancel_token=token)

    assert result.detections.is_empty
    assert backends[0].call_count == 0


def test_box_positions_reach_detections(frame, reply, static_pipeline):
    pipeline, _ = static_pipeline(
        reply(["Dolo 650"], boxes=[{"x": 40, "y": 20, "width": 10, "height": 10}])
    )

    detection = pipeline.run(frame).detections[0]

    assert (detection.position.x, detection.position.y) == (45.0, 25.0)
    assert detection.confidence == 0.95


def test_sources_merge_after_backend_candidates(frame, reply, static_pipeline):
    pipeline, _ = static_pipeline(
        reply(["Crocin"], extracted_text=["Paracetamol Tablets IP 500mg"]),
        sources=[FixedSource(["Ibuprofen", "crocin"]), ExtractedTextKeywordSource()],
    )

    result = pipeline.run(frame)

    assert result.detections.names == ["Crocin", "Ibuprofen", "Paracetamol"]
    assert [d.confidence for d in result.detections] == [0.95, 0.80, 0.85]


def test_failing_source_does_not_fail_the_scan(frame, reply, static_pipeline):
    pipeline, _ = static_pipeline(
        reply(["Crocin"]),
        sources=[BrokenSource(), FixedSource(["Ibuprofen"])],
    )

    result = pipeline.run(frame)

    assert result.detections.names == ["Crocin", "Ibuprofen"]


def test_sources_do_not_run_when_exhausted(frame, static_pipeline):
    pipeline, _ = static_pipeline(BackendError("boom"), sources=[FixedSource(["Ibuprofen"])])

    assert pipeline.run(frame).detections.is_empty


def test_result_serializes(frame, reply, static_pipeline):
    pipeline, _ = static_pipeline(BackendError("boom"), reply(["Dolo 650"]))

    data = pipeline.run(frame).to_dict()

    assert data["detections"][0]["name"] == "Dolo 650"
    assert data["attempts"][0]["outcome"] == "error"
    assert data["backend_used"] == "static:fixture-1"


def test_unparseable_reply_falls_back(frame, reply, static_pipeline):
    pipeline, _ = static_pipeline("[" * 100000, reply(["Dolo 650"]))

    result = pipeline.run(frame)

    assert result.detections.names == ["Dolo 650"]
    assert [a.outcome for a in result.attempts] == [AttemptOutcome.MALFORMED, AttemptOutcome.SUCCESS]


@pytest.mark.parametrize("raw", [
    "[" * 100000,
    pytest.param(
        '{"medicineCandidates": ["Dolo 650"], "n": ' + "9" * 5000 + "}",
        marks=pytest.mark.skipif(
            getattr(sys, "get_int_max_str_digits", lambda: 0)() == 0,
            reason="interpreter parses integers of any length",
        ),
    ),
])
def test_unparseable_reply_gives_empty_set(frame, static_pipeline, raw):
    pipeline, _ = static_pipeline(raw)

    result = pipeline.run(frame)

    assert result.detections.is_empty
    assert result.exhausted
    assert result.attempts[0].error_type == "MalformedResponse"


class TestPipelineBuilder:
    """Tests for pipeline construction."""

    def test_build_without_backend_fails(self):
        with pytest.raises(PipelineConfigurationError):
            PipelineBuilder().build()

    def test_duplicate_backend_fails(self):
        builder = PipelineBuilder().with_backend(BackendId("static", "a"), StaticRecognitionBackend())

        with pytest.raises(PipelineConfigurationError):
            builder.with_backend(BackendId("static", "a"), StaticRecognitionBackend())

    def test_backend_order_is_insertion_order(self):
        pipeline = (
            PipelineBuilder()
            .with_backend(BackendId("static", "second"), StaticRecognitionBackend())
            .with_backend(BackendId("static", "first"), StaticRecognitionBackend())
            .build()
        )

        assert pipeline.backend_names == ["static:second", "static:first"]

    def test_custom_instruction_is_sent(self, frame):
        backend = StaticRecognitionBackend('{"medicineCandidates": []}')
        pipeline = (
            PipelineBuilder()
            .with_backend(BackendId("static", "a"), backend)
            .with_instruction("list medicines as JSON")
            .build()
        )

        pipeline.run(frame)

        assert backend.calls == ["list medicines as JSON"]
