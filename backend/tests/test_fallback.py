"""
Tests for the backend invoker and the fallback orchestrator.
"""

import pytest

from medscan.application.pipeline.cancellation import CancellationToken
from medscan.application.pipeline.decoder import ResponseDecoder
from medscan.application.pipeline.fallback import FallbackOrchestrator
from medscan.application.pipeline.invoker import BackendInvoker
from medscan.domain.entities.scan_result import AttemptOutcome
from medscan.domain.exceptions import (
    AllBackendsExhausted,
    BackendError,
    BackendUnavailable,
    MalformedResponse,
    PipelineConfigurationError,
)
from medscan.domain.value_objects.backend_id import BackendId
from medscan.infrastructure.backends.static_backend import StaticRecognitionBackend


A = BackendId("static", "a")
B = BackendId("static", "b")
C = BackendId("static", "c")


def orchestrator_for(**scripts):
    """Orchestrator over static backends named a, b, c in that order."""
    backends = {name: StaticRecognitionBackend(script, model=name) for name, script in scripts.items()}
    invoker = BackendInvoker({BackendId("static", name): b for name, b in backends.items()})
    return FallbackOrchestrator(invoker, [BackendId("static", name) for name in backends]), backends


class TestBackendInvoker:
    """Tests for single backend invocation."""

    def test_returns_raw_reply(self, frame):
        invoker = BackendInvoker({A: StaticRecognitionBackend("hello")})

        assert invoker.invoke(A, frame, "prompt") == "hello"

    def test_unknown_backend_is_unavailable(self, frame):
        invoker = BackendInvoker({})

        with pytest.raises(BackendUnavailable) as exc_info:
            invoker.invoke(A, frame, "prompt")
        assert exc_info.value.reason == "model-not-found"

    def test_unexpected_adapter_failure_becomes_backend_error(self, frame):
        invoker = BackendInvoker({A: StaticRecognitionBackend(KeyError("choices"))})

        with pytest.raises(BackendError) as exc_info:
            invoker.invoke(A, frame, "prompt")
        assert exc_info.value.backend_id == "static:a"
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_recognition_errors_pass_through_with_backend_id(self, frame):
        invoker = BackendInvoker({A: StaticRecognitionBackend(BackendUnavailable("offline"))})

        with pytest.raises(BackendUnavailable) as exc_info:
            invoker.invoke(A, frame, "prompt")
        assert exc_info.value.backend_id == "static:a"

    def test_blank_reply_is_backend_error(self, frame):
        invoker = BackendInvoker({A: StaticRecognitionBackend("   ")})

        with pytest.raises(BackendError):
            invoker.invoke(A, frame, "prompt")

    def test_instruction_reaches_backend(self, frame):
        backend = StaticRecognitionBackend("ok")
        BackendInvoker({A: backend}).invoke(A, frame, "find the medicine")

        assert backend.calls == ["find the medicine"]


class TestFallbackOrchestrator:
    """Tests for the fallback state machine."""

    def test_first_backend_success_skips_the_rest(self, frame):
        orchestrator, backends = orchestrator_for(a="from a", b="from b")

        outcome = orchestrator.run(frame, "prompt")

        assert outcome.backend_id == A
        assert outcome.reply == "from a"
        assert backends["b"].call_count == 0
        assert [a.outcome for a in outcome.attempts] == [AttemptOutcome.SUCCESS]

    def test_advances_on_unavailable_and_error(self, frame):
        orchestrator, _ = orchestrator_for(
            a=BackendUnavailable("timeout"),
            b=BackendError("HTTP 500"),
            c="from c",
        )

        outcome = orchestrator.run(frame, "prompt")

        assert outcome.backend_id == C
        assert [a.outcome for a in outcome.attempts] == [
            AttemptOutcome.UNAVAILABLE,
            AttemptOutcome.ERROR,
            AttemptOutcome.SUCCESS,
        ]
        assert outcome.attempts[0].error_type == "BackendUnavailable"

    def test_one_attempt_per_backend(self, frame):
        orchestrator, backends = orchestrator_for(
            a=BackendUnavailable("down"),
            b=BackendUnavailable("down"),
        )

        with pytest.raises(AllBackendsExhausted):
            orchestrator.run(frame, "prompt")

        assert [backend.call_count for backend in backends.values()] == [1, 1]

    def test_exhaustion_carries_last_failure_and_attempts(self, frame):
        orchestrator, _ = orchestrator_for(
            a=BackendUnavailable("down"),
            b=BackendError("quota"),
        )

        with pytest.raises(AllBackendsExhausted) as exc_info:
            orchestrator.run(frame, "prompt")

        error = exc_info.value
        assert isinstance(error.last_failure, BackendError)
        assert error.attempted == ["static:a", "static:b"]
        assert len(error.attempts) == 2
        assert not error.is_recoverable

    def test_malformed_reply_advances_like_a_failure(self, frame, reply):
        orchestrator, _ = orchestrator_for(a="I see a box of pills.", b=reply(["Dolo 650"]))

        outcome = orchestrator.run(frame, "prompt", validate=ResponseDecoder().decode)

        assert outcome.backend_id == B
        assert [c.name for c in outcome.value.candidates] == ["Dolo 650"]
        assert outcome.attempts[0].outcome == AttemptOutcome.MALFORMED

    def test_malformed_last_reply_exhausts(self, frame):
        orchestrator, _ = orchestrator_for(a="nope")

        with pytest.raises(AllBackendsExhausted) as exc_info:
            orchestrator.run(frame, "prompt", validate=ResponseDecoder().decode)

        assert isinstance(exc_info.value.last_failure, MalformedResponse)

    def test_without_validator_value_is_reply(self, frame):
        orchestrator, _ = orchestrator_for(a="raw text")

        assert orchestrator.run(frame, "prompt").value == "raw text"

    def test_cancelled_token_aborts_every_attempt(self, frame):
        orchestrator, backends = orchestrator_for(a="from a", b="from b")
        token = CancellationToken()
        token.cancel("user closed the camera")

        with pytest.raises(AllBackendsExhausted) as exc_info:
            orchestrator.run(frame, "prompt", cancel_token=token)

        assert [a.outcome for a in exc_info.value.attempts] == [AttemptOutcome.ABORTED] * 2
        assert all(backend.call_count == 0 for backend in backends.values())

    def test_cancel_while_in_flight_discards_reply(self, frame):
        token = CancellationToken()

        class CancellingBackend(StaticRecognitionBackend):
            def recognize(self, frame, instruction):
                token.cancel()
                return super().recognize(frame, instruction)

        invoker = BackendInvoker({A: CancellingBackend("from a")})
        orchestrator = FallbackOrchestrator(invoker, [A])

        with pytest.raises(AllBackendsExhausted) as exc_info:
            orchestrator.run(frame, "prompt", cancel_token=token)

        assert exc_info.value.attempts[0].outcome == AttemptOutcome.ABORTED

    def test_order_is_frozen_at_construction(self, frame):
        order = [A, B]
        invoker = BackendInvoker({A: StaticRecognitionBackend("from a"), B: StaticRecognitionBackend("from b")})
        orchestrator = FallbackOrchestrator(invoker, order)

        order.reverse()

        assert orchestrator.backend_order == (A, B)

    def test_empty_order_is_rejected(self):
        with pytest.raises(PipelineConfigurationError):
            FallbackOrchestrator(BackendInvoker({}), [])

    def test_duplicate_order_is_rejected(self):
        with pytest.raises(PipelineConfigurationError):
            FallbackOrchestrator(BackendInvoker({}), [A, A])

    def test_unregistered_backend_in_order_is_skipped(self, frame):
        invoker = BackendInvoker({B: StaticRecognitionBackend("from b")})
        orchestrator = FallbackOrchestrator(invoker, [A, B])

        outcome = orchestrator.run(frame, "prompt")

        assert outcome.backend_id == B
        assert outcome.attempts[0].outcome == AttemptOutcome.UNAVAILABLE
