"""
Fallback Orchestrator

Drives the backend invoker through an ordered list of backends until one
produces a usable reply or the list is exhausted.

State machine:
    Pending(0) → Success(reply)            (terminal)
               → Pending(i + 1)            (attempt i failed)
    Pending(n) → Exhausted(last_failure)   (terminal, n = number of backends)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar, Union
import logging
import time

from .cancellation import CancellationToken
from .invoker import BackendInvoker
from ...domain.entities.scan_result import AttemptOutcome, FallbackAttempt
from ...domain.value_objects.backend_id import BackendId
from ...domain.value_objects.image_frame import ImageFrame
from ...domain.exceptions import (
    DomainException,
    BackendUnavailable,
    BackendError,
    MalformedResponse,
    AllBackendsExhausted,
    PipelineConfigurationError,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Pending:
    """Backend at ``index`` has not been attempted yet."""

    index: int


@dataclass(frozen=True)
class Success:
    """A backend produced a usable reply."""

    backend_id: BackendId
    reply: str
    value: Any


@dataclass(frozen=True)
class Exhausted:
    """Every backend failed."""

    last_failure: Optional[DomainException]


FallbackState = Union[Pending, Success, Exhausted]


@dataclass
class FallbackOutcome(Generic[T]):
    """
    Successful result of a fallback run.

    Attributes:
        backend_id: Backend whose reply was used
        reply: Raw text reply
        value: Reply after validation (the reply itself without a validator)
        attempts: Every attempt made, failed ones first
    """

    backend_id: BackendId
    reply: str
    value: T
    attempts: List[FallbackAttempt] = field(default_factory=list)


class FallbackOrchestrator:
    """
    Linear fallback over a fixed backend priority list.

    At most one attempt per backend per run, strictly sequential. A reply that
    fails validation counts as a failed attempt, exactly like an unavailable
    or erroring backend.

    Usage:
        orchestrator = FallbackOrchestrator(invoker, backend_order)
        outcome = orchestrator.run(frame, instruction, validate=decoder.decode)
    """

    def __init__(self, invoker: BackendInvoker, backend_order: Sequence[BackendId]):
        """
        Initialize the orchestrator.

        Args:
            invoker: Invoker used for every attempt
            backend_order: Backend ids, highest priority first; copied into an
                immutable tuple

        Raises:
            PipelineConfigurationError: If the order is empty or has duplicates
        """
        order = tuple(backend_order)
        if not order:
            raise PipelineConfigurationError(
                "At least one recognition backend must be configured",
                missing_components=["backend_order"],
            )
        if len(set(order)) != len(order):
            raise PipelineConfigurationError(
                f"Backend order contains duplicates: {[str(b) for b in order]}"
            )

        self._invoker = invoker
        self._backend_order: Tuple[BackendId, ...] = order
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    def backend_order(self) -> Tuple[BackendId, ...]:
        return self._backend_order

    def run(
        self,
        frame: ImageFrame,
        instruction: str,
        validate: Optional[Callable[[str], T]] = None,
        cancel_token: Optional[CancellationToken] = None
    ) -> FallbackOutcome[T]:
        """
        Try backends in priority order until one succeeds.

        Args:
            frame: Image to analyze
            instruction: Prompt text sent to every backend
            validate: Optional reply validator; raising MalformedResponse
                makes the attempt count as failed
            cancel_token: Optional token; a cancelled attempt counts as an
                unavailable backend

        Returns:
            FallbackOutcome of the first successful backend

        Raises:
            AllBackendsExhausted: If every backend failed
        """
        attempts: List[FallbackAttempt] = []
        last_failure: Optional[DomainException] = None
        state: FallbackState = Pending(index=0)

        while isinstance(state, Pending):
            if state.index >= len(self._backend_order):
                state = Exhausted(last_failure=last_failure)
                break

            backend_id = self._backend_order[state.index]
            attempt, success, failure = self._attempt(
                backend_id, frame, instruction, validate, cancel_token
            )
            attempts.append(attempt)

            if success is not None:
                state = success
            else:
                last_failure = failure
                state = Pending(index=state.index + 1)

        if isinstance(state, Exhausted):
            self.logger.error(
                f"All {len(self._backend_order)} backends failed; last failure: {state.last_failure}"
            )
            raise AllBackendsExhausted(
                last_failure=state.last_failure,
                attempted=[a.backend_id for a in attempts],
                attempts=attempts,
            )

        return FallbackOutcome(
            backend_id=state.backend_id,
            reply=state.reply,
            value=state.value,
            attempts=attempts,
        )

    def _attempt(
        self,
        backend_id: BackendId,
        frame: ImageFrame,
        instruction: str,
        validate: Optional[Callable[[str], Any]],
        cancel_token: Optional[CancellationToken]
    ) -> Tuple[FallbackAttempt, Optional[Success], Optional[DomainException]]:
        """Run a single attempt and classify its outcome."""
        start_time = time.time()

        def record(outcome: AttemptOutcome, error: Optional[DomainException] = None) -> FallbackAttempt:
            return FallbackAttempt(
                backend_id=str(backend_id),
                outcome=outcome,
                error_type=error.__class__.__name__ if error else None,
                error_message=error.message if error else None,
                duration_ms=(time.time() - start_time) * 1000,
            )

        try:
            self._check_cancelled(backend_id, cancel_token, "before start")
            reply = self._invoker.invoke(backend_id, frame, instruction)
            self._check_cancelled(backend_id, cancel_token, "while in flight")
            value = validate(reply) if validate is not None else reply

        except BackendUnavailable as e:
            outcome = AttemptOutcome.ABORTED if e.reason == "aborted" else AttemptOutcome.UNAVAILABLE
            self.logger.warning(f"Backend {backend_id} unavailable: {e.message}")
            return record(outcome, e), None, e

        except BackendError as e:
            self.logger.warning(f"Backend {backend_id} failed: {e.message}")
            return record(AttemptOutcome.ERROR, e), None, e

        except MalformedResponse as e:
            self.logger.warning(f"Backend {backend_id} returned a malformed reply: {e.message}")
            return record(AttemptOutcome.MALFORMED, e), None, e

        attempt = record(AttemptOutcome.SUCCESS)
        self.logger.info(f"Backend {backend_id} succeeded in {attempt.duration_ms:.0f}ms")
        return attempt, Success(backend_id=backend_id, reply=reply, value=value), None

    @staticmethod
    def _check_cancelled(
        backend_id: BackendId,
        cancel_token: Optional[CancellationToken],
        when: str
    ) -> None:
        if cancel_token is not None and cancel_token.is_cancelled:
            raise BackendUnavailable(
                f"Attempt aborted {when}: {cancel_token.reason}",
                backend_id=str(backend_id),
                reason="aborted",
            )
