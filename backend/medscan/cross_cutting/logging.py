"""
Logging Configuration

Logging for the medicine scan pipeline. Every module logs through
``logging.getLogger(__name__)`` below the ``medscan`` root; ScanLogger adds
per-scan stage timings and the fallback attempt trail.
"""

import logging
import sys
import time
from typing import Dict, Optional, Sequence

from ..config.settings import LoggingConfig
from ..domain.entities.scan_result import AttemptOutcome, FallbackAttempt


ROOT_LOGGER_NAME = "medscan"


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure the package root logger.

    Args:
        config: Level, format and optional log file; defaults to LoggingConfig()
    """
    config = config or LoggingConfig()

    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(config.format)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    # Reconfiguring (e.g. under uvicorn reload) must not duplicate output
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)


class ScanLogger:
    """
    Logger for one scan, tagged with a short request id.

    Usage:
        slog = ScanLogger(request_id)
        slog.stage_start("recognition")
        ...
        slog.stage_end("recognition")
        slog.attempts(outcome.attempts)
        slog.summary(len(detections), backend_used)
    """

    def __init__(self, request_id: str):
        self.request_id = request_id
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.scan.{request_id[:8]}")
        self.timings: Dict[str, float] = {}
        self._started: Dict[str, float] = {}

    def stage_start(self, stage_name: str) -> None:
        self._started[stage_name] = time.perf_counter()
        self.logger.debug(f"Stage '{stage_name}' started")

    def stage_end(self, stage_name: str, success: bool = True) -> float:
        """Record the stage duration in milliseconds and return it."""
        started = self._started.pop(stage_name, None)
        duration = (time.perf_counter() - started) * 1000 if started is not None else 0.0
        self.timings[stage_name] = duration

        if success:
            self.logger.debug(f"Stage '{stage_name}' completed in {duration:.2f}ms")
        else:
            self.logger.warning(f"Stage '{stage_name}' failed after {duration:.2f}ms")
        return duration

    def attempts(self, attempts: Sequence[FallbackAttempt]) -> None:
        """Log the fallback trail, one line per backend attempt."""
        for position, attempt in enumerate(attempts, start=1):
            if attempt.outcome is AttemptOutcome.SUCCESS:
                self.logger.info(
                    f"Attempt {position} {attempt.backend_id}: success "
                    f"({attempt.duration_ms:.0f}ms)"
                )
            else:
                self.logger.warning(
                    f"Attempt {position} {attempt.backend_id}: {attempt.outcome.value} "
                    f"[{attempt.error_type}] {attempt.error_message} "
                    f"({attempt.duration_ms:.0f}ms)"
                )

    def summary(self, detection_count: int, backend_used: Optional[str]) -> None:
        """Log the scan outcome with every recorded stage timing."""
        stages = ", ".join(f"{name}={ms:.0f}ms" for name, ms in self.timings.items())
        if backend_used is None:
            self.logger.warning(f"Scan produced no detections, every backend failed ({stages})")
        else:
            self.logger.info(
                f"Scan produced {detection_count} detections via {backend_used} ({stages})"
            )
