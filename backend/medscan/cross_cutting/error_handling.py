"""
Error Handling

Centralized error handling utilities.
"""

from typing import Optional
import logging
import traceback

from ..domain.exceptions import DomainException


class ErrorHandler:
    """
    Context manager for error handling.

    Usage:
        with ErrorHandler(logger, context="ocr", suppress=True) as handler:
            # do something risky
        if handler.has_error:
            # handle error
    """

    def __init__(
        self,
        logger: logging.Logger,
        context: str = "",
        suppress: bool = False,
        log_level: int = logging.ERROR
    ):
        """
        Initialize error handler.

        Args:
            logger: Logger for error messages
            context: Context string for error messages
            suppress: Whether to suppress exceptions
            log_level: Level used to log the caught exception
        """
        self.logger = logger
        self.context = context
        self.suppress = suppress
        self.log_level = log_level
        self.error: Optional[Exception] = None
        self.error_message: Optional[str] = None

    def __enter__(self) -> "ErrorHandler":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_val is None:
            return False

        # Never swallow interpreter-level signals
        if not isinstance(exc_val, Exception):
            return False

        self.error = exc_val
        self.error_message = str(exc_val)

        if self.context:
            self.logger.log(self.log_level, f"[{self.context}] {exc_val}")
        else:
            self.logger.log(self.log_level, str(exc_val))

        if isinstance(exc_val, DomainException):
            self.logger.debug(f"Details: {exc_val.details}")
        else:
            self.logger.debug(traceback.format_exc())

        return self.suppress

    @property
    def has_error(self) -> bool:
        """Check if an error occurred."""
        return self.error is not None

    @property
    def is_recoverable(self) -> bool:
        """Check if the error is recoverable."""
        if self.error is None:
            return True
        if isinstance(self.error, DomainException):
            return self.error.is_recoverable
        return False
