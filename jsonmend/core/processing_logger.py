"""
Default processing logger backed by the standard logging module.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from .error_handling import applied_summary

logger = logging.getLogger(__name__)

# Steps that routinely fire on well-formed model output.
INSIGNIFICANT_STEPS = frozenset({"trim_whitespace", "remove_code_fences"})


def has_significant_steps(steps: Sequence[str]) -> bool:
    return any(step not in INSIGNIFICANT_STEPS for step in steps)


class LoggingProcessingLogger:
    """Reports repairs and failures through a `logging.Logger`."""

    def __init__(self, target: Optional[logging.Logger] = None):
        self.logger = target or logger

    def log_sanitization_summary(
        self,
        resource_name: str,
        steps: Sequence[str],
        diagnostics: Sequence[str],
    ) -> None:
        if not has_significant_steps(steps):
            return
        message = (
            f"Sanitized '{resource_name}' in {len(steps)} step(s). {applied_summary(steps)}"
        )
        if diagnostics:
            message += f" | Diagnostics: {' | '.join(diagnostics)}"
        self.logger.warning(message)

    def log_failure(
        self,
        resource_name: str,
        message: str,
        steps: Sequence[str],
        last_strategy: Optional[str] = None,
    ) -> None:
        details = f"Failed to process '{resource_name}': {message}"
        if steps:
            details += f" | {applied_summary(steps)}"
        if last_strategy:
            details += f" | Last strategy: {last_strategy}"
        self.logger.warning(details)


class NullProcessingLogger:
    """Discards everything; used when step logging is switched off."""

    def log_sanitization_summary(
        self,
        resource_name: str,
        steps: Sequence[str],
        diagnostics: Sequence[str],
    ) -> None:
        pass

    def log_failure(
        self,
        resource_name: str,
        message: str,
        steps: Sequence[str],
        last_strategy: Optional[str] = None,
    ) -> None:
        pass
