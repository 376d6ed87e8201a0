"""
Core interfaces and protocols for the sanitization system.

This module defines the narrow contracts the processor depends on, so that
strategies, shape validators and logging sinks can be swapped without the
processor knowing about any concrete implementation.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from .results import SanitizerOutcome


@dataclass(frozen=True)
class ValidationOutcome:
    """Two-case result of a shape check: typed data or a list of issues."""

    success: bool
    data: Any = None
    issues: Sequence[Any] = ()

    @classmethod
    def ok(cls, data: Any) -> "ValidationOutcome":
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, issues: Sequence[Any]) -> "ValidationOutcome":
        return cls(success=False, issues=tuple(issues))


class SanitizerStrategy(Protocol):
    """Protocol for one category of text repair."""

    name: str

    def sanitize(self, text: str, config: Any) -> SanitizerOutcome:
        """Repair the text. May raise on unexpected input."""
        ...

    def apply(self, text: str, config: Any) -> SanitizerOutcome:
        """Repair the text, converting internal errors into an unchanged outcome."""
        ...

    def should_apply(self, config: Any) -> bool:
        """Determine if this strategy should run given the configuration."""
        ...


class ShapeValidator(Protocol):
    """Protocol for checking that a parsed value has the expected structure."""

    def validate(self, value: Any) -> ValidationOutcome:
        """Return typed data on success or the shape violations on failure."""
        ...

    def render_issues(self, issues: Sequence[Any]) -> str:
        """Render violations as a single diagnostic string."""
        ...


class ProcessingLogger(Protocol):
    """Protocol for the observability sink fed by the processor."""

    def log_sanitization_summary(
        self,
        resource_name: str,
        steps: Sequence[str],
        diagnostics: Sequence[str],
    ) -> None:
        """Report which strategies were needed for a successful parse."""
        ...

    def log_failure(
        self,
        resource_name: str,
        message: str,
        steps: Sequence[str],
        last_strategy: Optional[str] = None,
    ) -> None:
        """Report a terminal failure."""
        ...
