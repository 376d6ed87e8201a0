"""
Result and diagnostic value objects.

Every object here is created fresh for one invocation and never mutated
afterwards, so results can be handed across threads freely.
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from .error_handling import JsonProcessingError

T = TypeVar("T")


@dataclass(frozen=True)
class SanitizerOutcome:
    """Output of a single repair strategy."""

    content: str
    changed: bool
    description: Optional[str] = None
    repairs: tuple[str, ...] = ()
    error: Optional[str] = None

    @classmethod
    def unchanged(cls, text: str) -> "SanitizerOutcome":
        return cls(content=text, changed=False)

    @classmethod
    def failed(cls, text: str, error: str) -> "SanitizerOutcome":
        return cls(content=text, changed=False, error=error)

    @classmethod
    def from_texts(
        cls,
        original: str,
        repaired: str,
        description: str,
        repairs: Union[list[str], tuple[str, ...]] = (),
    ) -> "SanitizerOutcome":
        """Build an outcome, reporting a change only if the text actually differs."""
        if repaired == original:
            return cls.unchanged(original)
        return cls(
            content=repaired,
            changed=True,
            description=description,
            repairs=tuple(repairs),
        )


@dataclass(frozen=True)
class PipelineResult:
    """Output of running an ordered list of strategies over one text."""

    content: str
    changed: bool
    description: Optional[str] = None
    diagnostics: tuple[str, ...] = ()
    applied_strategies: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParseSuccess:
    value: Any


@dataclass(frozen=True)
class ParseFailure:
    error: Exception


@dataclass(frozen=True)
class ValidationFailure:
    """A parsed value that does not have the expected shape."""

    error: Exception
    issues: Any = None


ParseAttempt = Union[ParseSuccess, ParseFailure, ValidationFailure]


@dataclass(frozen=True)
class ProcessorSuccess(Generic[T]):
    """Parsed and validated data plus the audit trail of repairs."""

    data: T
    steps: tuple[str, ...] = ()
    diagnostics: Optional[str] = None
    summary: Optional[str] = None

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class ProcessorFailure:
    """Terminal failure; the error carries everything needed to reproduce it."""

    error: JsonProcessingError

    @property
    def success(self) -> bool:
        return False


ProcessorResult = Union[ProcessorSuccess[T], ProcessorFailure]
