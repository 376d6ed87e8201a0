"""
Error types and error context helpers for JSON processing.

Only terminal failures surface as `JsonProcessingError`: non-string input,
a parsed value that fails shape validation, and exhaustion of every
strategy. Parse errors between strategies and strategy internal errors are
recorded as diagnostics instead.
"""

import json
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Kinds of terminal processing failure."""

    NOT_A_STRING_RESPONSE = "not_a_string_response"
    VALIDATION = "validation"
    EXHAUSTION = "exhaustion"


@dataclass
class ErrorContext:
    """Location of a parse failure within the text that was being parsed."""

    position: int
    line: int
    column: int
    context_text: str


class ErrorContextBuilder:
    """Builds error context information from a position in a text."""

    @staticmethod
    def build_context(
        position: int, text: str, context_length: int = 50
    ) -> ErrorContext:
        """Build error context from position and text."""
        if not text:
            return ErrorContext(
                position=position, line=1, column=position + 1, context_text=""
            )

        position = max(0, min(position, len(text)))
        line = text[:position].count("\n") + 1
        line_start = text.rfind("\n", 0, position) + 1
        column = position - line_start + 1

        start = max(0, position - context_length // 2)
        end = min(len(text), position + context_length // 2)
        return ErrorContext(
            position=position,
            line=line,
            column=column,
            context_text=text[start:end],
        )

    @staticmethod
    def describe(error: Optional[BaseException], text: str) -> str:
        """Render a parse error with line, column and surrounding text."""
        if error is None:
            return "no parse error recorded"
        if not isinstance(error, json.JSONDecodeError):
            return str(error)

        context = ErrorContextBuilder.build_context(error.pos, text)
        message = f"{error.msg} at line {context.line}, column {context.column}"
        snippet = context.context_text.strip()
        if snippet:
            message += f": {snippet}"
        return message


def applied_summary(steps: Sequence[str]) -> Optional[str]:
    """The "Applied: a, b" line for strategies that changed the text, or None."""
    if not steps:
        return None
    return f"Applied: {', '.join(steps)}"


class StrategyError(Exception):
    """Raised by a pipeline when a strategy fails and errors are not contained."""

    def __init__(self, strategy_name: str, cause: BaseException):
        self.strategy_name = strategy_name
        self.cause = cause
        super().__init__(f"strategy {strategy_name} failed: {cause}")


class JsonProcessingError(Exception):
    """Terminal failure carrying the full audit trail of a processing run."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        resource_name: str = "",
        original_text: str = "",
        sanitized_text: str = "",
        applied_steps: Sequence[str] = (),
        cause: Optional[BaseException] = None,
        last_strategy: Optional[str] = None,
        diagnostics: Sequence[str] = (),
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.resource_name = resource_name
        self.original_text = original_text
        self.sanitized_text = sanitized_text
        self.applied_steps = tuple(applied_steps)
        self.cause = cause
        self.last_strategy = last_strategy
        self.diagnostics = tuple(diagnostics)
        if cause is not None:
            self.__cause__ = cause

    @property
    def summary(self) -> Optional[str]:
        return applied_summary(self.applied_steps)

    def __str__(self) -> str:
        if not self.applied_steps:
            return self.message
        return f"{self.message} ({self.summary})"
