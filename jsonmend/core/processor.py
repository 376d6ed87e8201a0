"""
Parse-validate loop over the sanitizer strategies.

The processor first tries the raw text. On a parse failure it applies the
strategies one at a time, re-parsing after every strategy that changed the
text, and stops at the first text that both parses and validates. A parsed
value that fails shape validation ends the run immediately, since no text
repair can fix a semantic mismatch.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any, Optional

from ..sanitizers.registry import default_strategies
from ..utils.config import ProcessingOptions, SanitizerConfig
from .error_handling import (
    ErrorContextBuilder,
    ErrorKind,
    JsonProcessingError,
    applied_summary,
)
from .interfaces import ProcessingLogger, SanitizerStrategy, ShapeValidator
from .processing_logger import LoggingProcessingLogger, NullProcessingLogger
from .results import (
    ParseAttempt,
    ParseFailure,
    ParseSuccess,
    ProcessorFailure,
    ProcessorResult,
    ProcessorSuccess,
    ValidationFailure,
)

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_json(text: str) -> Any:
    """Strict JSON parse; NaN and Infinity are rejected."""
    return json.loads(text, parse_constant=_reject_constant)


def attempt_parse(text: str, validator: Optional[ShapeValidator] = None) -> ParseAttempt:
    """Parse text and, if that succeeds, check it against the validator."""
    try:
        value = parse_json(text)
    except (ValueError, RecursionError) as e:
        return ParseFailure(e)

    if validator is None:
        return ParseSuccess(value)

    outcome = validator.validate(value)
    if outcome.success:
        return ParseSuccess(outcome.data)
    return ValidationFailure(ValueError(validator.render_issues(outcome.issues)), outcome.issues)


class JsonProcessor:
    """Turns LLM output into validated data, repairing the text as needed."""

    def __init__(
        self,
        strategies: Optional[Sequence[SanitizerStrategy]] = None,
        config: Optional[SanitizerConfig] = None,
        logger: Optional[ProcessingLogger] = None,
    ):
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.config = config or SanitizerConfig()
        self.logger = logger or LoggingProcessingLogger()

    def parse_and_validate(
        self,
        content: Any,
        resource_name: str,
        options: Optional[ProcessingOptions] = None,
    ) -> ProcessorResult:
        """
        Parse and validate content, applying repair strategies until it succeeds.

        Args:
            content: The model response; anything but a str fails immediately
            resource_name: Name of the resource being processed, used in messages
            options: Shape validator, sanitizer configuration and logging switch

        Returns:
            ProcessorSuccess with the validated data and applied steps, or
            ProcessorFailure wrapping a JsonProcessingError
        """
        if options is None:
            options = ProcessingOptions()
        config = options.sanitizer_config or self.config
        validator = options.shape_validator
        sink = self.logger if options.log_steps else NullProcessingLogger()

        if not isinstance(content, str):
            error = JsonProcessingError(
                ErrorKind.NOT_A_STRING_RESPONSE,
                f"Expected a string response for '{resource_name}', "
                f"got {type(content).__name__}",
                resource_name=resource_name,
            )
            sink.log_failure(resource_name, error.message, ())
            return ProcessorFailure(error)

        attempt = attempt_parse(content, validator)
        if isinstance(attempt, ParseSuccess):
            return ProcessorSuccess(attempt.value)
        if isinstance(attempt, ValidationFailure):
            return self._validation_failure(
                attempt, content, content, (), None, (), resource_name, sink
            )

        last_error = attempt.error
        current = content
        steps: list[str] = []
        diagnostics: list[str] = []
        last_strategy = None

        for strategy in self.strategies:
            if not strategy.should_apply(config):
                continue
            outcome = strategy.apply(current, config)
            if outcome.error:
                diagnostics.append(outcome.error)
                continue
            if not outcome.changed:
                continue

            current = outcome.content
            steps.append(strategy.name)
            last_strategy = strategy.name
            notes = outcome.repairs or ((outcome.description,) if outcome.description else ())
            diagnostics.extend(f"{strategy.name}: {note}" for note in notes)

            attempt = attempt_parse(current, validator)
            if isinstance(attempt, ParseSuccess):
                sink.log_sanitization_summary(resource_name, steps, diagnostics)
                return ProcessorSuccess(
                    attempt.value,
                    steps=tuple(steps),
                    diagnostics=" | ".join(diagnostics) or None,
                    summary=applied_summary(steps),
                )
            if isinstance(attempt, ValidationFailure):
                return self._validation_failure(
                    attempt, content, current, steps, last_strategy, diagnostics, resource_name, sink
                )
            last_error = attempt.error

        logger.debug(f"All strategies exhausted for '{resource_name}'")
        error = JsonProcessingError(
            ErrorKind.EXHAUSTION,
            f"Failed to parse '{resource_name}' after {len(steps)} sanitization step(s): "
            f"{ErrorContextBuilder.describe(last_error, current)}",
            resource_name=resource_name,
            original_text=content,
            sanitized_text=current,
            applied_steps=steps,
            cause=last_error,
            last_strategy=last_strategy,
            diagnostics=diagnostics,
        )
        sink.log_failure(resource_name, error.message, steps, last_strategy)
        return ProcessorFailure(error)

    @staticmethod
    def _validation_failure(
        attempt: ValidationFailure,
        original: str,
        current: str,
        steps: Sequence[str],
        last_strategy: Optional[str],
        diagnostics: Sequence[str],
        resource_name: str,
        sink: ProcessingLogger,
    ) -> ProcessorFailure:
        error = JsonProcessingError(
            ErrorKind.VALIDATION,
            f"Validation failed for '{resource_name}': {attempt.error}",
            resource_name=resource_name,
            original_text=original,
            sanitized_text=current,
            applied_steps=steps,
            cause=attempt.error,
            last_strategy=last_strategy,
            diagnostics=diagnostics,
        )
        sink.log_failure(resource_name, error.message, steps, last_strategy)
        return ProcessorFailure(error)


_default_processor = JsonProcessor()


def parse_and_validate(
    content: Any,
    resource_name: str,
    options: Optional[ProcessingOptions] = None,
) -> ProcessorResult:
    """Parse and validate content with a shared default processor."""
    return _default_processor.parse_and_validate(content, resource_name, options)
